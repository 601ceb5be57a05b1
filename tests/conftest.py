import os

import pytest


def _build_tree(base, layout):
    for name, content in layout.items():
        path = base / name
        if isinstance(content, dict):
            path.mkdir()
            _build_tree(path, content)
        elif isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")


@pytest.fixture
def make_tree(tmp_path):
    """
    Build a directory tree under tmp_path from a nested dict - dict values
    are directories, str/bytes values are file contents. Returns the root
    as a str.
    """
    def _make_tree(layout, root_name="root"):
        root = tmp_path / root_name
        root.mkdir()
        _build_tree(root, layout)
        return str(root)

    return _make_tree


@pytest.fixture
def deny_scandir(monkeypatch):
    """
    Make dirstat's scandir raise PermissionError for any directory whose
    base name is in the given set. chmod can't be relied upon as tests may
    well run as root.
    """
    import dirstat.fs

    def _deny_scandir(*names):
        real_scandir = os.scandir

        def fake_scandir(path):
            if os.path.basename(path) in names:
                raise PermissionError(13, "Permission denied", path)
            return real_scandir(path)

        monkeypatch.setattr(dirstat.fs, "scandir", fake_scandir)

    return _deny_scandir
