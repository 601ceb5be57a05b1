from dataclasses import dataclass
import logging
from os import access, remove, rmdir, scandir, DirEntry, R_OK
from os.path import abspath, exists, isdir
from typing import Callable, Optional

from dirstat.stats import DirectoryStatistics, NO_EXTENSION


logger = logging.getLogger(__name__)

Sink = Callable[[str], None]

# (anything removed anywhere below, this entry itself removed)
PruneTuple = tuple[bool, bool]


class DirstatError(Exception): pass


class InvalidPathError(DirstatError, ValueError): pass


class AccessDeniedError(DirstatError, PermissionError): pass


@dataclass(slots=True)
class EntryOutcome:
    path: str
    size: int = 0
    error: Optional[OSError] = None

    @property
    def skipped(self) -> bool:
        return self.error is not None


def extension_of(file_name:str) -> str:
    i = file_name.rfind(".")
    if i == -1 or i == len(file_name) - 1:
        return NO_EXTENSION
    return file_name[i+1:]


def count_occurrences(line:str, word:str) -> int:
    # overlapping matches count individually, "aa" occurs twice in "aaa"
    count = 0
    index = line.find(word)
    while index != -1:
        count += 1
        index = line.find(word, index + 1)
    return count


def validate_directory(path:str) -> str:
    if not path or not exists(path) or not isdir(path):
        raise InvalidPathError(f"Invalid directory {path!r}")
    if not access(path, R_OK):
        raise AccessDeniedError(f"Cannot read directory {path!r}")
    return abspath(path)


def _list_directory(path:str) -> list[DirEntry]:
    with scandir(path) as it:
        return list(it)


def _direntry_is_dir(direntry:DirEntry) -> bool:
    # links are never followed, a link to a directory is a terminal entry
    return direntry.is_dir(follow_symlinks=False)


def _direntry_is_file(direntry:DirEntry) -> bool:
    # regular files and links, never fifos, sockets or device nodes
    return direntry.is_file(follow_symlinks=False) or direntry.is_symlink()


def _direntry_stat_agg(direntry:DirEntry, stats:DirectoryStatistics) -> EntryOutcome:
    try:
        if _direntry_is_dir(direntry):
            return EntryOutcome(direntry.path, _dir_stat_agg(direntry.path, stats))
        if not _direntry_is_file(direntry):
            logger.debug("ignoring special file %s", direntry.path)
            return EntryOutcome(direntry.path)

        size = direntry.stat(follow_symlinks=False).st_size
    except OSError as e:
        return EntryOutcome(direntry.path, error=e)

    stats.record_file(size, direntry.path)
    stats.add_extension_size(extension_of(direntry.name), size)
    return EntryOutcome(direntry.path, size)


def _dir_stat_agg(path:str, stats:DirectoryStatistics) -> int:
    stats.record_directory()
    subtotal = 0
    for outcome in (_direntry_stat_agg(d, stats) for d in _list_directory(path)):
        if outcome.skipped:
            logger.debug(
                "skipping inaccessible path %(path)s: %(error)s",
                {"path": outcome.path, "error": outcome.error},
            )
            stats.add_inaccessible_path(outcome.path)
        else:
            # only used for the parent's sum, total_size already has the
            # leaf sizes
            subtotal += outcome.size
    return subtotal


def compute_statistics(
    path:str,
    stats:Optional[DirectoryStatistics]=None,
    extension_limit:Optional[int]=None,
    inaccessible_limit:Optional[int]=None,
) -> DirectoryStatistics:
    if stats is not None and (extension_limit, inaccessible_limit) != (None, None):
        raise ValueError("Limits can only be given when no stats object is passed in")

    root = validate_directory(path)
    if stats is None:
        stats = DirectoryStatistics(
            extension_limit=extension_limit,
            inaccessible_limit=inaccessible_limit,
        )

    try:
        _dir_stat_agg(root, stats)
    except OSError as e:
        raise AccessDeniedError(f"Cannot read directory {root!r}: {e}") from e

    return stats


def _find_file_recursive(path:str, file_name:str, sink:Sink) -> bool:
    found = False
    try:
        entries = _list_directory(path)
    except OSError as e:
        logger.debug("unable to list %(path)s: %(error)s", {"path": path, "error": e})
        return False

    for direntry in entries:
        if _direntry_is_dir(direntry):
            found |= _find_file_recursive(direntry.path, file_name, sink)
        elif direntry.name == file_name and _direntry_is_file(direntry):
            sink(direntry.path)
            found = True
    return found


def find_file(path:str, file_name:str, sink:Sink=print) -> bool:
    return _find_file_recursive(validate_directory(path), file_name, sink)


def _file_word_count(path:str, word:str) -> int:
    count = 0
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            for line in f:
                if line.endswith("\n"):
                    line = line[:-1]
                count += count_occurrences(line, word)
    except OSError as e:
        logger.debug("unable to read %(path)s: %(error)s", {"path": path, "error": e})
        return 0
    return count


def _direntry_is_text_candidate(direntry:DirEntry) -> bool:
    # follows links, but only to regular files - opening a fifo would block
    try:
        return direntry.is_file()
    except OSError:
        return False


def _find_word_recursive(path:str, word:str, sink:Sink) -> bool:
    found = False
    try:
        entries = _list_directory(path)
    except OSError as e:
        logger.debug("unable to list %(path)s: %(error)s", {"path": path, "error": e})
        return False

    for direntry in entries:
        if _direntry_is_dir(direntry):
            found |= _find_word_recursive(direntry.path, word, sink)
            continue

        if not _direntry_is_text_candidate(direntry):
            logger.debug("not scanning %s, not a regular file", direntry.path)
            continue

        count = _file_word_count(direntry.path, word)
        if count:
            sink(f"{direntry.name}: {count}")
            found = True
    return found


def find_word(path:str, word:str, sink:Sink=print) -> bool:
    if not word:
        raise ValueError("Searching for an empty word makes no sense")
    return _find_word_recursive(validate_directory(path), word, sink)


def _remove(remover:Callable[[str], None], path:str) -> bool:
    try:
        remover(path)
    except OSError as e:
        logger.debug("unable to remove %(path)s: %(error)s", {"path": path, "error": e})
        return False
    return True


def _is_empty_dir(path:str) -> bool:
    try:
        with scandir(path) as it:
            return next(it, None) is None
    except OSError:
        return False


def _prune_file(direntry:DirEntry, sink:Sink, dry_run:bool) -> PruneTuple:
    try:
        size = direntry.stat(follow_symlinks=False).st_size
    except OSError as e:
        logger.debug("unable to stat %(path)s: %(error)s", {"path": direntry.path, "error": e})
        return False, False

    if size != 0:
        return False, False

    if dry_run:
        sink(f"Would delete empty file: {direntry.path}")
        return True, True

    if _remove(remove, direntry.path):
        sink(f"Deleted empty file: {direntry.path}")
        return True, True
    return False, False


def _prune_dir(path:str, sink:Sink, dry_run:bool) -> PruneTuple:
    try:
        entries = _list_directory(path)
    except OSError as e:
        logger.debug("unable to list %(path)s: %(error)s", {"path": path, "error": e})
        return False, False

    removed_any = False
    remaining = 0
    for direntry in entries:
        if _direntry_is_dir(direntry):
            child_removed_any, child_removed = _prune_dir(direntry.path, sink, dry_run)
        elif direntry.is_file(follow_symlinks=False):
            child_removed_any, child_removed = _prune_file(direntry, sink, dry_run)
        else:
            # links and special files are never removed and keep their parent
            child_removed_any, child_removed = False, False
        removed_any |= child_removed_any
        if not child_removed:
            remaining += 1

    if dry_run:
        if remaining == 0:
            sink(f"Would delete empty folder: {path}")
            return True, True
        return removed_any, False

    if _is_empty_dir(path) and _remove(rmdir, path):
        sink(f"Deleted empty folder: {path}")
        return True, True
    return removed_any, False


def prune_empty(path:str, sink:Sink=print, dry_run:bool=False) -> bool:
    removed_any, _ = _prune_dir(validate_directory(path), sink, dry_run)
    return removed_any
