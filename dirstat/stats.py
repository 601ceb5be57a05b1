from dataclasses import dataclass, field
from operator import attrgetter
from typing import Optional


NO_EXTENSION = "no extension"


@dataclass(slots=True)
class ExtensionSize:
    label: str
    size: int


@dataclass(slots=True)
class DirectoryStatistics:
    """
    Aggregate record filled in by a single statistics walk.

    extension_limit and inaccessible_limit cap the number of distinct
    extensions and inaccessible paths kept. None means unbounded. Anything
    arriving once a cap has been reached is dropped, only the dropped_*
    counters remember it.
    """
    extension_limit: Optional[int] = None
    inaccessible_limit: Optional[int] = None
    total_size: int = 0
    file_count: int = 0
    directory_count: int = 0
    largest_file_size: int = 0
    largest_file_name: str = ""
    extension_sizes: list[ExtensionSize] = field(default_factory=list)
    inaccessible_paths: list[str] = field(default_factory=list)
    dropped_extension_size: int = 0
    dropped_inaccessible_count: int = 0

    def __post_init__(self):
        for name in ("extension_limit", "inaccessible_limit"):
            if (getattr(self, name) or 0) < 0:
                raise ValueError(f"Negative values for {name} make no sense")

    @property
    def extension_count(self) -> int:
        return len(self.extension_sizes)

    @property
    def inaccessible_count(self) -> int:
        return len(self.inaccessible_paths)

    def record_file(self, size:int, absolute_path:str):
        self.file_count += 1
        self.total_size += size
        # strictly greater - the first file to reach a maximum keeps it
        if size > self.largest_file_size:
            self.largest_file_size = size
            self.largest_file_name = absolute_path

    def record_directory(self):
        self.directory_count += 1

    def add_extension_size(self, label:str, size:int):
        for extension_size in self.extension_sizes:
            if extension_size.label == label:
                extension_size.size += size
                return

        if self.extension_limit is None or self.extension_count < self.extension_limit:
            self.extension_sizes.append(ExtensionSize(label, size))
        else:
            self.dropped_extension_size += size

    def add_inaccessible_path(self, path:str):
        if self.inaccessible_limit is None or self.inaccessible_count < self.inaccessible_limit:
            self.inaccessible_paths.append(path)
        else:
            self.dropped_inaccessible_count += 1

    def sort_extensions_by_size(self):
        self.extension_sizes.sort(key=attrgetter("size"))
