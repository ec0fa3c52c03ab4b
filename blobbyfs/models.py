"""Records returned by the storage client."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class FileEntry:
    """A listed file."""

    key: str
    last_modified: datetime
    size: int


@dataclass(frozen=True)
class DirEntry:
    """A listed subdirectory."""

    key: str


@dataclass
class ListingPage:
    """Result of one list call.

    Shallow listings fill both ``files`` and ``dirs`` for the queried
    directory. Deep listings only return files and carry ``next_cursor``
    until the walk is complete.
    """

    files: list[FileEntry] = field(default_factory=list)
    dirs: list[DirEntry] = field(default_factory=list)
    next_cursor: str | None = None


@dataclass(frozen=True)
class ObjectInfo:
    """Metadata of a stored object."""

    last_modified: datetime
    size: int


@dataclass(frozen=True)
class ObjectHeaders:
    """Headers returned by get and put."""

    etag: str
    last_modified: datetime
    size: int
