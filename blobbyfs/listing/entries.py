"""Single-directory listing used by both shallow and deep queries."""

import logging
import os
import stat
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from blobbyfs import keys
from blobbyfs.errors import NotADirError, NotFoundError
from blobbyfs.models import DirEntry, FileEntry, ListingPage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListFilter:
    """Filter applied while reading a directory.

    Children whose name is <= ``lower_bound_name`` are skipped before they are
    stat'ed. A resumed deep listing relies on this to never return an entry
    twice.
    """

    lower_bound_name: str = ""
    suppress_files: bool = False


def sort_by_key(entries):
    """Sort listing entries ascending by key."""
    return sorted(entries, key=lambda entry: entry.key)


def mtime_of(stats: os.stat_result) -> datetime:
    """Modification time of a stat result as an aware UTC datetime."""
    return datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc)


def list_children(
    root: Path, dir_key: str, list_filter: ListFilter = ListFilter()
) -> ListingPage:
    """List the immediate children of dir_key below root.

    Returns a page with files and dirs sorted by key. Raises NotFoundError if
    the directory is missing and NotADirError if it is a file.
    """
    dir_path = root / dir_key if dir_key else root

    try:
        names = os.listdir(dir_path)
    except FileNotFoundError as e:
        raise NotFoundError(f"Directory not found: {dir_key!r}") from e
    except NotADirectoryError as e:
        raise NotADirError(f"Not a directory: {dir_key!r}") from e

    files = []
    dirs = []
    for name in names:
        if name <= list_filter.lower_bound_name:
            continue

        key = keys.join(dir_key, name)
        try:
            stats = os.stat(dir_path / name)
        except FileNotFoundError:
            # Removed since the directory was read
            logger.debug("Skipping vanished entry %s", key)
            continue

        if stat.S_ISDIR(stats.st_mode):
            dirs.append(DirEntry(key=key))
        elif not list_filter.suppress_files:
            files.append(FileEntry(key=key, last_modified=mtime_of(stats), size=stats.st_size))

    return ListingPage(files=sort_by_key(files), dirs=sort_by_key(dirs))
