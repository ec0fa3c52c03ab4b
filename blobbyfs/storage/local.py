"""Local filesystem storage backend."""

import hashlib
import logging
import os
import shutil
import time
from datetime import datetime
from pathlib import Path
from typing import Iterator

from blobbyfs import keys
from blobbyfs.config import StorageConfig
from blobbyfs.errors import InvalidKeyError, NotADirError, NotAFileError, NotFoundError
from blobbyfs.listing import deep_list, list_children
from blobbyfs.listing.entries import mtime_of
from blobbyfs.models import FileEntry, ListingPage, ObjectHeaders, ObjectInfo

logger = logging.getLogger(__name__)


def compute_etag(data: bytes) -> str:
    """Content hash used as the ETag of an object."""
    return hashlib.md5(data).hexdigest()


class FileSystemStorage:
    """Storage backend mapping keys onto files below a base directory."""

    def __init__(self, base_path: str | Path | None, create_base: bool = True, put_retries: int = 1):
        if not base_path:
            raise ValueError("FileSystemStorage requires a base_path")

        self.base_path = Path(base_path)
        if create_base:
            self.base_path.mkdir(parents=True, exist_ok=True)
        self.put_retries = put_retries
        self.name = f"local filesystem ({self.base_path.absolute()})"

    @classmethod
    def from_config(cls, config: StorageConfig) -> "FileSystemStorage":
        """Create a storage client from validated configuration."""
        config.validate()
        return cls(config.base_path, create_base=config.create_base)

    def _resolve(self, key: str) -> Path:
        """Resolve a key to a full path."""
        key = keys.normalize(key)
        return self.base_path / key if key else self.base_path

    def _stat_file(self, key: str, path: Path) -> os.stat_result:
        try:
            stats = path.stat()
        except FileNotFoundError as e:
            raise NotFoundError(f"Key not found: {key!r}") from e
        except NotADirectoryError as e:
            # A parent component is a file
            raise NotFoundError(f"Key not found: {key!r}") from e

        if not path.is_file():
            raise NotAFileError(f"Requested key is not a file: {key!r}")
        return stats

    def stat(self, key: str) -> ObjectInfo:
        """Return modification time and size of a stored object."""
        stats = self._stat_file(key, self._resolve(key))
        return ObjectInfo(last_modified=mtime_of(stats), size=stats.st_size)

    def get(self, key: str) -> tuple[ObjectHeaders, bytes]:
        """Load an object. Returns its headers and content."""
        path = self._resolve(key)
        self._stat_file(key, path)
        data = path.read_bytes()
        stats = path.stat()

        headers = ObjectHeaders(
            etag=compute_etag(data),
            last_modified=mtime_of(stats),
            size=stats.st_size,
        )
        return headers, data

    def put(self, key: str, data: bytes, last_modified: datetime | None = None) -> ObjectHeaders:
        """Store content at key, creating parent directories on demand.

        If last_modified is given, it is forced onto the stored file so that
        synced copies keep the source's modification time.
        """
        path = self._resolve(key)
        if path == self.base_path:
            raise NotAFileError("Cannot store an object at the storage root")

        for attempt in range(self.put_retries + 1):
            try:
                path.write_bytes(data)
                break
            except FileNotFoundError:
                if attempt >= self.put_retries:
                    raise
                logger.debug("Creating parent directories for %s", key)
                path.parent.mkdir(parents=True, exist_ok=True)

        if last_modified is not None:
            os.utime(path, (time.time(), last_modified.timestamp()))

        stats = path.stat()
        logger.info("Stored %s (%d bytes)", key, stats.st_size)
        return ObjectHeaders(
            etag=compute_etag(data),
            last_modified=mtime_of(stats),
            size=stats.st_size,
        )

    def delete(self, key: str) -> None:
        """Delete one object."""
        path = self._resolve(key)
        self._stat_file(key, path)
        path.unlink()
        logger.info("Deleted %s", key)

    def delete_subtree(self, dir_key: str) -> None:
        """Delete a directory and everything below it."""
        path = self._resolve(dir_key)
        if path == self.base_path:
            raise InvalidKeyError("Cannot delete the storage root")
        if not path.exists():
            raise NotFoundError(f"Directory not found: {dir_key!r}")
        if not path.is_dir():
            raise NotADirError(f"Not a directory: {dir_key!r}")

        shutil.rmtree(path)
        logger.info("Deleted directory %s", dir_key)

    def list(
        self,
        dir_key: str = "",
        last_key: str | None = None,
        max_keys: int | None = None,
        deep_query: bool = False,
    ) -> ListingPage:
        """List a directory.

        A shallow query returns the files and subdirectories of dir_key. A deep
        query returns the files of one directory of the subtree per call,
        together with the cursor to pass as last_key for the next page.
        max_keys is accepted for interface compatibility and ignored.
        """
        dir_key = keys.normalize(dir_key)
        if not deep_query:
            return list_children(self.base_path, dir_key)

        return deep_list(self.base_path, dir_key, last_key)

    def walk(self, dir_key: str = "") -> Iterator[FileEntry]:
        """Yield every file below dir_key, following deep listing cursors."""
        cursor = None
        while True:
            page = self.list(dir_key, last_key=cursor, deep_query=True)
            yield from page.files

            if page.next_cursor is None:
                break
            cursor = page.next_cursor

    def list_keys(self, prefix: str = "") -> Iterator[str]:
        """List all keys with the given prefix."""
        search_path = self._resolve(prefix)

        if search_path.is_file():
            yield keys.normalize(prefix)
            return

        if not search_path.exists():
            return

        for entry in self.walk(prefix):
            yield entry.key

    def exists(self, key: str) -> bool:
        """Check if an object exists."""
        return self._resolve(key).is_file()
