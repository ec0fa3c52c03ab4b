"""Storage backend protocol definition."""

from datetime import datetime
from typing import Iterator, Protocol

from blobbyfs.models import ListingPage, ObjectHeaders, ObjectInfo


class StorageBackend(Protocol):
    """Protocol for key/value storage backends."""

    name: str

    def stat(self, key: str) -> ObjectInfo:
        """Return metadata for the object at key."""
        ...

    def get(self, key: str) -> tuple[ObjectHeaders, bytes]:
        """Load an object and its headers."""
        ...

    def put(
        self, key: str, data: bytes, last_modified: datetime | None = None
    ) -> ObjectHeaders:
        """Store data at key and return the resulting headers."""
        ...

    def delete(self, key: str) -> None:
        """Remove one object."""
        ...

    def delete_subtree(self, dir_key: str) -> None:
        """Remove a directory and everything below it."""
        ...

    def list(
        self,
        dir_key: str = "",
        last_key: str | None = None,
        max_keys: int | None = None,
        deep_query: bool = False,
    ) -> ListingPage:
        """List a directory, or one page of a deep listing."""
        ...

    def list_keys(self, prefix: str = "") -> Iterator[str]:
        """List all keys with the given prefix."""
        ...
