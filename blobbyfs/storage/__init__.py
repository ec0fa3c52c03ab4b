"""Storage backend implementations."""

from blobbyfs.storage.base import StorageBackend
from blobbyfs.storage.local import FileSystemStorage, compute_etag

__all__ = ["StorageBackend", "FileSystemStorage", "compute_etag"]
