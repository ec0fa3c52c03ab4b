"""Filesystem storage client with resumable deep listing."""

from blobbyfs.config import Config, StorageConfig
from blobbyfs.errors import (
    InvalidKeyError,
    MalformedCursorError,
    NotADirError,
    NotAFileError,
    NotFoundError,
    StorageError,
)
from blobbyfs.models import DirEntry, FileEntry, ListingPage, ObjectHeaders, ObjectInfo
from blobbyfs.storage import FileSystemStorage

__version__ = "0.1.0"

__all__ = [
    "Config",
    "DirEntry",
    "FileEntry",
    "FileSystemStorage",
    "InvalidKeyError",
    "ListingPage",
    "MalformedCursorError",
    "NotADirError",
    "NotAFileError",
    "NotFoundError",
    "ObjectHeaders",
    "ObjectInfo",
    "StorageConfig",
    "StorageError",
]
