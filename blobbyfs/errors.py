"""Exceptions raised by the filesystem storage client."""


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Key or directory does not exist."""
    pass


class NotAFileError(StorageError):
    """Key exists but is not a regular file."""
    pass


class NotADirError(StorageError):
    """Key was expected to be a directory but is a file."""
    pass


class InvalidKeyError(StorageError):
    """Key resolves outside the storage base path."""
    pass


class MalformedCursorError(StorageError):
    """Listing cursor could not be decoded."""
    pass
