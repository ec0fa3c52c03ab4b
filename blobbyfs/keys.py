"""Key helpers.

Keys are ``/``-separated strings relative to the storage base path. The root
of the namespace is the empty key ``""``.
"""

import posixpath

from blobbyfs.errors import InvalidKeyError

ROOT = ""


def normalize(key: str) -> str:
    """Normalize a key: drop surrounding slashes and ``.`` segments.

    Raises InvalidKeyError if the key climbs above the root.
    """
    stripped = key.strip("/")
    if not stripped:
        return ROOT

    normalized = posixpath.normpath(stripped)
    if normalized == ".":
        return ROOT
    if normalized == ".." or normalized.startswith("../"):
        raise InvalidKeyError(f"Key escapes the storage root: {key!r}")
    return normalized


def join(dir_key: str, name: str) -> str:
    """Join a directory key and a child name."""
    if not dir_key:
        return name
    return f"{dir_key}/{name}"


def parent(key: str) -> str:
    """Parent directory of a key (the root is its own parent)."""
    return posixpath.dirname(key)


def basename(key: str) -> str:
    """Last segment of a key."""
    return posixpath.basename(key)


def is_within(key: str, dir_key: str) -> bool:
    """Check if key is dir_key itself or lies below it."""
    if not dir_key:
        return True
    return key == dir_key or key.startswith(dir_key + "/")
