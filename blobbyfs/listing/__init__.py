"""Shallow and deep directory listing."""

from blobbyfs.listing.cursor import Cursor, Direction, decode_cursor, encode_cursor
from blobbyfs.listing.entries import ListFilter, list_children, sort_by_key
from blobbyfs.listing.traversal import deep_list

__all__ = [
    "Cursor",
    "Direction",
    "ListFilter",
    "decode_cursor",
    "deep_list",
    "encode_cursor",
    "list_children",
    "sort_by_key",
]
