"""Resumable depth-first listing of a directory tree.

Each call lists exactly one directory and returns the cursor for the next
one. The walk descends into the first subdirectory of every directory it
lists; once a directory has no subdirectories left it backtracks to the parent
and rescans it for siblings after the one just finished. No state is kept
between calls.
"""

import logging
from pathlib import Path

from blobbyfs import keys
from blobbyfs.errors import InvalidKeyError, MalformedCursorError
from blobbyfs.listing.cursor import Cursor, Direction, decode_cursor, encode_cursor
from blobbyfs.listing.entries import ListFilter, list_children
from blobbyfs.models import ListingPage

logger = logging.getLogger(__name__)


def deep_list(root: Path, start_key: str, last_key: str | None = None) -> ListingPage:
    """Return one page of a deep listing of start_key.

    Pass the ``next_cursor`` of the previous page as ``last_key`` to continue.
    The listing is complete when the returned page has no ``next_cursor``.
    """
    if not last_key:
        page = list_children(root, start_key)
        next_cursor = _descend_or_none(start_key, page)
        logger.debug("Deep list init %r -> %s", start_key, next_cursor)
        return _page(page, next_cursor)

    cursor = decode_cursor(last_key)
    _check_target(cursor, start_key)

    if cursor.direction is Direction.FORWARD:
        page = list_children(root, cursor.target_dir)
    else:
        # Files here were returned before the descent; only later siblings matter
        page = list_children(
            root,
            cursor.target_dir,
            ListFilter(lower_bound_name=keys.basename(cursor.anchor_dir), suppress_files=True),
        )

    next_cursor = _next_cursor(start_key, cursor, page)
    logger.debug(
        "Deep list %s %r -> %d files, next %s",
        cursor.direction.name.lower(),
        cursor.target_dir,
        len(page.files),
        next_cursor,
    )
    return _page(page, next_cursor)


def _check_target(cursor: Cursor, start_key: str) -> None:
    """Reject cursors that do not point inside the listed subtree."""
    try:
        target = keys.normalize(cursor.target_dir)
    except InvalidKeyError as e:
        raise MalformedCursorError(f"Invalid cursor target: {cursor.target_dir!r}") from e

    if target != cursor.target_dir or not keys.is_within(target, start_key):
        raise MalformedCursorError(
            f"Cursor target {cursor.target_dir!r} is outside {start_key!r}"
        )


def _next_cursor(start_key: str, cursor: Cursor, page: ListingPage) -> Cursor | None:
    """Decide where the walk goes after listing cursor.target_dir."""
    target = cursor.target_dir
    descend = _descend_or_none(target, page)
    if descend is not None:
        return descend

    if cursor.direction is Direction.BACKWARD and target == start_key:
        return None
    return Cursor.backtrack(target, keys.parent(target))


def _descend_or_none(dir_key: str, page: ListingPage) -> Cursor | None:
    """Cursor into the first subdirectory of a listed directory, if it has any."""
    if not page.dirs:
        return None
    return Cursor.descend(dir_key, page.dirs[0].key)


def _page(page: ListingPage, next_cursor: Cursor | None) -> ListingPage:
    return ListingPage(
        files=page.files,
        dirs=[],
        next_cursor=encode_cursor(next_cursor) if next_cursor else None,
    )
