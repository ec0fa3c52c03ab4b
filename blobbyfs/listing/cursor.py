"""Deep listing cursor codec.

A cursor is the whole state of a deep listing between calls::

    {direction}{anchor_dir}:{target_dir}

``+`` means descend into ``target_dir`` (a directory never listed before),
``-`` means go back up to ``target_dir`` and continue after ``anchor_dir``.
For the tree ``a/b/c/d, a/b/x, a/b/y, a/e, a/f`` listed from ``a``::

    +a:a/b
    +a/b:a/b/c
    -a/b/c:a/b
    -a/b:a
    (done, no more dirs after a/b in a)
"""

from dataclasses import dataclass
from enum import Enum

from blobbyfs import keys
from blobbyfs.errors import MalformedCursorError

SEPARATOR = ":"


class Direction(Enum):
    """Traversal direction encoded in a cursor."""

    FORWARD = "+"
    BACKWARD = "-"


@dataclass(frozen=True)
class Cursor:
    """Decoded deep listing cursor."""

    direction: Direction
    anchor_dir: str
    target_dir: str

    @classmethod
    def descend(cls, anchor_dir: str, target_dir: str) -> "Cursor":
        return cls(Direction.FORWARD, anchor_dir, target_dir)

    @classmethod
    def backtrack(cls, anchor_dir: str, target_dir: str) -> "Cursor":
        return cls(Direction.BACKWARD, anchor_dir, target_dir)


def encode_cursor(cursor: Cursor) -> str:
    """Serialize a cursor to its string form."""
    return f"{cursor.direction.value}{cursor.anchor_dir}{SEPARATOR}{cursor.target_dir}"


def decode_cursor(value: str) -> Cursor:
    """Parse a cursor string. Raises MalformedCursorError on bad input."""
    if not value:
        raise MalformedCursorError("Empty cursor")

    try:
        direction = Direction(value[0])
    except ValueError:
        raise MalformedCursorError(f"Cursor has no direction marker: {value!r}")

    body = value[1:]
    if body.count(SEPARATOR) == 0:
        raise MalformedCursorError(f"Cursor has no separator: {value!r}")

    if body.count(SEPARATOR) == 1:
        anchor_dir, _, target_dir = body.partition(SEPARATOR)
        return Cursor(direction, anchor_dir, target_dir)

    # Directory names may contain the separator; pick the split where the
    # two keys are child and parent
    for index, char in enumerate(body):
        if char != SEPARATOR:
            continue
        anchor_dir, target_dir = body[:index], body[index + 1:]
        if _is_step(direction, anchor_dir, target_dir):
            return Cursor(direction, anchor_dir, target_dir)

    raise MalformedCursorError(f"Cursor keys are not parent and child: {value!r}")


def _is_step(direction: Direction, anchor_dir: str, target_dir: str) -> bool:
    """Check if target_dir is where a walk from anchor_dir can go next."""
    if direction is Direction.FORWARD:
        return bool(target_dir) and keys.parent(target_dir) == anchor_dir
    return bool(anchor_dir) and keys.parent(anchor_dir) == target_dir
