"""
Tests for the resumable deep listing.
"""

from collections import Counter

import pytest

from blobbyfs.errors import MalformedCursorError, NotADirError, NotFoundError
from blobbyfs.listing import deep_list

from tests.helpers import CANONICAL_FILES, build_tree, collect_deep, shallow_walk

TREE_SHAPES = {
    "flat": (["f1", "f2", "f3"], []),
    "deep_chain": (["1/2/3/4/5/6/leaf", "1/top", "1/2/3/mid"], []),
    "wide": ([f"d{i}/f{j}" for i in range(6) for j in range(3)], []),
    "empty_dirs": (["x/file", "z/file"], ["x/empty", "y", "z/a/b/c", "w/v"]),
    "prefix_names": (
        ["p/a/1", "p/a-b/2", "p/ab/3", "p/a.b/4", "p/a/a/5", "p/a0"],
        ["p/aa"],
    ),
    "colon_leaf": (["a:b/c/file"], []),
    "colon_ancestor": (
        ["logs/2024-01-01T10:00/run.txt", "logs/2024-01-01T10:00/sub/x", "top", "x:y/z:w/f"],
        ["logs/2024-01-01T11:00"],
    ),
    "mixed": (
        CANONICAL_FILES + ["a/b/c/g/h", "a/b/c/g/i", "a/k/l", "m", "n/o/p", "n/q"],
        ["a/b/empty", "n/r/s"],
    ),
}


class TestCanonicalTree:
    """Walk of a/b/c/d, a/b/x, a/b/y, a/e, a/f."""

    def test_first_page_from_a(self, canonical_storage):
        page = canonical_storage.list("a", deep_query=True)

        assert [f.key for f in page.files] == ["a/e", "a/f"]
        assert page.dirs == []
        assert page.next_cursor == "+a:a/b"

    def test_page_sequence_from_a(self, canonical_storage):
        pages = collect_deep(canonical_storage, "a")

        assert [[f.key for f in p.files] for p in pages] == [
            ["a/e", "a/f"],
            ["a/b/x", "a/b/y"],
            ["a/b/c/d"],
            [],
            [],
        ]
        assert [p.next_cursor for p in pages] == [
            "+a:a/b",
            "+a/b:a/b/c",
            "-a/b/c:a/b",
            "-a/b:a",
            None,
        ]

    def test_page_sequence_from_root(self, canonical_storage):
        pages = collect_deep(canonical_storage)

        assert pages[0].files == []
        assert pages[0].next_cursor == "+:a"
        assert [p.next_cursor for p in pages][-3:] == ["-a/b:a", "-a:", None]
        assert sorted(f.key for p in pages for f in p.files) == sorted(CANONICAL_FILES)

    def test_nested_start_key_stops_at_start(self, canonical_storage):
        pages = collect_deep(canonical_storage, "a/b")

        assert [f.key for p in pages for f in p.files] == ["a/b/x", "a/b/y", "a/b/c/d"]
        assert pages[-1].next_cursor is None

    def test_dirs_never_returned(self, canonical_storage):
        pages = collect_deep(canonical_storage)

        assert all(p.dirs == [] for p in pages)


class TestCompleteness:
    """Every file appears exactly once, whatever the tree looks like."""

    @pytest.mark.parametrize("shape", sorted(TREE_SHAPES))
    def test_every_file_exactly_once(self, storage, shape):
        file_keys, dir_keys = TREE_SHAPES[shape]
        build_tree(storage, file_keys, dir_keys)

        pages = collect_deep(storage)
        counts = Counter(f.key for p in pages for f in p.files)

        assert set(counts) == set(file_keys)
        assert all(count == 1 for count in counts.values())

    @pytest.mark.parametrize("shape", sorted(TREE_SHAPES))
    def test_each_page_sorted(self, storage, shape):
        file_keys, dir_keys = TREE_SHAPES[shape]
        build_tree(storage, file_keys, dir_keys)

        for page in collect_deep(storage):
            page_keys = [f.key for f in page.files]
            assert page_keys == sorted(set(page_keys))

    @pytest.mark.parametrize("shape", sorted(TREE_SHAPES))
    def test_agrees_with_shallow_listing(self, storage, shape):
        file_keys, dir_keys = TREE_SHAPES[shape]
        build_tree(storage, file_keys, dir_keys)

        deep = {f.key for p in collect_deep(storage) for f in p.files}

        assert deep == set(shallow_walk(storage))

    def test_subtree_agrees_with_shallow_listing(self, storage):
        file_keys, dir_keys = TREE_SHAPES["mixed"]
        build_tree(storage, file_keys, dir_keys)

        deep = {f.key for p in collect_deep(storage, "a/b") for f in p.files}

        assert deep == set(shallow_walk(storage, "a/b"))
        assert "a/e" not in deep


class TestSeparatorInNames:
    """Directory names containing the cursor separator."""

    def test_colon_in_leaf_directory(self, storage):
        build_tree(storage, ["top/10:00/file"])

        pages = collect_deep(storage)

        assert [p.next_cursor for p in pages] == [
            "+:top",
            "+top:top/10:00",
            "-top/10:00:top",
            "-top:",
            None,
        ]
        assert [f.key for p in pages for f in p.files] == ["top/10:00/file"]

    def test_colon_in_ancestor_directory(self, storage):
        build_tree(storage, ["a:b/c/file", "a:b/d/other"])

        pages = collect_deep(storage)

        assert [p.next_cursor for p in pages] == [
            "+:a:b",
            "+a:b:a:b/c",
            "-a:b/c:a:b",
            "+a:b:a:b/d",
            "-a:b/d:a:b",
            "-a:b:",
            None,
        ]
        assert [f.key for p in pages for f in p.files] == ["a:b/c/file", "a:b/d/other"]


class TestEdgeCases:
    """Small trees and error handling."""

    def test_flat_directory_completes_in_one_call(self, storage):
        build_tree(storage, ["f1", "f2"])

        pages = collect_deep(storage)

        assert len(pages) == 1
        assert [f.key for f in pages[0].files] == ["f1", "f2"]
        assert pages[0].next_cursor is None

    def test_empty_directory(self, storage):
        page = storage.list("", deep_query=True)

        assert page.files == []
        assert page.next_cursor is None

    def test_leaf_directory_backtracks_immediately(self, canonical_storage):
        page = canonical_storage.list("a", last_key="+a/b:a/b/c", deep_query=True)

        assert [f.key for f in page.files] == ["a/b/c/d"]
        assert page.next_cursor == "-a/b/c:a/b"

    def test_backtrack_finds_next_sibling(self, storage):
        build_tree(storage, ["r/one/f", "r/two/f", "r/three/f"])

        page = storage.list("r", last_key="-r/three:r", deep_query=True)

        assert page.files == []
        assert page.next_cursor == "+r:r/two"

    def test_same_cursor_gives_same_page(self, canonical_storage):
        first = canonical_storage.list("a", last_key="+a:a/b", deep_query=True)
        second = canonical_storage.list("a", last_key="+a:a/b", deep_query=True)

        assert first == second

    def test_missing_start_key(self, storage):
        with pytest.raises(NotFoundError):
            storage.list("missing", deep_query=True)

    def test_start_key_is_a_file(self, canonical_storage):
        with pytest.raises(NotADirError):
            canonical_storage.list("a/e", deep_query=True)

    def test_directory_removed_between_calls(self, canonical_storage):
        cursor = canonical_storage.list("a", deep_query=True).next_cursor
        canonical_storage.delete_subtree("a/b")

        with pytest.raises(NotFoundError):
            canonical_storage.list("a", last_key=cursor, deep_query=True)

    @pytest.mark.parametrize("cursor", ["a:a/b", "+a", "?a:a/b"])
    def test_malformed_cursor(self, canonical_storage, cursor):
        with pytest.raises(MalformedCursorError):
            canonical_storage.list("a", last_key=cursor, deep_query=True)

    @pytest.mark.parametrize("cursor", ["+x:zz", "-a/b:", "+:../outside", "+a:a/./b"])
    def test_cursor_outside_start_key(self, canonical_storage, cursor):
        with pytest.raises(MalformedCursorError):
            deep_list(canonical_storage.base_path, "a", cursor)
