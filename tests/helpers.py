"""
Helpers for building storage trees in tests.
"""

# a, a/b and a/b/c are directories, everything else is a file
CANONICAL_FILES = ["a/b/c/d", "a/b/x", "a/b/y", "a/e", "a/f"]


def build_tree(storage, file_keys, dir_keys=()):
    """Create files (content = key) and extra empty directories."""
    for key in file_keys:
        storage.put(key, key.encode())
    for key in dir_keys:
        (storage.base_path / key).mkdir(parents=True, exist_ok=True)


def collect_deep(storage, dir_key=""):
    """Follow deep listing cursors to the end. Returns the list of pages."""
    pages = []
    cursor = None
    while True:
        page = storage.list(dir_key, last_key=cursor, deep_query=True)
        pages.append(page)
        if page.next_cursor is None:
            return pages
        cursor = page.next_cursor


def shallow_walk(storage, dir_key=""):
    """Collect file keys by shallow-listing every directory recursively."""
    page = storage.list(dir_key)
    found = [entry.key for entry in page.files]
    for entry in page.dirs:
        found.extend(shallow_walk(storage, entry.key))
    return found
