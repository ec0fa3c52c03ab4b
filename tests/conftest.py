"""
Shared test fixtures for blobbyfs.
"""

import pytest

from blobbyfs import FileSystemStorage
from tests.helpers import CANONICAL_FILES, build_tree


@pytest.fixture
def storage(tmp_path):
    """Storage client rooted in a fresh temporary directory."""
    return FileSystemStorage(tmp_path / "store")


@pytest.fixture
def canonical_storage(storage):
    """Storage holding the canonical a/b/c/d tree."""
    build_tree(storage, CANONICAL_FILES)
    return storage
