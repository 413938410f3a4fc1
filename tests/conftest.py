"""
Shared fixtures for filedb tests.
"""
from pathlib import Path

import pytest

from filedb import Database, FileDB, make_ids, make_keywords


@pytest.fixture
def db_root(tmp_path: Path) -> Path:
    """Database directory inside the test's temp dir (not created yet)."""
    return tmp_path / "test-filedb"


@pytest.fixture
def db(db_root: Path) -> FileDB:
    """Sequential ids, unqualified field names."""
    return FileDB(Database(root=db_root))


@pytest.fixture
def uuid_db(db_root: Path) -> FileDB:
    """Random uuid ids, unqualified field names."""
    return FileDB(Database(root=db_root, ids=make_ids("uuid")))


@pytest.fixture
def make_db(db_root: Path):
    """Factory for a FileDB with a given qualification mode and id strategy."""
    def _make(qualify: str = "none", ids: str = "sequential", **names) -> FileDB:
        return FileDB(Database(
            root=db_root,
            keywords=make_keywords(qualify, **names),
            ids=make_ids(ids),
        ))
    return _make
