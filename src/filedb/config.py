"""FileDBConfig: project-local settings for a filedb database.

Default layout (relative to the directory holding filedb.toml):

    filedb.toml           # config (git-tracked)
    .filedb/              # database root
        <collection>/<id>/data.json
        __config__/<collection>/__counter__

filedb.toml example:

    [filedb]
    root = ".filedb"
    id_strategy = "sequential"   # or "uuid"

    [keywords]
    qualify = "none"             # none | partial | full
    id = "id"
    created_at = "created_at"
    updated_at = "updated_at"

FILEDB_ROOT in the environment overrides [filedb].root.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from filedb.ids import make_ids
from filedb.keywords import make_keywords
from filedb.models import Database

if TYPE_CHECKING:
    from filedb.store import FileDB

_CONFIG_FILENAME = "filedb.toml"
_DEFAULT_ROOT = ".filedb"
_ROOT_ENV = "FILEDB_ROOT"


@dataclass
class KeywordsConfig:
    qualify: str = "none"
    id: str = "id"
    created_at: str = "created_at"
    updated_at: str = "updated_at"


@dataclass
class FileDBConfig:
    """Resolved configuration for a filedb project."""

    root: Path                     # directory that contains filedb.toml
    db_root: Path = field(default_factory=Path)
    id_strategy: str = "sequential"
    keywords: KeywordsConfig = field(default_factory=KeywordsConfig)

    def database(self) -> Database:
        """Build the Database handle. Bad mode or strategy names raise ValueError."""
        return Database(
            root=self.db_root,
            keywords=make_keywords(
                self.keywords.qualify,
                id=self.keywords.id,
                created_at=self.keywords.created_at,
                updated_at=self.keywords.updated_at,
            ),
            ids=make_ids(self.id_strategy),
        )

    def open(self) -> FileDB:
        from filedb.store import FileDB

        return FileDB(self.database())


def load_config(root: Path | str | None = None) -> FileDBConfig:
    """Load filedb.toml from root (or search upward from cwd if root is None)."""
    root_path = _find_root(Path(root) if root else Path.cwd())
    config_path = root_path / _CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_path.exists():
        with config_path.open("rb") as f:
            raw = tomllib.load(f)

    db_section = raw.get("filedb", {})
    kw_section = raw.get("keywords", {})

    db_rel = os.environ.get(_ROOT_ENV) or db_section.get("root", _DEFAULT_ROOT)

    return FileDBConfig(
        root=root_path,
        db_root=root_path / db_rel,
        id_strategy=str(db_section.get("id_strategy", "sequential")),
        keywords=KeywordsConfig(
            qualify=str(kw_section.get("qualify", "none")),
            id=str(kw_section.get("id", "id")),
            created_at=str(kw_section.get("created_at", "created_at")),
            updated_at=str(kw_section.get("updated_at", "updated_at")),
        ),
    )


def _find_root(start: Path) -> Path:
    """Walk upward from start looking for filedb.toml."""
    for directory in (start, *start.parents):
        if (directory / _CONFIG_FILENAME).exists():
            return directory
    return start


def init_config(root: Path, *, id_strategy: str = "sequential", qualify: str = "none") -> Path:
    """Write a default filedb.toml at root. Raises if already exists."""
    config_path = root / _CONFIG_FILENAME
    if config_path.exists():
        msg = f"filedb.toml already exists at {config_path}"
        raise FileExistsError(msg)

    # Fail before writing anything unusable.
    make_ids(id_strategy)
    make_keywords(qualify)

    content = f"""\
[filedb]
root = "{_DEFAULT_ROOT}"
id_strategy = "{id_strategy}"   # sequential | uuid

[keywords]
qualify = "{qualify}"   # none | partial | full
# id = "id"
# created_at = "created_at"
# updated_at = "updated_at"
"""
    config_path.write_text(content)
    return config_path
