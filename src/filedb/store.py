"""FileDB: CRUD, queries and collection management over a Database handle.

    db = FileDB(Database(root=Path(".filedb")))
    user = db.insert("users", {"name": "ada"})
    db.insert(["users", user["id"], "posts"], {"title": "hello"})
    db.update("users", user["id"], {"role": "admin"})
    db.get_by_key("users", "role", "admin", limit=1)

Missing documents are reported through return values (None, False, []),
never by raising.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from filedb import codec
from filedb.models import Database, Document, Patch, as_patch
from filedb.paths import DATA_FILE, PathResolver, valid_id
from filedb.query import Predicate, key_params, run_query

logger = logging.getLogger("filedb.store")


def now() -> datetime:
    return datetime.now(UTC)


def _blank_id(doc_id: Any) -> bool:
    return doc_id is None or doc_id == ""


class FileDB:
    """File-per-document store bound to one Database."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self.paths = PathResolver(db.root)

    @property
    def root(self) -> Path:
        return self.db.root

    # ------------------------------------------------------------------
    # Field names
    # ------------------------------------------------------------------

    def id_field(self, collection: Any) -> str:
        return self.db.keywords.id_field(collection)

    def _stamp(self, collection: Any, doc: Document, created_at: Any = None) -> Document:
        """Set updated-at to now; keep created-at if present, else fill it in."""
        ts = now()
        created_key = self.db.keywords.created_at_field(collection)
        if created_at is not None:
            doc[created_key] = created_at
        elif created_key not in doc:
            doc[created_key] = ts
        doc[self.db.keywords.updated_at_field(collection)] = ts
        return doc

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, collection: Any, doc_id: Any) -> Document | None:
        if not valid_id(doc_id):
            return None
        path = self.paths.document_file(collection, doc_id)
        if not path.is_file():
            return None
        return codec.read(path)

    def get_by_ids(self, collection: Any, ids: Iterable[Any]) -> list[Document]:
        docs = []
        for doc_id in ids:
            doc = self.get_by_id(collection, doc_id)
            if doc is not None:
                docs.append(doc)
        return docs

    def _doc_files(self, collection: Any) -> list[Path]:
        coll_dir = self.paths.collection_dir(collection)
        return [
            d / DATA_FILE for d in coll_dir.iterdir()
            if d.is_dir() and (d / DATA_FILE).is_file()
        ]

    def get_all(self, collection: Any) -> list[Document]:
        """Every document in the collection, in directory-listing order."""
        return [codec.read(path) for path in self._doc_files(collection)]

    def get_count(self, collection: Any) -> int:
        return len(self._doc_files(collection))

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def insert(self, collection: Any, data: Mapping[str, Any]) -> Document:
        """Store a new document and return it with its id and timestamps.

        A caller-supplied id (under the collection's id field) is used as-is
        and overwrites any document already stored under it.
        """
        id_key = self.id_field(collection)
        doc = dict(data)
        doc_id = doc.get(id_key)
        if _blank_id(doc_id):
            doc_id = self.db.ids.next(self.paths, collection)
            doc[id_key] = doc_id
        self._stamp(collection, doc)

        path = self.paths.document_file(collection, doc_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        codec.write(path, doc)
        logger.debug("insert %s", path.parent)
        return doc

    def update(
        self,
        collection: Any,
        doc_id: Any,
        patch: Patch | Mapping[str, Any] | Callable[[Document], Document],
    ) -> Document | bool:
        """Merge into or transform a stored document. False if it does not exist.

        The stored id and created-at survive the patch; updated-at is refreshed.
        """
        existing = self.get_by_id(collection, doc_id)
        if existing is None:
            return False

        doc = as_patch(patch).apply(existing)
        id_key = self.id_field(collection)
        doc[id_key] = existing.get(id_key, doc_id)
        created_key = self.db.keywords.created_at_field(collection)
        self._stamp(collection, doc, created_at=existing.get(created_key))

        path = self.paths.document_file(collection, doc_id)
        codec.write(path, doc)
        logger.debug("update %s", path.parent)
        return doc

    def delete(self, collection: Any, doc_id: Any) -> bool:
        """Remove a document (and anything nested under it)."""
        if not valid_id(doc_id):
            return False
        doc_dir = self.paths.document_dir(collection, doc_id)
        if not (doc_dir / DATA_FILE).is_file():
            return False
        shutil.rmtree(doc_dir)
        # Counters of collections nested under this document.
        nested_config = self.paths.config_dir(collection, create=False) / str(doc_id)
        if nested_config.is_dir():
            shutil.rmtree(nested_config)
        logger.debug("delete %s", doc_dir)
        return True

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def query(
        self,
        collection: Any,
        *,
        where: Predicate | None = None,
        order_by: str | tuple[str, str] | list[str] | None = None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[Document] | Document | None:
        """Filter, sort and page the collection. ``limit=1`` returns one document or None."""
        return run_query(
            self.get_all(collection),
            where=where,
            order_by=order_by,
            offset=offset,
            limit=limit,
        )

    def get_by_key(self, collection: Any, field: str, value: Any, *more: Any, **options: Any) -> Any:
        """Documents whose fields equal the given values.

            db.get_by_key("users", "role", "admin")
            db.get_by_key("users", "role", "admin", "active", True, limit=1)
            db.get_by_key("users", "role", "admin", {"order_by": "name"})
        """
        return self.query(collection, **key_params(field, value, more, options))

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def delete_collection(self, collection: Any) -> None:
        """Drop a collection, its counter and every collection nested under it."""
        config_dir = self.paths.config_dir(collection, create=False)
        if config_dir.exists():
            shutil.rmtree(config_dir)
        coll_dir = self.paths.collection_dir(collection, create=False)
        if coll_dir.exists():
            shutil.rmtree(coll_dir)
        logger.info("dropped collection %s", coll_dir)

    def reset(self) -> None:
        """Delete the whole database directory. There is no undo."""
        if self.root.exists():
            shutil.rmtree(self.root)
        logger.info("reset database at %s", self.root)
