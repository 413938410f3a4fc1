"""Embedded document store: one directory per document, JSON on disk.

Layout:
    <root>/
        <collection>/
            <doc-id>/
                data.json        # the document
                <nested>/...     # collections nested under this document
        __config__/
            <collection>/
                __counter__      # next-id state for sequential ids

Collections are plain names ("users") or paths alternating names and parent
ids (["users", 7, "posts"]). Every document carries an id field and
created/updated timestamps whose names come from the KeywordStrategy.

No locking: one writer per collection. The sequential counter is a
read-increment-write, so concurrent writers should use uuid ids.
"""

from filedb.config import FileDBConfig, init_config, load_config
from filedb.ids import IdAllocator, SequentialIds, UuidIds, make_ids
from filedb.keywords import FullKeywords, KeywordStrategy, PartialKeywords, PlainKeywords, make_keywords
from filedb.models import Database, Merge, Transform
from filedb.paths import Ident, Name, PathResolver, normalize
from filedb.query import all_of, kv_eq
from filedb.store import FileDB

__all__ = [
    "Database",
    "FileDB",
    "FileDBConfig",
    "FullKeywords",
    "IdAllocator",
    "Ident",
    "KeywordStrategy",
    "Merge",
    "Name",
    "PartialKeywords",
    "PathResolver",
    "PlainKeywords",
    "SequentialIds",
    "Transform",
    "UuidIds",
    "all_of",
    "init_config",
    "kv_eq",
    "load_config",
    "make_ids",
    "make_keywords",
    "normalize",
]
