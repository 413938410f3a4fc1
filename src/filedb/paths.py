"""Collection path normalization and on-disk locations.

Layout (relative to the database root):

    <collection>/
        <doc-id>/
            data.json          # serialized document
            <nested>/...       # nested collections live under their parent doc
    __config__/
        <collection>/
            __counter__        # sequential id state

A collection is addressed by a scalar (``"users"``, ``Name("users")``) or by a
sequence alternating names and parent-document ids: ``["users", 7, "posts"]``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

CONFIG_DIR = "__config__"
DATA_FILE = "data.json"


@dataclass(frozen=True)
class Name:
    """A collection name. The namespace, if any, is dropped on disk."""

    name: str
    namespace: str | None = None


@dataclass(frozen=True)
class Ident:
    """A parent-document identifier inside a nested collection path."""

    value: Any


def _check_segment(seg: str) -> str:
    if not seg or seg in (".", "..") or "/" in seg or "\\" in seg:
        msg = f"Invalid collection path segment: {seg!r}"
        raise ValueError(msg)
    return seg


def valid_id(doc_id: Any) -> bool:
    """Whether a document id can name a directory; blank ids cannot."""
    text = "" if doc_id is None else str(doc_id)
    return bool(text) and text not in (".", "..") and "/" not in text and "\\" not in text


def _name_text(seg: Any) -> str:
    if isinstance(seg, Name):
        return seg.name
    return str(seg)


def _segment(seg: Any, index: int) -> str:
    # Even positions are collection names, odd positions parent ids.
    if isinstance(seg, Ident) or (index % 2 == 1 and not isinstance(seg, Name)):
        value = seg.value if isinstance(seg, Ident) else seg
        return _check_segment(str(value))
    return _check_segment(_name_text(seg))


def normalize(collection: Any) -> tuple[str, ...]:
    """Turn a collection identifier into its on-disk path segments.

    >>> normalize("users")
    ('users',)
    >>> normalize(["users", 7, Name("posts", namespace="blog")])
    ('users', '7', 'posts')
    """
    if isinstance(collection, (list, tuple)):
        if not collection:
            msg = "Collection path must not be empty"
            raise ValueError(msg)
        segments = tuple(_segment(seg, i) for i, seg in enumerate(collection))
    else:
        segments = (_segment(collection, 0),)
    if segments[0] == CONFIG_DIR:
        msg = f"{CONFIG_DIR!r} is reserved and cannot be used as a collection name"
        raise ValueError(msg)
    return segments


def collection_names(collection: Any) -> tuple[str, ...]:
    """The name segments of a collection path, identifiers dropped."""
    return normalize(collection)[::2]


class PathResolver:
    """Maps collections and documents to directories under a database root."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def collection_dir(self, collection: Any, *, create: bool = True) -> Path:
        path = self.root.joinpath(*normalize(collection))
        if create:
            path.mkdir(parents=True, exist_ok=True)
        return path

    def document_dir(self, collection: Any, doc_id: Any, *, create: bool = True) -> Path:
        return self.collection_dir(collection, create=create) / _check_segment(str(doc_id))

    def document_file(self, collection: Any, doc_id: Any, *, create: bool = True) -> Path:
        return self.document_dir(collection, doc_id, create=create) / DATA_FILE

    # ------------------------------------------------------------------
    # Config (hidden tree parallel to the data)
    # ------------------------------------------------------------------

    def config_dir(self, collection: Any, *, create: bool = True) -> Path:
        path = self.root.joinpath(CONFIG_DIR, *normalize(collection))
        if create:
            path.mkdir(parents=True, exist_ok=True)
        return path
