"""Database handle and update patches."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from filedb.ids import IdAllocator, SequentialIds
from filedb.keywords import KeywordStrategy, PlainKeywords

Document = dict[str, Any]


@dataclass(frozen=True)
class Database:
    """Where the documents live and how their ids and standard fields are chosen."""

    root: Path
    keywords: KeywordStrategy = field(default_factory=PlainKeywords)
    ids: IdAllocator = field(default_factory=SequentialIds)

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", Path(self.root))


@dataclass(frozen=True)
class Merge:
    """Shallow-merge ``fields`` into the stored document."""

    fields: Mapping[str, Any]

    def apply(self, doc: Document) -> Document:
        return {**doc, **self.fields}


@dataclass(frozen=True)
class Transform:
    """Replace the stored document with ``fn(document)``."""

    fn: Callable[[Document], Document]

    def apply(self, doc: Document) -> Document:
        return dict(self.fn(dict(doc)))


Patch = Merge | Transform


def as_patch(value: Patch | Mapping[str, Any] | Callable[[Document], Document]) -> Patch:
    """Accept a bare mapping or callable in place of an explicit patch."""
    if isinstance(value, (Merge, Transform)):
        return value
    if isinstance(value, Mapping):
        return Merge(value)
    if callable(value):
        return Transform(value)
    msg = f"Cannot update with {type(value).__name__}: expected a mapping, a callable, Merge or Transform"
    raise TypeError(msg)
