"""Field naming for the identifier and timestamp fields of a collection.

    mode      collection ["users", 7, "posts"], base "id"
    none      id
    partial   posts/id
    full      users.posts/id
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from filedb.paths import collection_names

QUALIFY_MODES = ("none", "partial", "full")


@dataclass(frozen=True)
class KeywordStrategy:
    """Base names for the standard fields; subclasses decide qualification."""

    id: str = "id"
    created_at: str = "created_at"
    updated_at: str = "updated_at"

    mode = "none"

    def qualify(self, collection: Any, base: str) -> str:
        raise NotImplementedError

    def id_field(self, collection: Any) -> str:
        return self.qualify(collection, self.id)

    def created_at_field(self, collection: Any) -> str:
        return self.qualify(collection, self.created_at)

    def updated_at_field(self, collection: Any) -> str:
        return self.qualify(collection, self.updated_at)


@dataclass(frozen=True)
class PlainKeywords(KeywordStrategy):
    mode = "none"

    def qualify(self, collection: Any, base: str) -> str:
        return base


@dataclass(frozen=True)
class PartialKeywords(KeywordStrategy):
    """Qualify with the innermost collection name."""

    mode = "partial"

    def qualify(self, collection: Any, base: str) -> str:
        return f"{collection_names(collection)[-1]}/{base}"


@dataclass(frozen=True)
class FullKeywords(KeywordStrategy):
    """Qualify with every collection name on the path, outermost first."""

    mode = "full"

    def qualify(self, collection: Any, base: str) -> str:
        return f"{'.'.join(collection_names(collection))}/{base}"


_STRATEGIES: dict[str, type[KeywordStrategy]] = {
    "none": PlainKeywords,
    "partial": PartialKeywords,
    "full": FullKeywords,
}


def make_keywords(
    mode: str = "none",
    *,
    id: str = "id",  # noqa: A002
    created_at: str = "created_at",
    updated_at: str = "updated_at",
) -> KeywordStrategy:
    """Build the strategy for a qualification mode. Unknown modes raise ValueError."""
    try:
        cls = _STRATEGIES[mode]
    except KeyError:
        msg = f"Unknown qualification mode: {mode!r} (expected one of {', '.join(QUALIFY_MODES)})"
        raise ValueError(msg) from None
    return cls(id=id, created_at=created_at, updated_at=updated_at)
