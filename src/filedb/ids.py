"""Identifier allocation: a persisted per-collection counter or random UUIDs.

The sequential counter is read, incremented and written back without any
locking. Two writers allocating from the same collection at the same time
can receive the same id; use ``UuidIds`` when there is more than one writer.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from filedb.paths import PathResolver

logger = logging.getLogger("filedb.ids")

COUNTER_FILE = "__counter__"


class IdAllocator:
    strategy = ""

    def next(self, resolver: PathResolver, collection: Any) -> Any:
        raise NotImplementedError


class SequentialIds(IdAllocator):
    """1, 2, 3, ... per leaf collection. Nested collections count on their own."""

    strategy = "sequential"

    def current(self, resolver: PathResolver, collection: Any) -> int:
        path = resolver.config_dir(collection, create=False) / COUNTER_FILE
        if not path.exists():
            return 0
        return int(path.read_text().strip())

    def next(self, resolver: PathResolver, collection: Any) -> int:
        new_id = self.current(resolver, collection) + 1
        path = resolver.config_dir(collection) / COUNTER_FILE
        path.write_text(str(new_id))
        logger.debug("allocated id %d in %s", new_id, path.parent)
        return new_id


class UuidIds(IdAllocator):
    strategy = "uuid"

    def next(self, resolver: PathResolver, collection: Any) -> str:
        return str(uuid.uuid4())


_ALLOCATORS: dict[str, type[IdAllocator]] = {
    "sequential": SequentialIds,
    "uuid": UuidIds,
    "random": UuidIds,
}


def make_ids(strategy: str = "sequential") -> IdAllocator:
    """Return the allocator for a strategy name. Unknown names raise ValueError."""
    try:
        return _ALLOCATORS[strategy]()
    except KeyError:
        msg = f"Unknown id strategy: {strategy!r} (expected 'sequential' or 'uuid')"
        raise ValueError(msg) from None
