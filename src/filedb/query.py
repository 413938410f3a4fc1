"""In-memory query pipeline over a collection's documents.

    docs -> where -> order_by -> offset -> limit

``limit=1`` returns the matching document itself (or None) instead of a list.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

Predicate = Callable[[dict[str, Any]], bool]

_DIRECTIONS = {"asc": False, "ascending": False, "desc": True, "descending": True}


def kv_eq(field: str, value: Any) -> Predicate:
    """Predicate: ``doc[field] == value``. A missing field never matches."""
    missing = object()

    def pred(doc: dict[str, Any]) -> bool:
        return doc.get(field, missing) == value

    return pred


def all_of(*preds: Predicate) -> Predicate:
    def pred(doc: dict[str, Any]) -> bool:
        return all(p(doc) for p in preds)

    return pred


def _parse_order(order_by: str | tuple[str, str] | list[str]) -> tuple[str, bool]:
    if isinstance(order_by, str):
        return order_by, False
    field, direction = order_by
    try:
        return field, _DIRECTIONS[direction]
    except KeyError:
        msg = f"Unknown sort direction: {direction!r} (expected 'asc' or 'desc')"
        raise ValueError(msg) from None


def _sort_key(field: str) -> Callable[[dict[str, Any]], tuple[bool, Any]]:
    # None and missing values sort before everything else.
    def key(doc: dict[str, Any]) -> tuple[bool, Any]:
        value = doc.get(field)
        return (value is not None, value)

    return key


def run_query(
    docs: Iterable[dict[str, Any]],
    *,
    where: Predicate | None = None,
    order_by: str | tuple[str, str] | list[str] | None = None,
    offset: int | None = None,
    limit: int | None = None,
) -> list[dict[str, Any]] | dict[str, Any] | None:
    result = list(docs)
    if where is not None:
        result = [d for d in result if where(d)]
    if order_by is not None:
        field, reverse = _parse_order(order_by)
        result.sort(key=_sort_key(field), reverse=reverse)
    if offset:
        if offset < 0:
            msg = f"offset must be non-negative, got {offset}"
            raise ValueError(msg)
        result = result[offset:]
    if limit is not None:
        if limit < 0:
            msg = f"limit must be non-negative, got {limit}"
            raise ValueError(msg)
        if limit == 1:
            return result[0] if result else None
        result = result[:limit]
    return result


def key_params(field: str, value: Any, rest: tuple[Any, ...], options: Mapping[str, Any]) -> dict[str, Any]:
    """Turn ``field, value, [field, value, ...], [options]`` into query kwargs.

    Equality predicates are ANDed; a trailing mapping supplies query options.
    """
    rest = tuple(rest)
    params: dict[str, Any] = {}
    if len(rest) % 2 == 1:
        if not isinstance(rest[-1], Mapping):
            msg = f"get_by_key expects field/value pairs, got a dangling {rest[-1]!r}"
            raise ValueError(msg)
        params.update(rest[-1])
        rest = rest[:-1]
    params.update(options)

    preds = [kv_eq(field, value)]
    preds.extend(kv_eq(rest[i], rest[i + 1]) for i in range(0, len(rest), 2))
    if params.get("where") is not None:
        preds.append(params["where"])
    params["where"] = preds[0] if len(preds) == 1 else all_of(*preds)
    return params
