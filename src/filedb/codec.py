"""Document (de)serialization: JSON with a tagged timestamp extension.

A ``datetime`` is written as ``{"#inst": "2024-03-20T10:00:00.123456+00:00"}``
so it comes back as a ``datetime`` rather than a string.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

INST_TAG = "#inst"


def _default(obj: Any) -> Any:
    if isinstance(obj, datetime):
        return {INST_TAG: obj.isoformat(timespec="microseconds")}
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    msg = f"Object of type {type(obj).__name__} is not serializable"
    raise TypeError(msg)


def _object_hook(obj: dict[str, Any]) -> Any:
    if len(obj) == 1 and INST_TAG in obj:
        return datetime.fromisoformat(obj[INST_TAG])
    return obj


def dumps(data: Any, *, indent: int | None = 2) -> str:
    return json.dumps(data, default=_default, indent=indent, ensure_ascii=False)


def loads(text: str) -> Any:
    return json.loads(text, object_hook=_object_hook)


def read(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f, object_hook=_object_hook)


def write(path: Path, data: Any) -> None:
    path.write_text(dumps(data) + "\n", encoding="utf-8")
