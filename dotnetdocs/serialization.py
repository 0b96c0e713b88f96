"""Conversion of documentation entities to plain, JSON-friendly data."""

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

SKIP = "serialize"


def camel_case(name: str) -> str:
    """Convert ``snake_case`` to ``camelCase``."""
    head, *rest = name.split("_")
    return head + "".join(word.capitalize() for word in rest)


def is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, (list, dict, str)) and not value)


def to_plain(value: Any) -> Any:
    """Recursively convert dataclasses and enums into dicts, lists and scalars.

    Keys are camelCased and ``None`` or empty values are omitted. Fields marked
    with ``metadata={"serialize": False}`` are skipped.
    """
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        out: dict[str, Any] = {}
        for f in fields(value):
            if not f.metadata.get(SKIP, True):
                continue
            item = to_plain(getattr(value, f.name))
            if is_empty(item):
                continue
            out[camel_case(f.name)] = item
        return out
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    if isinstance(value, dict):
        return {str(k): to_plain(v) for k, v in value.items()}
    return value
