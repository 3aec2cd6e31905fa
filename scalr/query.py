"""Query-string encoding for GET options.

Option models declare their wire keys as field aliases
(``page[size]``, ``filter[name]``). Nested models flatten into bracketed keys,
so a ``filter`` field holding ``{"name": "x"}`` becomes ``filter[name]=x``.
Filter values are sent verbatim; operator prefixes such as ``in:`` or
``like:`` are the server's business.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _flatten(prefix: str, value: Any, pairs: list[tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, BaseModel):
        value = value.model_dump(by_alias=True, exclude_none=True)
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]" if prefix else str(key), item, pairs)
        return
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [_scalar(item) for item in value if item is not None]
        if items:
            pairs.append((prefix, ",".join(items)))
        return
    if value == "":
        return
    pairs.append((prefix, _scalar(value)))


def encode_query(options: BaseModel | Mapping[str, Any] | None) -> list[tuple[str, str]]:
    """Flatten *options* into ``(key, value)`` pairs, skipping empty values."""
    pairs: list[tuple[str, str]] = []
    _flatten("", options, pairs)
    return pairs
