"""JSON coding of lists where a single item may be written without the list."""

from __future__ import annotations

import json
from typing import Any, Sequence

__all__ = ["loads_slice_or_single", "dumps_slice_or_single"]


def loads_slice_or_single(data: str | bytes) -> list:
    """Decode JSON holding either one value or an array of values into a list."""
    decoded = json.loads(data)
    if isinstance(decoded, list):
        return decoded
    return [decoded]


def dumps_slice_or_single(values: Sequence[Any] | None) -> str:
    """Encode a list as JSON, writing a list of one item as the bare item."""
    if values is None:
        return "null"
    items = list(values)
    payload = items[0] if len(items) == 1 else items
    return json.dumps(payload, separators=(",", ":"))