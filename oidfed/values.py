"""Set-like helpers on values that may be a single item or a list of items."""

from __future__ import annotations

import dataclasses
from itertools import chain
from typing import Any, Iterable

__all__ = [
    "is_zero",
    "slicify",
    "union",
    "intersect",
    "is_subset_of",
    "is_superset_of",
    "slice_contains",
    "slice_equal",
    "slice_cast",
]


def is_zero(value: Any) -> bool:
    """Tell whether ``value`` is an unset/zero value.

    ``None``, ``False``, numeric zero and the empty string are zero, as is a
    dataclass instance whose fields are all zero. Containers are never zero,
    even when empty.
    """
    if value is None:
        return True
    if isinstance(value, (bool, int, float, complex, str)):
        return not value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return all(is_zero(getattr(value, field.name)) for field in dataclasses.fields(value))
    return False


def slicify(value: Any) -> list | None:
    """Return ``value`` as a list: sequences are copied, single items wrapped."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _unique(items: Iterable[Any]) -> list:
    result: list = []
    for item in items:
        if item not in result:
            result.append(item)
    return result


def union(a: Any, b: Any) -> list:
    """Return the items of ``a`` followed by the new items of ``b``, without duplicates."""
    return _unique(chain(slicify(a) or [], slicify(b) or []))


def intersect(a: Any, b: Any) -> list:
    """Return the items of ``a`` that also appear in ``b``, in the order of ``a``."""
    others = slicify(b) or []
    return [item for item in _unique(slicify(a) or []) if item in others]


def is_subset_of(a: Any, b: Any) -> bool:
    """Tell whether every item of ``a`` appears in ``b``."""
    others = slicify(b) or []
    return all(item in others for item in slicify(a) or [])


def is_superset_of(a: Any, b: Any) -> bool:
    """Tell whether every item of ``b`` appears in ``a``."""
    return is_subset_of(b, a)


def slice_contains(value: Any, values: Any) -> bool:
    """Tell whether ``value`` is one of the items of ``values``."""
    return value in (slicify(values) or [])


def slice_equal(a: Any, b: Any) -> bool:
    """Compare two values as multisets, ignoring order; ``None`` equals only ``None``."""
    if a is None or b is None:
        return a is None and b is None
    remaining = slicify(b)
    for item in slicify(a):
        try:
            remaining.remove(item)
        except ValueError:
            return False
    return not remaining


def slice_cast(value: Any, like: Any) -> Any:
    """Return ``value`` in the container type of ``like`` when it is a sequence.

    Single items are returned unchanged.
    """
    if not isinstance(value, (list, tuple)):
        return value
    if isinstance(like, tuple):
        return tuple(value)
    return list(value)