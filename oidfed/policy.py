"""Metadata policy operators: how policy values merge and how they apply to metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from .values import (
    intersect,
    is_superset_of,
    is_zero,
    slice_cast,
    slice_contains,
    slice_equal,
    slicify,
    union,
)

__all__ = [
    "VALUE",
    "DEFAULT",
    "ADD",
    "ONE_OF",
    "SUBSET_OF",
    "SUPERSET_OF",
    "ESSENTIAL",
    "OPERATOR_ORDER",
    "PolicyError",
    "PolicyOperator",
    "register_policy_operator",
    "get_policy_operator",
]

VALUE = "value"
DEFAULT = "default"
ADD = "add"
ONE_OF = "one_of"
SUBSET_OF = "subset_of"
SUPERSET_OF = "superset_of"
ESSENTIAL = "essential"

# Order in which operators are applied; custom operators must be inserted here.
OPERATOR_ORDER: list[str] = [VALUE, ADD, DEFAULT, ONE_OF, SUBSET_OF, SUPERSET_OF, ESSENTIAL]

Merger = Callable[[Any, Any, str], Any]
Applier = Callable[[Any, Any, bool, str], Any]


class PolicyError(ValueError):
    """Raised when policies cannot be merged or a value violates a policy."""


@dataclass(frozen=True)
class PolicyOperator:
    """A named policy operator with its merge and apply rules."""

    name: str
    merger: Merger
    applier: Applier
    combinable: tuple[str, ...] = ()

    def merge(self, a: Any, b: Any, path_info: str = "") -> Any:
        """Merge two values of this operator from different policies."""
        return self.merger(a, b, path_info)

    def apply(self, value: Any, policy_value: Any, essential: bool = False, path_info: str = "") -> Any:
        """Apply the policy value to a metadata value and return the result."""
        return self.applier(value, policy_value, essential, path_info)

    def may_combine_with(self, name: str) -> bool:
        """Tell whether this operator may appear beside operator ``name``."""
        return name in self.combinable


_operators: dict[str, PolicyOperator] = {}


def register_policy_operator(operator: PolicyOperator) -> None:
    """Make an operator available under its name, replacing any earlier one."""
    _operators[operator.name] = operator


def get_policy_operator(name: str) -> PolicyOperator:
    """Return the registered operator called ``name``; raise KeyError if unknown."""
    try:
        return _operators[name]
    except KeyError:
        raise KeyError(f"unknown policy operator '{name}'") from None


def _merge_with(combine: Callable[[Any, Any], Any]) -> Merger:
    def merger(a: Any, b: Any, _path_info: str) -> Any:
        if a is None:
            return b
        if b is None:
            return a
        return combine(a, b)

    return merger


def _merge_equal(operator_name: str) -> Merger:
    def merger(a: Any, b: Any, path_info: str) -> Any:
        if a is None:
            return b
        if b is None:
            return a
        if slice_equal(a, b):
            return a
        raise PolicyError(
            f"conflicting values {a!r} and {b!r} when merging '{operator_name}' operator in '{path_info}'"
        )

    return merger


def _apply_add(value: Any, policy_value: Any, _essential: bool, _path_info: str) -> Any:
    if value is None:
        return policy_value
    if policy_value is None:
        return value
    return union(value, policy_value)


def _apply_subset_of(value: Any, policy_value: Any, essential: bool, path_info: str) -> Any:
    if value is None and not essential:
        return value
    if policy_value is None:
        return value
    allowed = slicify(policy_value)
    if value is None:
        raise PolicyError(
            f"policy operator check failed: '{path_info}' not set, "
            f"but essential and must be one of {policy_value!r}"
        )
    result = intersect(slicify(value), allowed)
    if not result:
        if essential:
            raise PolicyError(
                f"policy operator check failed for '{path_info}': "
                f"{value!r} is not subset of {allowed!r} but essential"
            )
        return None
    return result


def _apply_one_of(value: Any, policy_value: Any, essential: bool, path_info: str) -> Any:
    if value is None and not essential:
        return value
    if policy_value is None:
        return value
    allowed = slicify(policy_value)
    if value is None:
        raise PolicyError(
            f"policy operator check failed: '{path_info}' not set, "
            f"but essential and must be one of {policy_value!r}"
        )
    if not slice_contains(value, allowed):
        raise PolicyError(
            f"policy operator check failed for '{path_info}': {value!r} is not one of {allowed!r}"
        )
    return value


def _apply_superset_of(value: Any, policy_value: Any, essential: bool, path_info: str) -> Any:
    if value is None and not essential:
        return value
    if policy_value is None:
        return value
    required = slicify(policy_value)
    if value is None:
        raise PolicyError(
            f"policy operator check failed: '{path_info}' not set, "
            f"but essential and must be superset of {policy_value!r}"
        )
    present = slicify(value)
    if not is_superset_of(present, required):
        raise PolicyError(
            f"policy operator check failed for '{path_info}': {present!r} is not a superset of {required!r}"
        )
    return value


def _apply_value(value: Any, policy_value: Any, _essential: bool, _path_info: str) -> Any:
    if policy_value is None:
        return value
    return slice_cast(policy_value, slicify(value))


def _apply_default(value: Any, policy_value: Any, _essential: bool, _path_info: str) -> Any:
    if is_zero(value):
        return slice_cast(policy_value, slicify(value))
    return value


def _merge_essential(a: Any, b: Any, _path_info: str) -> bool:
    a_set = isinstance(a, bool)
    b_set = isinstance(b, bool)
    if not a_set and not b_set:
        return False
    if not a_set:
        return b
    if not b_set:
        return a
    return a or b


def _apply_essential(value: Any, policy_value: Any, _essential: bool, path_info: str) -> Any:
    if policy_value is None:
        return value
    if policy_value is True and is_zero(value):
        raise PolicyError(f"metadata value for '{path_info}' not set but required")
    return value


for _operator in (
    PolicyOperator(
        SUBSET_OF, _merge_with(intersect), _apply_subset_of, (ADD, DEFAULT, SUPERSET_OF, ESSENTIAL)
    ),
    PolicyOperator(ONE_OF, _merge_with(intersect), _apply_one_of, (DEFAULT, ESSENTIAL)),
    PolicyOperator(
        SUPERSET_OF, _merge_with(union), _apply_superset_of, (ADD, DEFAULT, SUBSET_OF, ESSENTIAL)
    ),
    PolicyOperator(ADD, _merge_with(union), _apply_add, (DEFAULT, SUBSET_OF, SUPERSET_OF, ESSENTIAL)),
    PolicyOperator(VALUE, _merge_equal(VALUE), _apply_value, (ESSENTIAL,)),
    PolicyOperator(
        DEFAULT,
        _merge_equal(DEFAULT),
        _apply_default,
        (ADD, ONE_OF, SUBSET_OF, SUPERSET_OF, ESSENTIAL),
    ),
    PolicyOperator(ESSENTIAL, _merge_essential, _apply_essential),
):
    register_policy_operator(_operator)
del _operator