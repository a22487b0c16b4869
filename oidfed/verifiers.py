"""Consistency checks for a merged metadata policy entry."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from .policy import ADD, DEFAULT, ONE_OF, SUBSET_OF, SUPERSET_OF, PolicyError
from .values import is_subset_of, is_superset_of, slice_contains, slicify

__all__ = [
    "PolicyVerifier",
    "register_policy_verifier",
    "verify_policy_entry",
    "verify_subset_superset_one_of",
    "verify_subset_superset_of",
    "verify_add_in_subset",
    "verify_add_in_one_of",
    "verify_default_in_one_of",
    "verify_default_in_subset",
    "verify_default_superset",
    "verify_subset_of_still_has_values",
    "verify_one_of_still_has_values",
]

PolicyEntry = Optional[Mapping[str, Any]]
PolicyVerifier = Callable[[PolicyEntry, str], None]

_verifiers: list[PolicyVerifier] = []


def register_policy_verifier(verifier: PolicyVerifier) -> None:
    """Add a verifier that :func:`verify_policy_entry` runs after the built-in ones."""
    _verifiers.append(verifier)


def verify_policy_entry(entry: PolicyEntry, path_info: str) -> None:
    """Run every registered verifier on ``entry``; the first failure is raised."""
    for verifier in _verifiers:
        verifier(entry, path_info)


def _both(entry: PolicyEntry, first: str, second: str) -> tuple[Any, Any] | None:
    """Return the values of two operators, or None unless both are present."""
    entry = entry or {}
    if first in entry and second in entry:
        return entry[first], entry[second]
    return None


def _not_included(path_info: str, operator: str, value: Any, other: str, other_value: Any) -> PolicyError:
    return PolicyError(
        f"after combining policies '{path_info}' the '{operator}' operator values {value!r} "
        f"are not all included in the '{other}' operator {other_value!r}"
    )


def verify_subset_superset_one_of(entry: PolicyEntry, path_info: str) -> None:
    """Reject ``one_of`` appearing beside ``subset_of`` or ``superset_of``."""
    entry = entry or {}
    if ONE_OF in entry and (SUBSET_OF in entry or SUPERSET_OF in entry):
        raise PolicyError(
            f"policy_operator '{ONE_OF}' cannot appear beside '{SUBSET_OF}'/'{SUPERSET_OF}' "
            f"in policy entry '{path_info}'"
        )


def verify_subset_superset_of(entry: PolicyEntry, path_info: str) -> None:
    """Require the ``superset_of`` values to lie within the ``subset_of`` values."""
    pair = _both(entry, SUBSET_OF, SUPERSET_OF)
    if pair is None:
        return
    subset, superset = pair
    if not is_subset_of(superset, subset):
        raise _not_included(path_info, SUPERSET_OF, superset, SUBSET_OF, subset)


def verify_add_in_subset(entry: PolicyEntry, path_info: str) -> None:
    """Require the ``add`` values to lie within the ``subset_of`` values."""
    pair = _both(entry, SUBSET_OF, ADD)
    if pair is None:
        return
    subset, added = pair
    if not is_subset_of(added, subset):
        raise _not_included(path_info, ADD, added, SUBSET_OF, subset)


def verify_add_in_one_of(entry: PolicyEntry, path_info: str) -> None:
    """Require a single ``add`` value that is one of the ``one_of`` values."""
    pair = _both(entry, ONE_OF, ADD)
    if pair is None:
        return
    one_of, added = pair
    added_values = slicify(added) or []
    if len(added_values) > 1:
        raise PolicyError(
            f"cannot have multiple values in '{ADD}' operator in combination with "
            f"'{ONE_OF}' operator for '{path_info}' policy"
        )
    if not added_values:
        return
    if not slice_contains(added_values[0], one_of):
        raise PolicyError(
            f"after combining policies '{path_info}' the '{ADD}' operator value {added!r} "
            f"is not included in the '{ONE_OF}' operator"
        )


def verify_default_in_one_of(entry: PolicyEntry, path_info: str) -> None:
    """Require the ``default`` value to be one of the ``one_of`` values."""
    pair = _both(entry, ONE_OF, DEFAULT)
    if pair is None:
        return
    one_of, default = pair
    if not slice_contains(default, slicify(one_of)):
        raise PolicyError(
            f"after combining policies '{path_info}' the '{DEFAULT}' operator value {default!r} "
            f"is not included in the '{ONE_OF}' operator"
        )


def verify_default_in_subset(entry: PolicyEntry, path_info: str) -> None:
    """Require the ``default`` values to lie within the ``subset_of`` values."""
    pair = _both(entry, SUBSET_OF, DEFAULT)
    if pair is None:
        return
    subset, default = pair
    if not is_subset_of(default, subset):
        raise _not_included(path_info, DEFAULT, default, SUBSET_OF, subset)


def verify_default_superset(entry: PolicyEntry, path_info: str) -> None:
    """Require the ``default`` values to cover all ``superset_of`` values."""
    pair = _both(entry, SUPERSET_OF, DEFAULT)
    if pair is None:
        return
    superset, default = pair
    if not is_superset_of(default, superset):
        raise PolicyError(
            f"after combining policies '{path_info}' the '{DEFAULT}' operator values {default!r} "
            f"are not a superset of the '{SUPERSET_OF}' operator {superset!r}"
        )


def _still_has_values(entry: PolicyEntry, operator: str, path_info: str) -> None:
    entry = entry or {}
    if operator not in entry:
        return
    if not slicify(entry[operator]):
        raise PolicyError(
            f"policy_operator '{operator}' has no valid value after combining policies '{path_info}'"
        )


def verify_subset_of_still_has_values(entry: PolicyEntry, path_info: str) -> None:
    """Reject a ``subset_of`` operator that is left without values."""
    _still_has_values(entry, SUBSET_OF, path_info)


def verify_one_of_still_has_values(entry: PolicyEntry, path_info: str) -> None:
    """Reject a ``one_of`` operator that is left without values."""
    _still_has_values(entry, ONE_OF, path_info)


for _verifier in (
    verify_subset_superset_one_of,
    verify_subset_superset_of,
    verify_add_in_subset,
    verify_add_in_one_of,
    verify_default_in_one_of,
    verify_default_in_subset,
    verify_default_superset,
    verify_subset_of_still_has_values,
    verify_one_of_still_has_values,
):
    register_policy_verifier(_verifier)
del _verifier