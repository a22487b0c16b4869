import pytest

from oidfed.policy import ADD, DEFAULT, ONE_OF, SUBSET_OF, SUPERSET_OF, PolicyError
from oidfed.verifiers import (
    register_policy_verifier,
    verify_add_in_one_of,
    verify_add_in_subset,
    verify_default_in_one_of,
    verify_default_in_subset,
    verify_default_superset,
    verify_one_of_still_has_values,
    verify_policy_entry,
    verify_subset_of_still_has_values,
    verify_subset_superset_of,
    verify_subset_superset_one_of,
)


SUBSET_SUPERSET_ONE_OF = [
    ("nil", None, False),
    ("all empty", {}, False),
    ("only subset", {SUBSET_OF: ["one", "two"]}, False),
    ("only superset", {SUPERSET_OF: ["one", "two"]}, False),
    ("only oneof", {ONE_OF: ["one", "two"]}, False),
    ("subset + superset", {SUBSET_OF: ["one", "two"], SUPERSET_OF: ["one"]}, False),
    (
        "subset + superset + oneof",
        {SUBSET_OF: ["one", "two"], SUPERSET_OF: ["one"], ONE_OF: ["one", "two"]},
        True,
    ),
    ("subset + oneof", {SUBSET_OF: ["one", "two"], ONE_OF: ["one", "two"]}, True),
    ("superset + oneof", {SUPERSET_OF: ["one"], ONE_OF: ["one", "two"]}, True),
]

SUBSET_SUPERSET_OF = [
    ("nil", None, False),
    ("all empty", {}, False),
    ("only subset", {SUBSET_OF: ["one", "of", "three"]}, False),
    ("only superset", {SUPERSET_OF: ["one", "two"]}, False),
    ("superset is subset", {SUBSET_OF: ["one", "two", "three"], SUPERSET_OF: ["one", "two"]}, False),
    (
        "subset is completely different",
        {SUBSET_OF: ["all", "are", "different"], SUPERSET_OF: ["one", "two"]},
        True,
    ),
    ("subset is not superset", {SUBSET_OF: ["one", "of", "three"], SUPERSET_OF: ["one", "two"]}, True),
]

ADD_IN_SUBSET = [
    ("nil", None, False),
    ("all empty", {}, False),
    ("only add", {ADD: "value"}, False),
    ("only subset", {SUBSET_OF: ["value", "other"]}, False),
    ("single value subset", {ADD: "value", SUBSET_OF: ["value", "other"]}, False),
    ("multiple value subset", {ADD: ["value", "other"], SUBSET_OF: ["value", "more", "other"]}, False),
    ("equal", {ADD: ["value", "other"], SUBSET_OF: ["value", "other"]}, False),
    ("no subset", {ADD: ["value", "different"], SUBSET_OF: ["value", "other"]}, True),
    ("single value not included", {ADD: "different", SUBSET_OF: ["value", "other"]}, True),
]

ADD_IN_ONE_OF = [
    ("nil", None, False),
    ("all empty", {}, False),
    ("only add", {ADD: "value"}, False),
    ("only oneof", {ONE_OF: ["value", "other"]}, False),
    ("single value", {ADD: "value", ONE_OF: ["value", "other"]}, False),
    ("multiple values", {ADD: ["value", "other"], ONE_OF: ["value", "more", "other"]}, True),
    ("equal with slice in add", {ADD: ["value"], ONE_OF: ["value"]}, False),
    ("equal", {ADD: "value", ONE_OF: ["value"]}, False),
    ("not included", {ADD: "different", ONE_OF: ["value", "other"]}, True),
]

DEFAULT_IN_ONE_OF = [
    ("nil", None, False),
    ("all empty", {}, False),
    ("only default", {DEFAULT: "value"}, False),
    ("only oneof", {ONE_OF: ["value", "other"]}, False),
    ("single value", {DEFAULT: "value", ONE_OF: ["value", "other"]}, False),
    ("multiple values", {DEFAULT: ["value", "other"], ONE_OF: ["value", "more", "other"]}, True),
    ("equal with slice in default", {DEFAULT: ["value"], ONE_OF: ["value"]}, True),
    ("equal", {DEFAULT: "value", ONE_OF: ["value"]}, False),
    ("not included", {DEFAULT: "different", ONE_OF: ["value", "other"]}, True),
]

DEFAULT_IN_SUBSET = [
    ("nil", None, False),
    ("all empty", {}, False),
    ("only default", {DEFAULT: "value"}, False),
    ("only subset", {SUBSET_OF: ["value", "other"]}, False),
    ("single value subset", {DEFAULT: "value", SUBSET_OF: ["value", "other"]}, False),
    (
        "multiple value subset",
        {DEFAULT: ["value", "other"], SUBSET_OF: ["value", "more", "other"]},
        False,
    ),
    ("equal", {DEFAULT: ["value", "other"], SUBSET_OF: ["value", "other"]}, False),
    ("no subset", {DEFAULT: ["value", "different"], SUBSET_OF: ["value", "other"]}, True),
    ("single value not included", {DEFAULT: "different", SUBSET_OF: ["value", "other"]}, True),
]

DEFAULT_SUPERSET = [
    ("nil", None, False),
    ("all empty", {}, False),
    ("only default", {DEFAULT: "value"}, False),
    ("only superset", {SUPERSET_OF: ["value", "other"]}, False),
    ("single value", {DEFAULT: "value", SUPERSET_OF: ["value"]}, False),
    ("multiple value", {DEFAULT: ["value", "more", "other"], SUPERSET_OF: ["value", "other"]}, False),
    ("equal", {DEFAULT: ["value", "other"], SUPERSET_OF: ["value", "other"]}, False),
    ("no superset", {DEFAULT: ["value", "different"], SUPERSET_OF: ["value", "other"]}, True),
    ("single value not included", {DEFAULT: "different", SUPERSET_OF: ["value", "other"]}, True),
]

ONE_OF_VALUES = [
    ("nil", None, False),
    ("all empty", {}, False),
    ("one of nil", {ONE_OF: None}, True),
    ("one of empty", {ONE_OF: []}, True),
    ("values", {ONE_OF: ["one", "two"]}, False),
]

SUBSET_VALUES = [
    ("nil", None, False),
    ("all empty", {}, False),
    ("subset nil", {SUBSET_OF: None}, True),
    ("subset empty", {SUBSET_OF: []}, True),
    ("values", {SUBSET_OF: ["one", "two"]}, False),
]


def _accepted(table):
    return [pytest.param(entry, id=name) for name, entry, error in table if not error]


def _rejected(table):
    return [pytest.param(entry, id=name) for name, entry, error in table if error]


@pytest.mark.parametrize("entry", _accepted(SUBSET_SUPERSET_ONE_OF))
def test_subset_superset_one_of_accepts(entry):
    assert verify_subset_superset_one_of(entry, "test") is None


@pytest.mark.parametrize("entry", _rejected(SUBSET_SUPERSET_ONE_OF))
def test_subset_superset_one_of_rejects(entry):
    with pytest.raises(PolicyError):
        verify_subset_superset_one_of(entry, "test")


@pytest.mark.parametrize("entry", _accepted(SUBSET_SUPERSET_OF))
def test_subset_superset_of_accepts(entry):
    assert verify_subset_superset_of(entry, "test") is None


@pytest.mark.parametrize("entry", _rejected(SUBSET_SUPERSET_OF))
def test_subset_superset_of_rejects(entry):
    with pytest.raises(PolicyError):
        verify_subset_superset_of(entry, "test")


@pytest.mark.parametrize("entry", _accepted(ADD_IN_SUBSET))
def test_add_in_subset_accepts(entry):
    assert verify_add_in_subset(entry, "test") is None


@pytest.mark.parametrize("entry", _rejected(ADD_IN_SUBSET))
def test_add_in_subset_rejects(entry):
    with pytest.raises(PolicyError):
        verify_add_in_subset(entry, "test")


@pytest.mark.parametrize("entry", _accepted(ADD_IN_ONE_OF))
def test_add_in_one_of_accepts(entry):
    assert verify_add_in_one_of(entry, "test") is None


@pytest.mark.parametrize("entry", _rejected(ADD_IN_ONE_OF))
def test_add_in_one_of_rejects(entry):
    with pytest.raises(PolicyError):
        verify_add_in_one_of(entry, "test")


@pytest.mark.parametrize("entry", _accepted(DEFAULT_IN_ONE_OF))
def test_default_in_one_of_accepts(entry):
    assert verify_default_in_one_of(entry, "test") is None


@pytest.mark.parametrize("entry", _rejected(DEFAULT_IN_ONE_OF))
def test_default_in_one_of_rejects(entry):
    with pytest.raises(PolicyError):
        verify_default_in_one_of(entry, "test")


@pytest.mark.parametrize("entry", _accepted(DEFAULT_IN_SUBSET))
def test_default_in_subset_accepts(entry):
    assert verify_default_in_subset(entry, "test") is None


@pytest.mark.parametrize("entry", _rejected(DEFAULT_IN_SUBSET))
def test_default_in_subset_rejects(entry):
    with pytest.raises(PolicyError):
        verify_default_in_subset(entry, "test")


@pytest.mark.parametrize("entry", _accepted(DEFAULT_SUPERSET))
def test_default_superset_accepts(entry):
    assert verify_default_superset(entry, "test") is None


@pytest.mark.parametrize("entry", _rejected(DEFAULT_SUPERSET))
def test_default_superset_rejects(entry):
    with pytest.raises(PolicyError):
        verify_default_superset(entry, "test")


@pytest.mark.parametrize("entry", _accepted(ONE_OF_VALUES))
def test_one_of_still_has_values_accepts(entry):
    assert verify_one_of_still_has_values(entry, "test") is None


@pytest.mark.parametrize("entry", _rejected(ONE_OF_VALUES))
def test_one_of_still_has_values_rejects(entry):
    with pytest.raises(PolicyError):
        verify_one_of_still_has_values(entry, "test")


@pytest.mark.parametrize("entry", _accepted(SUBSET_VALUES))
def test_subset_of_still_has_values_accepts(entry):
    assert verify_subset_of_still_has_values(entry, "test") is None


@pytest.mark.parametrize("entry", _rejected(SUBSET_VALUES))
def test_subset_of_still_has_values_rejects(entry):
    with pytest.raises(PolicyError):
        verify_subset_of_still_has_values(entry, "test")


def test_error_message_names_path():
    with pytest.raises(PolicyError, match="metadata.contacts"):
        verify_subset_superset_one_of({SUBSET_OF: ["a"], ONE_OF: ["a"]}, "metadata.contacts")


def test_verify_policy_entry_accepts_consistent_entry():
    entry = {SUBSET_OF: ["a", "b"], SUPERSET_OF: ["a"], ADD: "a", DEFAULT: ["a", "b"]}
    assert verify_policy_entry(entry, "test") is None


@pytest.mark.parametrize(
    "entry",
    [
        {SUBSET_OF: ["a", "b"], ONE_OF: ["a"]},
        {SUBSET_OF: []},
        {ONE_OF: ["a", "b"], DEFAULT: "c"},
    ],
)
def test_verify_policy_entry_rejects(entry):
    with pytest.raises(PolicyError):
        verify_policy_entry(entry, "test")


def test_registered_verifier_is_run():
    def reject_marked(entry, path_info):
        if path_info == "custom.reject":
            raise PolicyError("custom rejection")

    register_policy_verifier(reject_marked)
    with pytest.raises(PolicyError, match="custom rejection"):
        verify_policy_entry({}, "custom.reject")
    assert verify_policy_entry({}, "test") is None