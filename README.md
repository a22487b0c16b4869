# oidfed

Building blocks for OpenID Federation, written in pure Python. The package
needs nothing beyond the standard library.

## What it provides

### Metadata policy operators (`oidfed.policy`)

The package defines the operators `value`, `add`, `default`, `one_of`,
`subset_of`, `superset_of` and `essential`. Their names are also available as
the constants `VALUE`, `ADD` and so on. `OPERATOR_ORDER` gives the order in
which the operators are applied.

Each `PolicyOperator` has three methods:

- `merge(a, b, path_info)` combines the values that two authorities give for
  the operator.
- `apply(value, policy_value, essential, path_info)` applies a policy value
  to a metadata value.
- `may_combine_with(name)` tells whether the operator may appear beside
  another one.

Look an operator up with `get_policy_operator(name)`. An unknown name raises
`KeyError`. Add or replace an operator with `register_policy_operator`. A
conflict or a violated policy raises `PolicyError`, which is a `ValueError`.

### Policy verifiers (`oidfed.verifiers`)

These functions check that a merged policy entry is consistent. Some of the
checks are:

- `one_of` must not appear beside `subset_of` or `superset_of`.
- The `add` and `default` values must lie within `subset_of`.
- The `default` must cover `superset_of`.
- `subset_of` and `one_of` must still hold values after merging.

Each check is a function of its own, for example `verify_add_in_subset` or
`verify_default_in_one_of`. `verify_policy_entry` runs every registered check
and raises the first `PolicyError` it finds. `register_policy_verifier` adds
further checks.

### Value helpers (`oidfed.values`)

Policy values may be a single item or a list. These helpers treat both alike:

- `slicify` turns a value into a list.
- `union` and `intersect` keep order and drop duplicates.
- `is_subset_of`, `is_superset_of` and `slice_contains` test membership.
- `slice_equal` compares values without regard to order.
- `slice_cast` gives a value the container type of another value.
- `is_zero` tells whether a value is unset.

### Trust anchors and chains

`oidfed.trustanchor` provides:

- `TrustAnchor`, which holds an entity id and an optional JWK set.
- `TrustAnchors`, whose `entity_ids()` returns the entity ids.
- `trust_anchors_from_entity_ids(...)`.
- The `ClientRegistrationType` enum, with `AUTOMATIC` and `EXPLICIT`.

In `oidfed.trustchain`, a `TrustChain` is a list of statement objects. Each
statement has `issuer` and `expires_at` attributes. `expires_at()` returns the
earliest expiration in the chain, or `None` if the chain is empty or any
statement has no expiration. `trust_anchor_id()` returns the issuer of the
last statement.

### Trust chain filters (`oidfed.trustchainfilter`)

`TrustChains.filter(*filters)` applies filters in turn and stops once no
chain is left. The available filters are:

- `trust_anchor_filter(anchor)` keeps chains whose last statement was issued
  by `anchor`.
- `max_path_length_filter(n)` keeps chains of at most `n` statements.
- `MIN_PATH_LENGTH` keeps only the shortest chains.
- `filter_from_checker(fn)` keeps the chains for which `fn` returns true.

### Trust marks (`oidfed.trustmark`)

This module defines the following types:

- `TrustMark`, `DelegationJWT` and `TrustMarkInfo`. Each converts to and from
  a claims dict with `to_dict` and `from_dict`. Unknown claims are kept in
  `extra`.
- `TrustMarkInfos`, which offers `find` and `find_by_id`.
- `TrustMarkSpec` and `OwnedTrustMark`, which describe the trust marks that an
  issuer or owner handles.

`TrustMarkIssuer.issue_payload` builds the claims of a new trust mark.
`TrustMarkOwner.delegation_payload` builds the claims of a new delegation.

`TrustMark.verify_time()` and `DelegationJWT.verify_time()` check `iat` and
`exp` against the current time. `TrustMark.check_delegation(delegation,
owner_id)` checks that a delegation matches the trust mark and its owner.
Failures raise `TrustMarkError` or `oidfed.unixtime.TimeValidationError`.

### Time helpers and JSON helpers

`oidfed.unixtime` converts between UNIX timestamps and aware UTC datetimes
with `from_json` and `to_json`. It converts durations in seconds with
`duration_from_json` and `duration_to_json`. It also provides `now`, `until`
and `verify_time`.

`oidfed.sliceorsingle` reads and writes JSON fields that hold either a single
value or an array:

- `loads_slice_or_single` always returns a list.
- `dumps_slice_or_single` writes a list of one item as the bare item.

## Example

```python
from oidfed.policy import get_policy_operator
from oidfed.verifiers import verify_policy_entry

add = get_policy_operator("add")
merged = add.merge(["a@example.com"], "b@example.com", "contacts")
# ['a@example.com', 'b@example.com']

entry = {"subset_of": ["openid", "profile", "email"], "default": ["openid"]}
verify_policy_entry(entry, "openid_relying_party.scope")
```

## What it does not do

- It does not fetch entity configurations or subordinate statements over HTTP.
- It does not resolve or cache trust chains.
- It does not parse, sign or verify the signatures of JWTs.
- Trust mark and delegation classes only hold claims and check their times
  and fields. Signing, and checking against JWK sets, is left to the caller.
- There is no metadata model. The operators work on single metadata values
  and leave walking a whole metadata document to the caller.
- There is no command-line program and no server.

## Running the tests

```
pip install .[test]
pytest
```