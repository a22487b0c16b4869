"""Trust marks, delegation JWTs and the entities that issue them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Iterable, Mapping, Optional

from . import unixtime

__all__ = [
    "TrustMarkError",
    "TrustMarkInfo",
    "TrustMarkInfos",
    "TrustMark",
    "DelegationJWT",
    "TrustMarkSpec",
    "OwnedTrustMark",
    "TrustMarkIssuer",
    "TrustMarkOwner",
]


class TrustMarkError(ValueError):
    """Raised when a trust mark or delegation is malformed or does not verify."""


def _split(data: Mapping[str, Any], known: Iterable[str], kind: str) -> tuple[dict, dict]:
    """Separate the claims a type knows from the extra ones."""
    if not isinstance(data, Mapping):
        raise TrustMarkError(f"{kind} must be a JSON object, got {type(data).__name__}")
    names = set(known)
    explicit = {key: value for key, value in data.items() if key in names}
    extra = {key: value for key, value in data.items() if key not in names}
    return explicit, extra


def _string(claims: Mapping[str, Any], name: str) -> str:
    value = claims.get(name, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TrustMarkError(f"claim '{name}' must be a string")
    return value


def _time(claims: Mapping[str, Any], name: str) -> Optional[datetime]:
    value = claims.get(name)
    if value is None:
        return None
    try:
        return unixtime.from_json(value)
    except TypeError as err:
        raise TrustMarkError(f"claim '{name}' must be a number") from err


def _merge(explicit: dict, extra: Mapping[str, Any]) -> dict:
    return {**extra, **explicit}


@dataclass
class TrustMarkInfo:
    """A trust mark as listed in an entity configuration."""

    id: str
    trust_mark: str
    extra: dict = field(default_factory=dict)

    _KNOWN = ("id", "trust_mark")

    def to_dict(self) -> dict:
        """Return the JSON object, extra claims included."""
        return _merge({"id": self.id, "trust_mark": self.trust_mark}, self.extra)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TrustMarkInfo":
        """Build from a JSON object, keeping unknown claims as extra."""
        claims, extra = _split(data, cls._KNOWN, "trust mark info")
        return cls(_string(claims, "id"), _string(claims, "trust_mark"), extra)


class TrustMarkInfos(list):
    """A list of :class:`TrustMarkInfo`."""

    def find(self, matcher: Callable[[TrustMarkInfo], bool]) -> Optional[TrustMarkInfo]:
        """Return the first info accepted by ``matcher``, or None."""
        return next((info for info in self if matcher(info)), None)

    def find_by_id(self, trust_mark_id: str) -> Optional[TrustMarkInfo]:
        """Return the first info with the given trust mark id, or None."""
        return self.find(lambda info: info.id == trust_mark_id)


@dataclass
class DelegationJWT:
    """The claims of a delegation JWT issued by a trust mark owner."""

    issuer: str = ""
    subject: str = ""
    id: str = ""
    issued_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    ref: str = ""
    extra: dict = field(default_factory=dict)

    _KNOWN = ("iss", "sub", "id", "iat", "exp", "ref")

    def to_dict(self) -> dict:
        """Return the JWT claims, extra claims included; optional empty claims are left out."""
        claims: dict = {
            "iss": self.issuer,
            "sub": self.subject,
            "id": self.id,
            "iat": unixtime.to_json(self.issued_at),
        }
        if self.expires_at is not None:
            claims["exp"] = unixtime.to_json(self.expires_at)
        if self.ref:
            claims["ref"] = self.ref
        return _merge(claims, self.extra)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DelegationJWT":
        """Build from JWT claims, keeping unknown claims as extra."""
        claims, extra = _split(data, cls._KNOWN, "delegation jwt")
        return cls(
            issuer=_string(claims, "iss"),
            subject=_string(claims, "sub"),
            id=_string(claims, "id"),
            issued_at=_time(claims, "iat"),
            expires_at=_time(claims, "exp"),
            ref=_string(claims, "ref"),
            extra=extra,
        )

    def verify_time(self) -> None:
        """Raise TimeValidationError unless the delegation is valid right now."""
        unixtime.verify_time(self.issued_at, self.expires_at)


@dataclass
class TrustMark:
    """The claims of a trust mark JWT."""

    issuer: str = ""
    subject: str = ""
    id: str = ""
    issued_at: Optional[datetime] = None
    logo_uri: str = ""
    expires_at: Optional[datetime] = None
    ref: str = ""
    delegation: str = ""
    extra: dict = field(default_factory=dict)

    _KNOWN = ("iss", "sub", "id", "iat", "logo_uri", "exp", "ref", "delegation")

    def to_dict(self) -> dict:
        """Return the JWT claims, extra claims included; optional empty claims are left out."""
        claims: dict = {
            "iss": self.issuer,
            "sub": self.subject,
            "id": self.id,
            "iat": unixtime.to_json(self.issued_at),
        }
        if self.logo_uri:
            claims["logo_uri"] = self.logo_uri
        if self.expires_at is not None:
            claims["exp"] = unixtime.to_json(self.expires_at)
        if self.ref:
            claims["ref"] = self.ref
        if self.delegation:
            claims["delegation"] = self.delegation
        return _merge(claims, self.extra)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TrustMark":
        """Build from JWT claims, keeping unknown claims as extra."""
        claims, extra = _split(data, cls._KNOWN, "trust mark")
        return cls(
            issuer=_string(claims, "iss"),
            subject=_string(claims, "sub"),
            id=_string(claims, "id"),
            issued_at=_time(claims, "iat"),
            logo_uri=_string(claims, "logo_uri"),
            expires_at=_time(claims, "exp"),
            ref=_string(claims, "ref"),
            delegation=_string(claims, "delegation"),
            extra=extra,
        )

    def verify_time(self) -> None:
        """Raise TimeValidationError unless the trust mark is valid right now."""
        unixtime.verify_time(self.issued_at, self.expires_at)

    def check_delegation(self, delegation: Optional[DelegationJWT], owner_id: str) -> None:
        """Check that ``delegation`` authorises this trust mark's issuer on behalf of ``owner_id``."""
        if delegation is None:
            raise TrustMarkError("verify trustmark: no delegation jwt in trust mark")
        if delegation.id != self.id:
            raise TrustMarkError("verify trustmark: delegation jwt not for this trust mark")
        if delegation.subject != self.issuer:
            raise TrustMarkError("verify trustmark: delegation jwt not for this trust mark issuer")
        if delegation.issuer != owner_id:
            raise TrustMarkError("verify trustmark: delegation jwt not issued by trust mark owner")
        try:
            delegation.verify_time()
        except unixtime.TimeValidationError as err:
            raise TrustMarkError(f"verify delegation jwt: {err}") from err


@dataclass
class TrustMarkSpec:
    """Describes a trust mark that a trust mark issuer can issue."""

    id: str
    lifetime: timedelta = timedelta(0)
    ref: str = ""
    logo_uri: str = ""
    extra: dict = field(default_factory=dict)
    include_extra_claims_in_info: bool = False
    delegation_jwt: str = ""

    _KNOWN = (
        "trust_mark_id",
        "lifetime",
        "ref",
        "logo_uri",
        "include_extra_claims_in_info",
        "delegation_jwt",
    )

    def to_dict(self) -> dict:
        """Return the configuration object, extra claims included."""
        return _merge(
            {
                "trust_mark_id": self.id,
                "lifetime": unixtime.duration_to_json(self.lifetime),
                "ref": self.ref,
                "logo_uri": self.logo_uri,
                "include_extra_claims_in_info": self.include_extra_claims_in_info,
                "delegation_jwt": self.delegation_jwt,
            },
            self.extra,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TrustMarkSpec":
        """Build from a configuration object, keeping unknown keys as extra."""
        claims, extra = _split(data, cls._KNOWN, "trust mark spec")
        lifetime = claims.get("lifetime")
        try:
            duration = timedelta(0) if lifetime is None else unixtime.duration_from_json(lifetime)
        except TypeError as err:
            raise TrustMarkError("'lifetime' must be a number of seconds") from err
        include = claims.get("include_extra_claims_in_info", False)
        if not isinstance(include, bool):
            raise TrustMarkError("'include_extra_claims_in_info' must be a boolean")
        return cls(
            id=_string(claims, "trust_mark_id"),
            lifetime=duration,
            ref=_string(claims, "ref"),
            logo_uri=_string(claims, "logo_uri"),
            extra=extra,
            include_extra_claims_in_info=include,
            delegation_jwt=_string(claims, "delegation_jwt"),
        )


@dataclass
class OwnedTrustMark:
    """A trust mark owned by a trust mark owner."""

    id: str
    delegation_lifetime: timedelta = timedelta(0)
    ref: str = ""
    extra: dict = field(default_factory=dict)


class TrustMarkIssuer:
    """An entity that issues trust marks for the trust mark ids it knows."""

    def __init__(self, entity_id: str, specs: Iterable[TrustMarkSpec] = ()) -> None:
        self.entity_id = entity_id
        self._trust_marks: dict[str, TrustMarkSpec] = {spec.id: spec for spec in specs}

    def add_trust_mark(self, spec: TrustMarkSpec) -> None:
        """Enable issuing the trust mark described by ``spec``."""
        self._trust_marks[spec.id] = spec

    def trust_mark_ids(self) -> list[str]:
        """Return the ids of the trust marks this issuer can issue."""
        return list(self._trust_marks)

    def issue_payload(
        self, trust_mark_id: str, sub: str, lifetime: Optional[timedelta] = None
    ) -> TrustMark:
        """Return the claims of a new trust mark for ``sub``; ``lifetime`` overrides the spec's."""
        try:
            spec = self._trust_marks[trust_mark_id]
        except KeyError:
            raise TrustMarkError(f"unknown trustmark '{trust_mark_id}'") from None
        issued = unixtime.now()
        effective = spec.lifetime if lifetime is None else lifetime
        return TrustMark(
            issuer=self.entity_id,
            subject=sub,
            id=spec.id,
            issued_at=issued,
            logo_uri=spec.logo_uri,
            expires_at=issued + effective if effective else None,
            ref=spec.ref,
            delegation=spec.delegation_jwt,
            extra=dict(spec.extra),
        )


class TrustMarkOwner:
    """An entity owning trust marks that delegates their issuance."""

    def __init__(self, entity_id: str, owned: Iterable[OwnedTrustMark] = ()) -> None:
        self.entity_id = entity_id
        self._owned: dict[str, OwnedTrustMark] = {spec.id: spec for spec in owned}

    def add_trust_mark(self, spec: OwnedTrustMark) -> None:
        """Add an owned trust mark."""
        self._owned[spec.id] = spec

    def delegation_payload(
        self, trust_mark_id: str, sub: str, lifetime: Optional[timedelta] = None
    ) -> DelegationJWT:
        """Return the claims of a delegation for issuer ``sub``.

        An expiration is set only when the owned trust mark has a delegation
        lifetime; ``lifetime`` then overrides its length.
        """
        try:
            spec = self._owned[trust_mark_id]
        except KeyError:
            raise TrustMarkError(f"unknown trustmark '{trust_mark_id}'") from None
        issued = unixtime.now()
        effective = spec.delegation_lifetime if lifetime is None else lifetime
        return DelegationJWT(
            issuer=self.entity_id,
            subject=sub,
            id=spec.id,
            issued_at=issued,
            expires_at=issued + effective if spec.delegation_lifetime else None,
            ref=spec.ref,
            extra=dict(spec.extra),
        )