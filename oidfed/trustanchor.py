"""Trust anchors and client registration types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = [
    "ClientRegistrationType",
    "TrustAnchor",
    "TrustAnchors",
    "trust_anchors_from_entity_ids",
]


class ClientRegistrationType(str, Enum):
    """How a relying party registers with an OpenID provider."""

    AUTOMATIC = "automatic"
    EXPLICIT = "explicit"


@dataclass
class TrustAnchor:
    """A trust anchor given by its entity id and, optionally, its JWK set."""

    entity_id: str
    jwks: Any = None


class TrustAnchors(list):
    """A list of :class:`TrustAnchor`."""

    def entity_ids(self) -> list[str]:
        """Return the entity ids of the anchors, in order."""
        return [anchor.entity_id for anchor in self]


def trust_anchors_from_entity_ids(*args: str) -> TrustAnchors:
    """Build trust anchors from entity ids alone; their JWK sets stay unset."""
    return TrustAnchors(TrustAnchor(entity_id) for entity_id in args)