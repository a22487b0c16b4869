"""Trust chains: ordered entity statements from a leaf up to a trust anchor."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

__all__ = ["TrustChain"]


class _Statement(Protocol):
    issuer: str
    expires_at: Optional[datetime]


class TrustChain(list):
    """A list of entity statements, the leaf's own configuration first."""

    def expires_at(self) -> datetime | None:
        """Return the earliest expiration in the chain.

        An empty chain, or one holding a statement without expiration, gives None.
        """
        if not self:
            return None
        expirations = [statement.expires_at for statement in self]
        if any(moment is None for moment in expirations):
            return None
        return min(expirations)

    def trust_anchor_id(self) -> str | None:
        """Return the issuer of the last statement, i.e. the trust anchor."""
        if not self:
            return None
        last: _Statement = self[-1]
        return last.issuer