"""Filters that narrow a collection of trust chains down to a subset."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterable

from .trustchain import TrustChain

__all__ = [
    "TrustChains",
    "TrustChainsFilter",
    "CheckerFilter",
    "PathLengthFilter",
    "MIN_PATH_LENGTH",
    "filter_from_checker",
    "trust_anchor_filter",
    "max_path_length_filter",
]


class TrustChains(list):
    """A list of :class:`TrustChain`."""

    def filter(self, *args: "TrustChainsFilter") -> "TrustChains":
        """Apply the given filters in turn, stopping once nothing is left."""
        chains = TrustChains(self)
        for chain_filter in args:
            chains = chain_filter.filter(chains)
            if not chains:
                break
        return chains


class TrustChainsFilter(ABC):
    """Narrows a collection of trust chains to a subset."""

    @abstractmethod
    def filter(self, chains: Iterable[TrustChain]) -> TrustChains:
        """Return the chains that pass this filter."""


@dataclass(frozen=True)
class CheckerFilter(TrustChainsFilter):
    """Keeps the chains for which ``checker`` returns true."""

    checker: Callable[[TrustChain], bool]

    def filter(self, chains: Iterable[TrustChain]) -> TrustChains:
        return TrustChains(chain for chain in chains if self.checker(chain))


@dataclass(frozen=True)
class PathLengthFilter(TrustChainsFilter):
    """Keeps chains no longer than ``max_path_len``.

    A negative limit keeps only the chains of minimal length.
    """

    max_path_len: int = -1

    def filter(self, chains: Iterable[TrustChain]) -> TrustChains:
        chains = list(chains)
        if not chains:
            return TrustChains()
        limit = self.max_path_len
        if limit < 0:
            limit = min(len(chain) for chain in chains)
        return TrustChains(chain for chain in chains if len(chain) <= limit)


MIN_PATH_LENGTH = PathLengthFilter()


def filter_from_checker(checker: Callable[[TrustChain], bool]) -> CheckerFilter:
    """Build a filter that keeps the chains accepted by ``checker``."""
    return CheckerFilter(checker)


def trust_anchor_filter(anchor: str) -> CheckerFilter:
    """Build a filter keeping only the chains that end at trust anchor ``anchor``."""

    def ends_at_anchor(chain: TrustChain) -> bool:
        return bool(chain) and chain[-1].issuer == anchor

    return CheckerFilter(ends_at_anchor)


def max_path_length_filter(max_path_len: int) -> PathLengthFilter:
    """Build a filter keeping only chains of at most ``max_path_len`` statements."""
    return PathLengthFilter(max_path_len)