"""OpenID Federation metadata policy operators and verifiers, trust chains, chain filters and trust mark payloads."""

__version__ = "0.1.0"