"""Exceptions raised by CSP formatting and hashing."""

from __future__ import annotations


class CSPError(Exception):
    """Base class for all csp_header errors."""


class InvalidAlgorithm(CSPError, ValueError):
    """Hash algorithm is not one of SHA-256, SHA-384 or SHA-512."""

    def __init__(self, algorithm: object) -> None:
        self.algorithm = algorithm
        super().__init__(f"Invalid hash algorithm: {algorithm}")


class PlatformUnavailable(CSPError, RuntimeError):
    """The host lacks the digest or random source needed for hashing/nonces."""


class UnknownPreset(CSPError, KeyError):
    """No policy preset with the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown policy preset: {self.name}"
