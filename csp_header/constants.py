"""Header names and the supported hash algorithm set."""

from __future__ import annotations

from typing import Literal

# Hash algorithms supported by browser CSP checks
HASH_ALGORITHMS: tuple[str, ...] = ("SHA-256", "SHA-384", "SHA-512")

HashAlgorithm = Literal["SHA-256", "SHA-384", "SHA-512"]

CSP_HEADER = "Content-Security-Policy"
CSP_REPORT_ONLY_HEADER = "Content-Security-Policy-Report-Only"


def header_name(report_only: bool = False) -> str:
    """Return the CSP header name for enforcing or report-only mode."""
    return CSP_REPORT_ONLY_HEADER if report_only else CSP_HEADER
