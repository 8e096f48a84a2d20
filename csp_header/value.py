"""CSP source-expression values: keywords, schemes, hashes and nonces."""

from __future__ import annotations

import asyncio
import base64
import enum
import hashlib
import uuid

from csp_header.constants import HASH_ALGORITHMS
from csp_header.exceptions import InvalidAlgorithm, PlatformUnavailable


class KeywordValue(str, enum.Enum):
    """General CSP keyword source values."""

    inline_speculation_rules = "'inline-speculation-rules'"
    none = "'none'"
    report_sample = "'report-sample'"
    self = "'self'"
    strict_dynamic = "'strict-dynamic'"


class UnsafeKeywordValue(str, enum.Enum):
    unsafe_eval = "'unsafe-eval'"
    unsafe_hashes = "'unsafe-hashes'"
    unsafe_inline = "'unsafe-inline'"
    wasm_unsafe_eval = "'wasm-unsafe-eval'"


class SchemeSourceValue(str, enum.Enum):
    """Scheme sources. Unlike keywords these are not quoted."""

    blob = "blob:"
    data = "data:"  # insecure for scripts
    filesystem = "filesystem:"
    http = "http:"
    https = "https:"
    mediastream = "mediastream:"
    websocket = "ws:"
    wss = "wss:"


def _check_algorithm(algorithm: str) -> None:
    if algorithm not in HASH_ALGORITHMS:
        raise InvalidAlgorithm(algorithm)


def format_hash_algorithm(algorithm: str) -> str:
    """Convert ``SHA-256`` to the ``sha256`` token prefix."""
    _check_algorithm(algorithm)
    return algorithm.lower().replace("-", "")


def format_hash_value(algorithm: str, hash: str) -> str:
    """Build a hash source token such as ``'sha256-<base64>'``.

    Raises InvalidAlgorithm unless algorithm is SHA-256, SHA-384 or SHA-512.

    Example:
        >>> format_hash_value("SHA-256", "abc123")
        "'sha256-abc123'"
    """
    return f"'{format_hash_algorithm(algorithm)}-{hash.strip()}'"


def format_nonce_value(nonce: str) -> str:
    """Wrap a raw nonce as ``'nonce-<nonce>'``. The nonce is only trimmed."""
    return f"'nonce-{nonce.strip()}'"


def random_nonce() -> str:
    """Return a fresh base64-encoded nonce (48 characters).

    The token is the base64 encoding of a random UUID4's text, which draws
    from the OS CSPRNG.
    """
    try:
        token = str(uuid.uuid4())
    except NotImplementedError as exc:
        raise PlatformUnavailable("No OS random source available for nonce generation") from exc
    return base64.b64encode(token.encode("utf-8")).decode("ascii")


def hash_source_sync(algorithm: str, source: str) -> str:
    """Digest UTF-8 ``source`` and return the base64-encoded digest."""
    name = format_hash_algorithm(algorithm)
    try:
        digest = hashlib.new(name, source.encode("utf-8")).digest()
    except ValueError as exc:
        raise PlatformUnavailable(f"Digest algorithm {algorithm} is not available") from exc
    return base64.b64encode(digest).decode("ascii")


async def hash_source(algorithm: str, source: str) -> str:
    """Hash inline content for a hash source, off the event loop.

    Example:
        >>> await hash_source("SHA-256", "Hello world!")
        'wFNeS+K3n/2TKRMFQ2v4iTFOSj+uwF7P/Lt98xrZ5Ro='
    """
    _check_algorithm(algorithm)
    return await asyncio.to_thread(hash_source_sync, algorithm, source)
