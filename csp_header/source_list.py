"""Map a flag-based PolicyConfig to an ordered source-expression list."""

from __future__ import annotations

import types
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from csp_header.models.policy_config import PolicyConfig
from csp_header.value import (
    KeywordValue,
    SchemeSourceValue,
    UnsafeKeywordValue,
    format_hash_value,
    format_nonce_value,
)

# Keyed by config flag alias; iterated in alias order
UNSAFE_KEYWORD_MAP: types.MappingProxyType = types.MappingProxyType({
    "unsafeEval": UnsafeKeywordValue.unsafe_eval,
    "unsafeHashes": UnsafeKeywordValue.unsafe_hashes,
    "unsafeInline": UnsafeKeywordValue.unsafe_inline,
    "wasmUnsafeEval": UnsafeKeywordValue.wasm_unsafe_eval,
})

SCHEME_KEYWORD_MAP: types.MappingProxyType = types.MappingProxyType({
    "blob": SchemeSourceValue.blob,
    "data": SchemeSourceValue.data,
    "filesystem": SchemeSourceValue.filesystem,
    "http": SchemeSourceValue.http,
    "https": SchemeSourceValue.https,
    "mediastream": SchemeSourceValue.mediastream,
    "ws": SchemeSourceValue.websocket,
    "wss": SchemeSourceValue.wss,
})


def _enabled_flags(section: BaseModel, keyword_map: Mapping[str, Any]) -> list[str]:
    """Return mapped tokens for true flags, ordered by flag name."""
    flags = {
        field.alias or name: getattr(section, name)
        for name, field in type(section).model_fields.items()
    }
    return [
        keyword_map[key].value
        for key in sorted(flags)
        if flags[key] and key in keyword_map
    ]


def config_to_source_expression_list(config: PolicyConfig | Mapping[str, Any]) -> str:
    """Convert a PolicyConfig into a space-separated source-expression list.

    Tokens are emitted in this order:

    1. ``'self'``
    2. ``'strict-dynamic'``
    3. ``'inline-speculation-rules'``
    4. ``'report-sample'``
    5. Unsafe keywords (by flag name)
    6. Scheme keywords (by flag name)
    7. Hosts, verbatim and in order
    8. Hashes, in order
    9. Nonces, in order

    An empty config gives an empty string. The directive name is not included.

    Hosts are passed through unvalidated, but each must be a string: a
    mapping with a non-string host (e.g. ``{"hosts": [443]}``) raises
    pydantic.ValidationError. Build host values with ``str()`` first.

    Example:
        >>> config_to_source_expression_list({
        ...     "self": True,
        ...     "unsafe": {"unsafeHashes": True},
        ...     "schema": {"blob": True, "data": False},
        ...     "hosts": ["https://www.youtube.com"],
        ...     "hashes": [{"algorithm": "SHA-256", "hash": "abc123"}],
        ...     "nonces": ["abc123"],
        ... })
        "'self' 'unsafe-hashes' blob: https://www.youtube.com 'sha256-abc123' 'nonce-abc123'"
    """
    if isinstance(config, BaseModel) and not isinstance(config, PolicyConfig):
        config = config.model_dump(by_alias=True)
    if not isinstance(config, PolicyConfig):
        config = PolicyConfig.model_validate(config)

    tokens: list[str] = []

    if config.self_:
        tokens.append(KeywordValue.self.value)
    if config.strict_dynamic:
        tokens.append(KeywordValue.strict_dynamic.value)
    if config.inline_speculation_rules:
        tokens.append(KeywordValue.inline_speculation_rules.value)
    if config.report_sample:
        tokens.append(KeywordValue.report_sample.value)

    tokens.extend(_enabled_flags(config.unsafe, UNSAFE_KEYWORD_MAP))
    tokens.extend(_enabled_flags(config.schema_, SCHEME_KEYWORD_MAP))

    tokens.extend(config.hosts)

    for descriptor in config.hashes:
        tokens.append(format_hash_value(descriptor.algorithm, descriptor.hash))

    for nonce in config.nonces:
        tokens.append(format_nonce_value(nonce))

    return " ".join(tokens)
