"""Pydantic models for flag-based source-expression configuration.

Fields accept either snake_case names or the camelCase aliases used in
JSON/YAML configuration (``strictDynamic``, ``unsafeEval``...). Unknown keys
are ignored rather than rejected.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_MODEL_CONFIG = ConfigDict(
    frozen=True,
    extra="ignore",
    populate_by_name=True,
    alias_generator=to_camel,
)


class UnsafeKeywordConfig(BaseModel):
    """Unsafe keyword flags."""

    model_config = _MODEL_CONFIG

    unsafe_eval: bool | None = None
    unsafe_hashes: bool | None = None
    unsafe_inline: bool | None = None
    wasm_unsafe_eval: bool | None = None


class SchemeKeywordConfig(BaseModel):
    """Scheme source flags."""

    model_config = _MODEL_CONFIG

    blob: bool | None = None
    data: bool | None = None
    filesystem: bool | None = None
    http: bool | None = None
    https: bool | None = None
    mediastream: bool | None = None
    ws: bool | None = None
    wss: bool | None = None


class HashDescriptor(BaseModel):
    """A hash algorithm name paired with a base64 digest."""

    model_config = _MODEL_CONFIG

    # Checked when formatted so unsupported names raise InvalidAlgorithm
    algorithm: str
    hash: str


class KeywordConfig(BaseModel):
    model_config = _MODEL_CONFIG

    self_: bool | None = Field(default=None, alias="self")
    strict_dynamic: bool | None = None
    inline_speculation_rules: bool | None = None
    report_sample: bool | None = None
    unsafe: UnsafeKeywordConfig = Field(default_factory=UnsafeKeywordConfig)
    schema_: SchemeKeywordConfig = Field(default_factory=SchemeKeywordConfig, alias="schema")


class PolicyConfig(KeywordConfig):
    """Keyword flags plus ordered hosts, hashes and nonces for one directive."""

    hosts: tuple[str, ...] = ()
    hashes: tuple[HashDescriptor, ...] = ()
    nonces: tuple[str, ...] = ()
