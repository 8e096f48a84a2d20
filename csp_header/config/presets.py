"""Named CSP policy presets loaded from YAML."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Union

import structlog
import yaml

from csp_header.config.loader import get_settings
from csp_header.directive import Directive, directive_name, get_directive
from csp_header.exceptions import UnknownPreset
from csp_header.models.policy_config import PolicyConfig
from csp_header.policy import build_policy, merge_policy_values
from csp_header.source_list import config_to_source_expression_list
from csp_header.value import format_nonce_value

logger = structlog.get_logger()

PresetSources = Union[PolicyConfig, tuple[str, ...], None]

# Loaded presets, keyed by resolved file path
_presets: dict[Path, dict] = {}


def load_presets(path: str | Path | None = None) -> dict:
    """Load presets from YAML, caching each file after its first load.

    Without ``path`` the configured presets file is used. A missing file
    yields no presets.
    """
    presets_path = Path(path or get_settings().presets_file).resolve()
    cached = _presets.get(presets_path)
    if cached is not None:
        return cached
    if not presets_path.exists():
        logger.error("csp_presets_not_found", path=str(presets_path))
        _presets[presets_path] = {}
        return _presets[presets_path]
    with open(presets_path) as f:
        loaded = yaml.safe_load(f) or {}
    _presets[presets_path] = loaded
    logger.debug("csp_presets_loaded", path=str(presets_path), presets=sorted(loaded))
    return loaded


def reset_presets_cache() -> None:
    """Reset the presets cache (for testing)."""
    _presets.clear()


def _to_sources(raw: object) -> PresetSources:
    if raw is None:
        return None
    if isinstance(raw, dict):
        return PolicyConfig.model_validate(raw)
    if isinstance(raw, str):
        return (raw,)
    return tuple(raw)


def get_preset(name: str, path: str | Path | None = None) -> dict[Directive, PresetSources]:
    """Return a preset as a directive -> sources mapping.

    Raises UnknownPreset for names absent from the presets file, and
    ValueError for unknown directive names inside it.
    """
    presets = load_presets(path)
    if name not in presets:
        raise UnknownPreset(name)
    return {
        get_directive(directive): _to_sources(raw)
        for directive, raw in (presets[name] or {}).items()
    }


def _with_nonce(sources: PresetSources, nonce: str) -> PresetSources:
    if isinstance(sources, PolicyConfig):
        return sources.model_copy(update={"nonces": (*sources.nonces, nonce)})
    if sources is None:
        return None
    return (*sources, format_nonce_value(nonce))


def _as_values(sources: PresetSources) -> list[str]:
    if sources is None:
        return []
    if isinstance(sources, PolicyConfig):
        return config_to_source_expression_list(sources).split()
    return list(sources)


def build_preset_policy(
    name: str | None = None,
    nonce: str | None = None,
    nonce_directives: Iterable[str] | None = None,
    overrides: Mapping[Directive | str, Iterable[str]] | None = None,
    path: str | Path | None = None,
) -> str:
    """Render a preset to a header value.

    The nonce goes only to directives that both appear in the preset and are
    listed in ``nonce_directives`` (default: the configured list).
    ``overrides`` maps directives to extra formatted values, e.g. an app's
    CDN host; values the preset already has are not repeated, and
    directives missing from the preset are added.
    """
    settings = get_settings()
    directives = get_preset(name or settings.default_preset, path)
    if nonce:
        targets = {
            get_directive(d)
            for d in (settings.nonce_directives if nonce_directives is None else nonce_directives)
        }
        directives = {
            directive: _with_nonce(sources, nonce) if directive in targets else sources
            for directive, sources in directives.items()
        }
    if not overrides:
        return build_policy(directives)
    base = {directive: _as_values(sources) for directive, sources in directives.items()}
    extra = {get_directive(directive_name(d)): values for d, values in overrides.items()}
    return build_policy(merge_policy_values(base, extra))
