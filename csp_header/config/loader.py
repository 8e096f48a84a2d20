"""Env var config loading with pydantic-settings."""

from __future__ import annotations

from pathlib import Path

import structlog
from pydantic_settings import BaseSettings, SettingsConfigDict

from csp_header.logging_config import setup_logging

logger = structlog.get_logger()

_PRESETS_PATH = Path(__file__).parent / "policy_presets.yaml"


class CSPSettings(BaseSettings):
    """CSP settings from model defaults, overridden by ``CSP_*`` env vars."""

    model_config = SettingsConfigDict(
        env_prefix="CSP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "info"
    log_json: bool = True

    # Policy presets
    presets_file: str = str(_PRESETS_PATH)
    default_preset: str = "balanced"

    # Send Content-Security-Policy-Report-Only instead of enforcing
    report_only: bool = False

    # Directives that receive the per-request nonce
    nonce_directives: list[str] = ["script-src", "style-src"]


_settings: CSPSettings | None = None


def get_settings() -> CSPSettings:
    """Get or create the singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def load_settings() -> CSPSettings:
    """Load settings from env vars (env vars override model defaults)."""
    global _settings
    _settings = CSPSettings()
    logger.info(
        "csp_settings_loaded",
        default_preset=_settings.default_preset,
        report_only=_settings.report_only,
    )
    return _settings


def configure_logging(settings: CSPSettings | None = None) -> None:
    """Apply the log_level / log_json settings to structlog and stdlib logging."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_json)
