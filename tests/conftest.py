"""Shared test fixtures."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch):
    """Provide default settings and fresh caches for all tests."""
    monkeypatch.setenv("CSP_LOG_JSON", "false")
    monkeypatch.setenv("CSP_LOG_LEVEL", "debug")

    # Reset cached settings and presets
    import csp_header.config.loader as loader
    from csp_header.config.presets import reset_presets_cache

    loader._settings = None
    reset_presets_cache()
    yield
    loader._settings = None
    reset_presets_cache()


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo root logger and structlog changes made by setup_logging."""
    import logging

    import structlog

    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()
