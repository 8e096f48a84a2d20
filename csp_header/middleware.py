"""Starlette middleware that attaches a nonce-bearing CSP header."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from csp_header.config.loader import configure_logging, get_settings
from csp_header.config.presets import build_preset_policy
from csp_header.constants import header_name
from csp_header.value import random_nonce

logger = structlog.get_logger()


class ContentSecurityPolicyMiddleware(BaseHTTPMiddleware):
    """Set a preset CSP header on every response.

    - A fresh nonce is generated per request and exposed to handlers as
      ``request.state.csp_nonce`` for use in ``<script nonce=...>`` tags
    - ``overrides`` adds app-specific values (CDN hosts...) to the preset
    - A CSP header already set by the application is left untouched
    - Logging is configured from CSP_LOG_LEVEL / CSP_LOG_JSON unless
      ``configure_logs`` is False
    """

    def __init__(
        self,
        app: ASGIApp,
        preset: str | None = None,
        report_only: bool | None = None,
        overrides: Mapping[str, Iterable[str]] | None = None,
        configure_logs: bool = True,
    ) -> None:
        super().__init__(app)
        settings = get_settings()
        if configure_logs:
            configure_logging(settings)
        self.preset = preset or settings.default_preset
        self.header = header_name(settings.report_only if report_only is None else report_only)
        self.overrides = {d: tuple(values) for d, values in (overrides or {}).items()}
        # Unknown presets and override directives fail at startup, not per request
        build_preset_policy(self.preset, overrides=self.overrides)
        logger.info("csp_middleware_configured", preset=self.preset, header=self.header)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        nonce = random_nonce()
        request.state.csp_nonce = nonce
        response = await call_next(request)
        if self.header not in response.headers:
            response.headers[self.header] = build_preset_policy(
                self.preset, nonce=nonce, overrides=self.overrides
            )
        return response
