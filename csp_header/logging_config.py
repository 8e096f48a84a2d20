"""structlog setup driven by CSPSettings.log_level / log_json."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog


def _module_field(logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
    """Report the emitting module as 'module' rather than 'logger'."""
    name = event_dict.pop("logger", None)
    if name is not None:
        event_dict["module"] = name
    return event_dict


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _module_field,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _make_handler(json_format: bool, stream: TextIO | None) -> logging.Handler:
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def setup_logging(
    log_level: str = "info",
    json_format: bool = True,
    stream: TextIO | None = None,
) -> None:
    """Send structlog events through the root stdlib logger.

    Replaces any root handlers. Unknown level names fall back to INFO.
    """
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(_make_handler(json_format, stream))
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
