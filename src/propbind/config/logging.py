"""structlog configuration for propbind.

Two output modes, both on stderr:
- Human (default): console renderer, colored when stderr is a TTY
- JSON (--log-json): one JSON object per line

Configuration instances passed as event fields are logged through the
redaction view, never as raw values.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from propbind.binding.model import ConfigModel
from propbind.binding.redaction import render


def redact_config_models(
    _logger: Any,
    _method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    """Replace ConfigModel values in *event_dict* with their redacted view."""
    for key, value in event_dict.items():
        if isinstance(value, ConfigModel):
            event_dict[key] = render(value)
    return event_dict


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Args:
        verbose: DEBUG for ``propbind.*`` loggers; WARNING otherwise.
        log_json: Render JSON lines instead of console output.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_config_models,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)
    logging.getLogger("propbind").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("pluggy").setLevel(logging.WARNING)
