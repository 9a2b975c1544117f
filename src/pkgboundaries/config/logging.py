"""structlog configuration for pkgboundaries.

Logs always go to stderr; stdout carries command results only, so
``pkgboundaries --json check`` stays parseable with ``-v`` on.

- Human (default): key=value console lines, colored on a TTY
- JSON (--log-json): one JSON object per line, tracebacks as dicts
"""

from __future__ import annotations

import logging
import sys

import structlog

LOGGER_NAME = "pkgboundaries"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _final_processors(log_json: bool) -> list[structlog.types.Processor]:
    """Processors applied last, right before the record is written."""
    if log_json:
        return [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    return [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
        structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
    ]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Domain and infrastructure modules log through stdlib ``logging``;
    services use structlog. Both end up formatted identically.

    Args:
        verbose: DEBUG for the ``pkgboundaries`` logger tree. Third-party
            loggers stay at WARNING.
        log_json: Emit JSON lines instead of console output.
    """
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=_final_processors(log_json),
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)
