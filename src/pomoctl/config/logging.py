"""structlog configuration for pomoctl.

Two output modes:
- Human (default): console-rendered lines
- JSON (--log-json): Structured JSON lines

Records go to stderr unless a log file is given.  The interactive screen
owns stdout, so long sessions are best run with ``--log-file``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    log_file: Path | None = None,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
        log_file: Append records to this file instead of stderr.
    """
    pomo_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    handler: logging.Handler
    if log_file is not None:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        colors = False
    else:
        handler = logging.StreamHandler(sys.stderr)
        colors = sys.stderr.isatty()

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for old in root_logger.handlers[:]:
        if isinstance(old, logging.FileHandler):
            old.close()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    pomo_logger = logging.getLogger("pomoctl")
    pomo_logger.setLevel(pomo_level)
