"""structlog configuration for typectl.

Everything typectl logs goes to stderr, so stdout carries only command
results and ``--json`` output stays parseable.  Two renderers:

- Human (default): colored console output
- JSON (``--log-json``): one structured object per line

Library modules keep using ``logging.getLogger(__name__)``.  Their records,
and SQLAlchemy's statement log when ``[database] echo`` is on, are rendered
through the same structlog processors as native structlog events.
"""

from __future__ import annotations

import logging
import sys

import structlog

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def logger_levels(*, verbose: bool = False, log_sql: bool = False) -> dict[str, int]:
    """Level per logger name; the empty name is the root logger."""
    return {
        "": logging.WARNING,
        "typectl": logging.DEBUG if verbose else logging.WARNING,
        "sqlalchemy.engine": logging.INFO if log_sql else logging.WARNING,
    }


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    log_sql: bool = False,
) -> None:
    """Configure structlog and install the single stderr handler.

    Args:
        verbose: Enable DEBUG-level output from typectl loggers.
        log_json: Use JSON renderer instead of console renderer.
        log_sql: Log every SQL statement at INFO (``[database] echo``).
    """
    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name, level in logger_levels(verbose=verbose, log_sql=log_sql).items():
        logging.getLogger(name).setLevel(level)
