"""structlog configuration for the CLI."""

import logging
import sys
from typing import Any, List

import structlog


def setup_logging(verbose: bool = False, json_logs: bool = False) -> None:
    """Configure structlog to write to stderr.

    Args:
        verbose: Log progress at DEBUG level instead of WARNING
        json_logs: Render JSON lines instead of console output
    """
    min_level = logging.DEBUG if verbose else logging.WARNING

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_logs:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    # botocore logs through the standard library
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=min_level)
