"""Structured logging — structlog processors over the stdlib root logger.

Modules keep using ``logging.getLogger(__name__)``; their records go through
the same renderer as structlog loggers, and carry whatever is bound with
``scan_context`` while an alert scan runs.

Usage:
    from seedling_prime.infra.observability.logging import scan_context, setup_logging

    setup_logging(service_name="alerts-job")
    with scan_context("3f9c2a1b7d4e"):
        logger.info("Alert scan: %d alerts", 12)
"""

import contextlib
import logging
import sys
from collections.abc import Iterator

import structlog

# httpx logs every request URL at INFO, and Finnhub URLs carry the API token.
QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(
    service_name: str = "seedling-prime",
    *,
    log_level: str = "INFO",
    json_output: bool = True,
) -> None:
    """Configure structlog and the stdlib root logger for this process.

    Args:
        service_name: bound to every record as ``service``
        log_level: DEBUG, INFO, WARNING or ERROR
        json_output: JSON lines when True, console rendering otherwise
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared_processors)
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers:
        handler.setFormatter(formatter)

    structlog.contextvars.bind_contextvars(service=service_name)


@contextlib.contextmanager
def scan_context(scan_id: str, *, dry_run: bool = False) -> Iterator[None]:
    """Tag every record logged inside the block with ``scan_id`` (and ``dry_run``)."""
    with structlog.contextvars.bound_contextvars(scan_id=scan_id, dry_run=dry_run):
        yield
