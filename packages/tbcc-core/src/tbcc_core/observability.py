"""Structured logging and OpenTelemetry spans for tbcc.

This module provides:
- Structured logging setup via structlog
- A span helper wrapping each pipeline stage
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from opentelemetry.trace import Span, Tracer

TRACER_NAME = "tbcc.pipeline"

logger = structlog.get_logger(TRACER_NAME)


def get_tracer() -> Tracer:
    """Get the OpenTelemetry tracer for tbcc.

    Without an installed SDK this is a no-op tracer.
    """
    return trace.get_tracer(TRACER_NAME)


def configure_logging(
    *,
    log_level: str = "WARNING",
    json_format: bool = False,
) -> None:
    """Configure structured logging for tbcc.

    Log lines go to stderr so they never mix with the artifact report
    printed on stdout.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output JSON format. If False, output human-readable.

    Example:
        >>> configure_logging(log_level="DEBUG")
    """
    processors: list[Any] = [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper()),
        force=True,
    )


@contextmanager
def span(name: str, *, attributes: dict[str, Any] | None = None) -> Iterator[Span]:
    """Create an OpenTelemetry span with structured logging.

    The caller sets the span status on normal exit; an exception escaping
    the block marks the span as ERROR.

    Args:
        name: Span name (e.g., "stage.compile").
        attributes: Optional span attributes.

    Yields:
        OpenTelemetry Span instance.

    Example:
        >>> with span("stage.preprocess", attributes={"input": "hello.c"}):
        ...     run_preprocessor()
    """
    attrs = attributes or {}

    with get_tracer().start_as_current_span(name, attributes=attrs) as s:
        logger.debug(f"{name}_started", **attrs)
        try:
            yield s
        except Exception as exc:
            s.set_status(Status(StatusCode.ERROR, str(exc)))
            s.record_exception(exc)
            logger.debug(f"{name}_aborted", error=str(exc), **attrs)
            raise
