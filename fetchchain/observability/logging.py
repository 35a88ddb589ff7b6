"""Structured logging configuration and per-request log context."""

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, TextIO

import structlog


if TYPE_CHECKING:
    from fetchchain.settings.app import ClientSettings


REQUEST_ID_KEY = "request_id"


def configure_logging(
    level: int | str = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Configure structured logging for the client.

    Log lines carry an ISO timestamp, the level, and any context variables
    bound with ``request_context``. Rendering is JSON by default, or colored
    console output.

    Args:
        level: Logging level as a number or name (default: INFO).
        output: Output stream (default: stderr).
        json_format: Whether to use JSON format (default: True).
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if json_format
        else structlog.dev.ConsoleRenderer(colors=True)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=output, level=level)


def configure_logging_from_settings(
    settings: "ClientSettings",
    output: TextIO = sys.stderr,
) -> None:
    """Configure logging from ``log_level`` and ``log_json`` settings."""
    configure_logging(
        level=settings.log_level,
        output=output,
        json_format=settings.log_json,
    )


@contextmanager
def request_context(request_id: str | None = None) -> Iterator[str]:
    """Bind a request id to every log line emitted inside the block.

    Without an explicit id, an id already bound by an enclosing fetch is
    reused, so a client used as another client's executor logs under the
    outer request's id. Otherwise a new UUID is generated. The previous
    binding is restored on exit.

    Args:
        request_id: Id to bind, if the caller already has one.

    Yields:
        The bound request id.
    """
    if request_id is None:
        bound = structlog.contextvars.get_contextvars().get(REQUEST_ID_KEY)
        request_id = bound if bound is not None else str(uuid.uuid4())

    with structlog.contextvars.bound_contextvars(**{REQUEST_ID_KEY: request_id}):
        yield request_id
