"""Observability module for logging and metrics."""

from fetchchain.observability.logging import (
    REQUEST_ID_KEY,
    configure_logging,
    configure_logging_from_settings,
    request_context,
)
from fetchchain.observability.metrics import FetchMetrics


__all__ = [
    "REQUEST_ID_KEY",
    "FetchMetrics",
    "configure_logging",
    "configure_logging_from_settings",
    "request_context",
]
