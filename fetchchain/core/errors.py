"""Error types for the request pipeline.

The chain itself never raises, wraps, or suppresses errors. Anything an
interceptor or executor raises reaches the caller of ``fetch`` unchanged.
"""

import asyncio

import httpx


class FetchChainError(Exception):
    """Base exception for errors raised by this package."""


class ConfigurationError(FetchChainError, ValueError):
    """Invalid client configuration.

    Raised synchronously while a client or interceptor is being configured,
    never during request execution.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize the configuration error.

        Args:
            message: Human-readable error message.
            field: Name of the offending setting, if known.
        """
        super().__init__(message)
        self.message = message
        self.field = field


class PipelineError(FetchChainError):
    """Base for errors raised by interceptors shipped with this package."""


# Executor failures surface as-is; these names let callers catch them
# without importing httpx or asyncio directly.
TransportError = httpx.TransportError
CancellationError = asyncio.CancelledError
