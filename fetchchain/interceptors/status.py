"""Interceptor that turns error status codes into exceptions."""

from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from enum import Enum

import httpx

from fetchchain.core.chain import Chain
from fetchchain.core.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
    HTTP_STATUS_SERVER_ERROR_MAX,
    HTTP_STATUS_SERVER_ERROR_MIN,
    HTTP_STATUS_TOO_MANY_REQUESTS,
)
from fetchchain.core.errors import PipelineError


class StatusErrorClass(str, Enum):
    """Classification of error responses.

    - HTTP_4XX: Client error (except 429)
    - HTTP_5XX: Server error
    - RATE_LIMITED: 429 Too Many Requests
    """

    HTTP_4XX = "HTTP_4XX"
    HTTP_5XX = "HTTP_5XX"
    RATE_LIMITED = "RATE_LIMITED"


class HttpStatusError(PipelineError):
    """Raised when a response carries an error status code."""

    def __init__(
        self,
        error_class: StatusErrorClass,
        message: str,
        response: httpx.Response,
        retry_after: int | None = None,
    ) -> None:
        """Initialize the status error.

        Args:
            error_class: Classification of the status code.
            message: Human-readable error message.
            response: The offending response.
            retry_after: Seconds to wait, for 429 responses.
        """
        super().__init__(message)
        self.error_class = error_class
        self.message = message
        self.response = response
        self.retry_after = retry_after

    @property
    def status_code(self) -> int:
        """Get the response status code."""
        return self.response.status_code


class StatusCheckInterceptor:
    """Raise ``HttpStatusError`` for 4xx and 5xx responses.

    Register it first to check the final response, or last to check the
    raw executor response before other interceptors see it.
    """

    async def intercept(self, chain: Chain) -> httpx.Response:
        response = await chain.proceed(chain.request(), chain.options())
        error = classify_response(response)
        if error is not None:
            raise error
        return response


def classify_response(response: httpx.Response) -> HttpStatusError | None:
    """Classify a response status code as an error.

    Args:
        response: HTTP response.

    Returns:
        HttpStatusError if the status indicates an error, None otherwise.
    """
    status_code = response.status_code
    if HTTP_STATUS_OK_MIN <= status_code < HTTP_STATUS_OK_MAX:
        return None

    if status_code == HTTP_STATUS_TOO_MANY_REQUESTS:
        return HttpStatusError(
            error_class=StatusErrorClass.RATE_LIMITED,
            message="Rate limited (429 Too Many Requests)",
            response=response,
            retry_after=parse_retry_after(response.headers.get("retry-after")),
        )

    if HTTP_STATUS_BAD_REQUEST <= status_code < HTTP_STATUS_SERVER_ERROR_MIN:
        return HttpStatusError(
            error_class=StatusErrorClass.HTTP_4XX,
            message=f"Client error ({status_code})",
            response=response,
        )

    if HTTP_STATUS_SERVER_ERROR_MIN <= status_code < HTTP_STATUS_SERVER_ERROR_MAX:
        return HttpStatusError(
            error_class=StatusErrorClass.HTTP_5XX,
            message=f"Server error ({status_code})",
            response=response,
        )

    return None


def parse_retry_after(value: str | None) -> int | None:
    """Parse a Retry-After header value.

    Args:
        value: Header value (seconds or HTTP date).

    Returns:
        Seconds to wait, or None if not parseable.
    """
    if not value:
        return None

    try:
        return int(value)
    except ValueError:
        pass

    try:
        dt = parsedate_to_datetime(value)
        delta = dt - datetime.now(UTC)
        return max(0, int(delta.total_seconds()))
    except (ValueError, TypeError):
        pass

    return None
