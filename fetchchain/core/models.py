"""Request target and options types passed through the pipeline."""

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from fetchchain.core.constants import DEFAULT_METHOD


RequestTarget = str | httpx.URL | httpx.Request


@dataclass(frozen=True)
class RequestOptions:
    """Call options for a single request.

    Options are never mutated in place. An interceptor that wants to change
    them derives a new value with ``replace`` or ``with_headers`` and forwards
    that to ``Chain.proceed``.

    Attributes:
        method: HTTP method.
        headers: Request headers.
        params: Query parameters appended by the executor.
        content: Raw request body.
        data: Form fields.
        files: Multipart files.
        json: JSON-serializable body.
        timeout: Per-request timeout in seconds, overriding the executor default.
        follow_redirects: Override for the executor's redirect policy.
    """

    method: str = DEFAULT_METHOD
    headers: Mapping[str, str] = field(default_factory=dict)
    params: Mapping[str, Any] | None = None
    content: bytes | str | None = None
    data: Mapping[str, Any] | None = None
    files: Any = None
    json: Any = None
    timeout: float | None = None
    follow_redirects: bool | None = None

    def replace(self, **changes: Any) -> "RequestOptions":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def with_headers(self, headers: Mapping[str, str]) -> "RequestOptions":
        """Return a copy with ``headers`` merged over the current headers.

        Args:
            headers: Headers to add or override.

        Returns:
            New options; this instance is left untouched.
        """
        merged = dict(self.headers)
        merged.update(headers)
        return dataclasses.replace(self, headers=merged)

    @property
    def has_body(self) -> bool:
        """Check whether any request body field is set."""
        return any(
            value is not None
            for value in (self.content, self.data, self.files, self.json)
        )


def target_to_str(request: RequestTarget) -> str:
    """Render a request target as a URL string for logging."""
    if isinstance(request, httpx.Request):
        return str(request.url)
    return str(request)
