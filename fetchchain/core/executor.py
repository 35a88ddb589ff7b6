"""Terminal executors that perform the actual HTTP call."""

from typing import Annotated, Any, Protocol, runtime_checkable

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, Field

from fetchchain.core.constants import (
    DEFAULT_METHOD,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
)
from fetchchain.core.models import RequestOptions, RequestTarget


logger = structlog.get_logger()

# Derived from the URL and body when a prepared request is rebuilt
_RECOMPUTED_HEADERS = frozenset({"host", "content-length", "transfer-encoding"})


@runtime_checkable
class Executor(Protocol):
    """Protocol for the terminal step of the pipeline.

    An executor performs a request and returns its response. It knows
    nothing about interceptors or chains, and any coroutine function with
    this signature (``FetchChainClient.fetch`` included) qualifies.
    """

    async def __call__(
        self,
        request: RequestTarget,
        options: RequestOptions,
    ) -> httpx.Response:
        """Perform the request.

        Args:
            request: Resolved request target.
            options: Call options.

        Returns:
            The HTTP response.
        """
        ...


class ExecutorConfig(BaseModel):
    """Configuration for the default httpx executor."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    user_agent: Annotated[str, Field(min_length=1, max_length=500)] = (
        DEFAULT_USER_AGENT
    )
    default_timeout_seconds: Annotated[float, Field(ge=1.0, le=300.0)] = (
        DEFAULT_TIMEOUT_SECONDS
    )
    follow_redirects: bool = True


class HttpxExecutor:
    """Default executor backed by ``httpx.AsyncClient``.

    Without an injected client a new ``AsyncClient`` is opened for each call
    and closed once the body is buffered. An injected client is owned by the
    caller and never closed here. Responses are always fully read, so their
    body can be inspected any number of times.
    """

    def __init__(
        self,
        config: ExecutorConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            config: Executor configuration.
            client: Optional shared client owned by the caller.
        """
        self._config = config or ExecutorConfig()
        self._client = client
        self._log = logger.bind(component="executor")

    @property
    def config(self) -> ExecutorConfig:
        """Get the executor configuration."""
        return self._config

    async def __call__(
        self,
        request: RequestTarget,
        options: RequestOptions,
    ) -> httpx.Response:
        """Send the request and return the buffered response."""
        if self._client is not None:
            return await self._send(self._client, request, options)

        async with httpx.AsyncClient(
            timeout=self._config.default_timeout_seconds,
            follow_redirects=self._config.follow_redirects,
        ) as client:
            return await self._send(client, request, options)

    async def _send(
        self,
        client: httpx.AsyncClient,
        request: RequestTarget,
        options: RequestOptions,
    ) -> httpx.Response:
        """Execute a single request on ``client``.

        Args:
            client: Open client.
            request: Request target.
            options: Call options.

        Returns:
            Response with its body already read.
        """
        follow_redirects = (
            self._config.follow_redirects
            if options.follow_redirects is None
            else options.follow_redirects
        )

        if isinstance(request, httpx.Request):
            outgoing = await self._merge_prepared(client, request, options)
        else:
            outgoing = client.build_request(
                options.method,
                request,
                headers=self._with_user_agent(dict(options.headers)),
                params=options.params,
                content=options.content,
                data=options.data,
                files=options.files,
                json=options.json,
                timeout=self._timeout_for(options),
            )

        response = await client.send(outgoing, follow_redirects=follow_redirects)
        await response.aread()
        self._log.debug(
            "executor_response",
            method=outgoing.method,
            status_code=response.status_code,
            bytes=len(response.content),
        )
        return response

    async def _merge_prepared(
        self,
        client: httpx.AsyncClient,
        request: httpx.Request,
        options: RequestOptions,
    ) -> httpx.Request:
        """Apply forwarded options on top of a prepared ``httpx.Request``.

        Options win wherever they are set. Option headers override headers
        of the same name, and a body in the options replaces the request body.
        The request's method is kept unless the options name a method other
        than the default.
        """
        await request.aread()

        dropped = _RECOMPUTED_HEADERS | {key.lower() for key in options.headers}
        if options.has_body:
            dropped = dropped | {"content-type"}
        headers = {
            key: value
            for key, value in request.headers.items()
            if key.lower() not in dropped
        }
        headers.update(options.headers)

        method = request.method if options.method == DEFAULT_METHOD else options.method

        if options.has_body:
            body: dict[str, Any] = {
                "content": options.content,
                "data": options.data,
                "files": options.files,
                "json": options.json,
            }
        else:
            body = {"content": request.content or None}

        return client.build_request(
            method,
            request.url,
            headers=self._with_user_agent(headers),
            params=options.params,
            timeout=self._timeout_for(options),
            **body,
        )

    def _with_user_agent(self, headers: dict[str, str]) -> dict[str, str]:
        """Add the configured User-Agent to ``headers`` if absent."""
        if not any(key.lower() == "user-agent" for key in headers):
            headers["User-Agent"] = self._config.user_agent
        return headers

    def _timeout_for(self, options: RequestOptions) -> float:
        """Pick the per-request timeout in seconds."""
        if options.timeout is not None:
            return options.timeout
        return self._config.default_timeout_seconds


default_executor = HttpxExecutor()
