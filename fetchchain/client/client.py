"""Client that resolves request targets and runs them through the chain."""

from collections.abc import Iterable

import httpx
import structlog

from fetchchain.client.url import resolve_request, validate_base_url
from fetchchain.core.chain import Chain
from fetchchain.core.executor import Executor, default_executor
from fetchchain.core.interceptor import Interceptor, to_interceptor
from fetchchain.core.models import RequestOptions, RequestTarget, target_to_str
from fetchchain.interceptors.redact import redact_url_credentials
from fetchchain.observability.logging import request_context


logger = structlog.get_logger()


class FetchChainClient:
    """HTTP client that runs every request through an interceptor pipeline.

    ``fetch`` has the same shape as an executor, so a client can stand in
    wherever an executor is expected, including as another client's
    executor. The bound method may be stored and called later on its own.

    Configuration is validated here, at construction time. A client holds
    no per-request state, so concurrent ``fetch`` calls never share chains
    or options.
    """

    def __init__(
        self,
        base_url: str | httpx.URL | None = None,
        interceptors: Iterable[object] = (),
        executor: Executor | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Prefix for relative request targets. Must not end
                with a slash.
            interceptors: Interceptors in execution order, as async
                callables or objects with an ``intercept`` method.
            executor: Terminal executor. Defaults to the httpx executor.

        Raises:
            ConfigurationError: If the base URL or an interceptor is invalid.
        """
        self._base_url = validate_base_url(base_url)
        self._interceptors: tuple[Interceptor, ...] = tuple(
            to_interceptor(interceptor) for interceptor in interceptors
        )
        self._executor: Executor = (
            executor if executor is not None else default_executor
        )
        self._log = logger.bind(component="client")

    @property
    def base_url(self) -> str | None:
        """Get the configured base URL."""
        return self._base_url

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        """Get the normalized interceptors in execution order."""
        return self._interceptors

    @property
    def executor(self) -> Executor:
        """Get the terminal executor."""
        return self._executor

    def resolve(self, request: RequestTarget) -> RequestTarget:
        """Resolve a request target against the base URL."""
        return resolve_request(request, self._base_url)

    async def fetch(
        self,
        request: RequestTarget,
        options: RequestOptions | None = None,
    ) -> httpx.Response:
        """Send a request through the interceptors and the executor.

        Every log line emitted during the call, by this client or by any
        interceptor or executor, carries the same ``request_id``.

        Args:
            request: Absolute URL, path relative to the base URL,
                ``httpx.URL`` or ``httpx.Request``.
            options: Call options; empty options if omitted.

        Returns:
            The response returned by the first interceptor, or by the
            executor when there are none.
        """
        resolved = self.resolve(request)
        if options is None:
            options = RequestOptions()

        with request_context():
            self._log.debug(
                "fetch_start",
                url=redact_url_credentials(target_to_str(resolved)),
                method=options.method,
                interceptors=len(self._interceptors),
            )

            chain = Chain.first(self._interceptors, self._executor, resolved, options)
            return await chain.proceed(resolved, options)

    __call__ = fetch
