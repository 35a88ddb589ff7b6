"""Unit tests for FetchChainClient."""

import asyncio
from collections.abc import Awaitable, Callable

import httpx
import pytest
import structlog

from fetchchain.client.client import FetchChainClient
from fetchchain.core.chain import Chain
from fetchchain.core.errors import ConfigurationError
from fetchchain.core.executor import default_executor
from fetchchain.core.interceptor import Interceptor
from fetchchain.core.models import RequestOptions
from fetchchain.observability.logging import REQUEST_ID_KEY
from tests.helpers.executors import RecordingExecutor, make_response


BASE = "https://api.example.com"


class TestConstruction:
    """Tests for client construction and validation."""

    def test_valid_base_url(self) -> None:
        client = FetchChainClient(base_url=BASE, executor=RecordingExecutor())

        assert client.base_url == BASE

    def test_trailing_slash_rejected_at_construction(self) -> None:
        """Invalid base URLs fail before any request is made."""
        with pytest.raises(ConfigurationError, match="must not end with a slash"):
            FetchChainClient(base_url=f"{BASE}/")

    def test_no_base_url(self) -> None:
        client = FetchChainClient(executor=RecordingExecutor())

        assert client.base_url is None

    def test_default_executor(self) -> None:
        client = FetchChainClient()

        assert client.executor is default_executor

    def test_interceptors_normalized_to_tuple(self) -> None:
        """Interceptors are stored as an immutable tuple of callables."""

        class Passthrough:
            async def intercept(self, chain: Chain) -> httpx.Response:
                return await chain.proceed(chain.request(), chain.options())

        async def function_form(chain: Chain) -> httpx.Response:
            return await chain.proceed(chain.request(), chain.options())

        obj = Passthrough()
        client = FetchChainClient(interceptors=[obj, function_form])

        assert isinstance(client.interceptors, tuple)
        assert client.interceptors == (obj.intercept, function_form)

    def test_invalid_interceptor_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            FetchChainClient(interceptors=[42])


class TestFetch:
    """Tests for FetchChainClient.fetch."""

    @pytest.mark.asyncio
    async def test_no_interceptors_calls_executor_once(self) -> None:
        """Executor receives the resolved request and the caller's options."""
        executor = RecordingExecutor()
        client = FetchChainClient(base_url=BASE, executor=executor)
        options = RequestOptions(method="POST", json={"name": "value"})

        response = await client.fetch("/post", options)

        assert executor.call_count == 1
        assert executor.calls[0].request == f"{BASE}/post"
        assert executor.calls[0].options is options
        assert response.json()["url"] == f"{BASE}/post"

    @pytest.mark.asyncio
    async def test_executor_response_returned_unchanged(self) -> None:
        canned = make_response(204)

        async def executor(
            request: object, options: RequestOptions
        ) -> httpx.Response:
            return canned

        client = FetchChainClient(executor=executor)

        assert await client.fetch("https://a.test/x") is canned

    @pytest.mark.asyncio
    async def test_options_default_to_empty(self) -> None:
        executor = RecordingExecutor()
        client = FetchChainClient(executor=executor)

        await client.fetch("https://a.test/x")

        assert executor.calls[0].options == RequestOptions()

    @pytest.mark.asyncio
    async def test_absolute_target_ignores_base(self) -> None:
        executor = RecordingExecutor()
        client = FetchChainClient(base_url=BASE, executor=executor)

        await client.fetch("https://other.example.com/x")

        assert executor.calls[0].request == "https://other.example.com/x"

    @pytest.mark.asyncio
    async def test_first_interceptor_sees_resolved_request(self) -> None:
        seen: list[object] = []

        async def capture(chain: Chain) -> httpx.Response:
            seen.append(chain.request())
            return await chain.proceed(chain.request(), chain.options())

        client = FetchChainClient(
            base_url=BASE, interceptors=[capture], executor=RecordingExecutor()
        )

        await client.fetch("get")

        assert seen == [f"{BASE}/get"]

    @pytest.mark.asyncio
    async def test_executor_error_reaches_caller(self) -> None:
        error = httpx.ConnectError("Connection refused")
        client = FetchChainClient(executor=RecordingExecutor(error=error))

        with pytest.raises(httpx.ConnectError) as exc_info:
            await client.fetch("https://a.test/x")

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_call_alias(self) -> None:
        """Calling the client is the same as calling fetch."""
        executor = RecordingExecutor()
        client = FetchChainClient(base_url=BASE, executor=executor)

        await client("/get")

        assert executor.calls[0].request == f"{BASE}/get"


class TestDetachedFetch:
    """Tests for using fetch apart from the client object."""

    @pytest.mark.asyncio
    async def test_fetch_assigned_to_variable(self) -> None:
        executor = RecordingExecutor()
        fetch = FetchChainClient(base_url=BASE, executor=executor).fetch

        response = await fetch("/get")

        assert response.json()["url"] == f"{BASE}/get"

    @pytest.mark.asyncio
    async def test_fetch_as_object_attribute(self) -> None:
        class Requester:
            def __init__(
                self, do_fetch: Callable[..., Awaitable[httpx.Response]]
            ) -> None:
                self.do_fetch = do_fetch

        client = FetchChainClient(base_url=BASE, executor=RecordingExecutor())
        requester = Requester(client.fetch)

        response = await requester.do_fetch("/get")

        assert response.json()["url"] == f"{BASE}/get"

    @pytest.mark.asyncio
    async def test_fetch_as_callback(self) -> None:
        async def run(
            callback: Callable[[str], Awaitable[httpx.Response]],
        ) -> httpx.Response:
            return await callback("/get")

        client = FetchChainClient(base_url=BASE, executor=RecordingExecutor())

        response = await run(client.fetch)

        assert response.json()["url"] == f"{BASE}/get"

    @pytest.mark.asyncio
    async def test_client_as_executor_of_another_client(self) -> None:
        """An inner client's fetch can serve as an outer client's executor."""
        events: list[str] = []

        def tagger(name: str) -> Interceptor:
            async def tag(chain: Chain) -> httpx.Response:
                events.append(name)
                return await chain.proceed(chain.request(), chain.options())

            return tag

        executor = RecordingExecutor()
        inner = FetchChainClient(interceptors=[tagger("inner")], executor=executor)
        outer = FetchChainClient(
            base_url=BASE, interceptors=[tagger("outer")], executor=inner.fetch
        )

        await outer.fetch("/get")

        assert events == ["outer", "inner"]
        assert executor.calls[0].request == f"{BASE}/get"


class TestConcurrentFetch:
    """Tests for concurrent calls through one client."""

    @pytest.mark.asyncio
    async def test_concurrent_calls_keep_their_own_options(self) -> None:
        """Options derived inside one call never leak into another."""
        observed: dict[str, RequestOptions] = {}

        async def stamp(chain: Chain) -> httpx.Response:
            request_id = str(chain.request()).rsplit("/", 1)[-1]
            options = chain.options().with_headers({"X-Request": request_id})
            await asyncio.sleep(0)
            return await chain.proceed(chain.request(), options)

        async def observe(chain: Chain) -> httpx.Response:
            await asyncio.sleep(0)
            request_id = str(chain.request()).rsplit("/", 1)[-1]
            observed[request_id] = chain.options()
            return await chain.proceed(chain.request(), chain.options())

        executor = RecordingExecutor()
        client = FetchChainClient(
            base_url=BASE, interceptors=[stamp, observe], executor=executor
        )
        shared = RequestOptions(headers={"Accept": "application/json"})

        first, second = await asyncio.gather(
            client.fetch("/a", shared), client.fetch("/b", shared)
        )

        assert observed["a"].headers["X-Request"] == "a"
        assert observed["b"].headers["X-Request"] == "b"
        assert observed["a"] is not observed["b"]
        assert shared.headers == {"Accept": "application/json"}
        assert first.json()["headers"]["X-Request"] == "a"
        assert second.json()["headers"]["X-Request"] == "b"
        assert executor.call_count == 2


class TestRequestLogContext:
    """Tests for the request id bound to log lines during fetch."""

    @staticmethod
    def _id_recorder(seen: list[str]) -> Interceptor:
        async def record_request_id(chain: Chain) -> httpx.Response:
            seen.append(structlog.contextvars.get_contextvars()[REQUEST_ID_KEY])
            return await chain.proceed(chain.request(), chain.options())

        return record_request_id

    @pytest.mark.asyncio
    async def test_request_id_bound_during_fetch_only(self) -> None:
        seen: list[str] = []
        client = FetchChainClient(
            interceptors=[self._id_recorder(seen)], executor=RecordingExecutor()
        )

        await client.fetch("https://a.test/x")

        assert len(seen) == 1
        assert seen[0]
        assert REQUEST_ID_KEY not in structlog.contextvars.get_contextvars()

    @pytest.mark.asyncio
    async def test_each_fetch_gets_its_own_id(self) -> None:
        seen: list[str] = []
        client = FetchChainClient(
            interceptors=[self._id_recorder(seen)], executor=RecordingExecutor()
        )

        await asyncio.gather(
            client.fetch("https://a.test/a"), client.fetch("https://a.test/b")
        )
        await client.fetch("https://a.test/c")

        assert len(set(seen)) == 3

    @pytest.mark.asyncio
    async def test_nested_client_shares_outer_id(self) -> None:
        """A client used as another client's executor logs under the same id."""
        seen: list[str] = []
        inner = FetchChainClient(
            interceptors=[self._id_recorder(seen)], executor=RecordingExecutor()
        )
        outer = FetchChainClient(
            interceptors=[self._id_recorder(seen)], executor=inner.fetch
        )

        await outer.fetch("https://a.test/x")

        assert len(seen) == 2
        assert seen[0] == seen[1]
