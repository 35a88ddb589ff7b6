"""Unit tests for interceptor normalization."""

import httpx
import pytest

from fetchchain.core.chain import Chain
from fetchchain.core.errors import ConfigurationError
from fetchchain.core.interceptor import InterceptorObject, to_interceptor
from tests.helpers.executors import RecordingExecutor


class TaggingInterceptor:
    """Object-form interceptor that adds a header."""

    def __init__(self, tag: str) -> None:
        self.tag = tag

    async def intercept(self, chain: Chain) -> httpx.Response:
        options = chain.options().with_headers({"X-Tag": self.tag})
        return await chain.proceed(chain.request(), options)


async def tag_function(chain: Chain) -> httpx.Response:
    options = chain.options().with_headers({"X-Tag": "function"})
    return await chain.proceed(chain.request(), options)


class TestToInterceptor:
    """Tests for to_interceptor."""

    def test_function_used_as_is(self) -> None:
        """Plain async functions are stored unchanged."""
        assert to_interceptor(tag_function) is tag_function

    def test_object_reduced_to_bound_method(self) -> None:
        """Objects with intercept() are stored as their bound method."""
        interceptor = TaggingInterceptor("object")

        normalized = to_interceptor(interceptor)

        assert normalized == interceptor.intercept
        assert normalized.__self__ is interceptor  # type: ignore[attr-defined]

    def test_normalization_is_idempotent(self) -> None:
        """Normalizing an already-normalized interceptor changes nothing."""
        normalized = to_interceptor(TaggingInterceptor("object"))

        assert to_interceptor(normalized) is normalized

    def test_object_form_matches_protocol(self) -> None:
        """Object-form interceptors satisfy the InterceptorObject protocol."""
        assert isinstance(TaggingInterceptor("x"), InterceptorObject)

    @pytest.mark.parametrize("candidate", [None, 42, "intercept", object()])
    def test_invalid_candidate_rejected(self, candidate: object) -> None:
        """Values that are neither form raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match="intercept") as exc_info:
            to_interceptor(candidate)

        assert exc_info.value.field == "interceptors"

    def test_class_rejected(self) -> None:
        """Passing the class instead of an instance fails at registration."""
        with pytest.raises(ConfigurationError, match="not the class") as exc_info:
            to_interceptor(TaggingInterceptor)

        assert exc_info.value.field == "interceptors"

    def test_sync_function_rejected(self) -> None:
        def sync_interceptor(chain: Chain) -> httpx.Response:
            return httpx.Response(200)

        with pytest.raises(ConfigurationError, match="must be async"):
            to_interceptor(sync_interceptor)

    def test_sync_intercept_method_rejected(self) -> None:
        class SyncInterceptor:
            def intercept(self, chain: Chain) -> httpx.Response:
                return httpx.Response(200)

        with pytest.raises(ConfigurationError, match="must be async"):
            to_interceptor(SyncInterceptor())

    def test_async_callable_object_accepted(self) -> None:
        """Instances with an async __call__ are valid function-form interceptors."""

        class CallableInterceptor:
            async def __call__(self, chain: Chain) -> httpx.Response:
                return await chain.proceed(chain.request(), chain.options())

        interceptor = CallableInterceptor()

        assert to_interceptor(interceptor) is interceptor

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("candidate", "expected_tag"),
        [(tag_function, "function"), (TaggingInterceptor("object"), "object")],
    )
    async def test_both_forms_behave_the_same(
        self, candidate: object, expected_tag: str
    ) -> None:
        """Function and object forms run identically once normalized."""
        executor = RecordingExecutor()
        chain = Chain.first((to_interceptor(candidate),), executor, "https://a.test")

        await chain.proceed("https://a.test")

        assert executor.calls[0].options.headers == {"X-Tag": expected_tag}
