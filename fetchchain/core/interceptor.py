"""Interceptor contract and registration-time normalization."""

import inspect
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import httpx

from fetchchain.core.errors import ConfigurationError


if TYPE_CHECKING:
    from fetchchain.core.chain import Chain


Interceptor = Callable[["Chain"], Awaitable[httpx.Response]]
"""Normalized interceptor: an async callable taking the next chain."""


@runtime_checkable
class InterceptorObject(Protocol):
    """Object form of an interceptor.

    An interceptor reads the current request from ``chain.request()`` and
    ``chain.options()``, and continues the pipeline with
    ``await chain.proceed(request, options)``, forwarding either the same
    values or replacements. It may skip ``proceed`` entirely and return a
    response of its own, which short-circuits every later interceptor and
    the executor. Calling ``proceed`` more than once is allowed; each call
    runs the rest of the pipeline again and nothing is cached.
    """

    async def intercept(self, chain: "Chain") -> httpx.Response:
        """Handle one step of the pipeline.

        Args:
            chain: Chain positioned at the next interceptor.

        Returns:
            The response to hand back to the previous step.
        """
        ...


def to_interceptor(candidate: object) -> Interceptor:
    """Normalize an interceptor into its function form.

    Objects exposing a callable ``intercept`` are reduced to that bound
    method; plain async callables are used as they are. Classes and
    synchronous functions are rejected here rather than failing on the
    first request.

    Args:
        candidate: Interceptor object or async callable.

    Returns:
        The function-shaped interceptor.

    Raises:
        ConfigurationError: If ``candidate`` is neither form.
    """
    if inspect.isclass(candidate):
        msg = (
            f"Interceptor must be an instance, not the class "
            f"{candidate.__name__}; instantiate it before calling intercept()"
        )
        raise ConfigurationError(msg, field="interceptors")

    intercept = getattr(candidate, "intercept", None)
    if callable(intercept):
        return _require_async(intercept)
    if callable(candidate):
        return _require_async(candidate)

    msg = (
        f"Interceptor must be a callable or expose an intercept() method, "
        f"got {type(candidate).__name__}"
    )
    raise ConfigurationError(msg, field="interceptors")


def _require_async(func: Callable[..., object]) -> Interceptor:
    """Reject plain functions and methods that are not coroutine functions."""
    is_plain = inspect.isfunction(func) or inspect.ismethod(func)
    if is_plain and not inspect.iscoroutinefunction(func):
        name = getattr(func, "__qualname__", repr(func))
        msg = f"Interceptor {name} must be async (defined with 'async def')"
        raise ConfigurationError(msg, field="interceptors")
    return func  # type: ignore[return-value]
