"""Async HTTP client with a recursive interceptor pipeline.

A client resolves each request target against its base URL and passes it
down an ordered list of interceptors to a terminal executor:

    client = (
        build_client()
        .base_url("https://api.example.com")
        .add_interceptor(HeaderInterceptor({"X-Client": "reports"}))
        .build()
    )
    response = await client.fetch("/items", RequestOptions(method="GET"))
"""

from fetchchain.client import FetchChainClient, FetchChainClientBuilder, build_client
from fetchchain.core import (
    CancellationError,
    Chain,
    ConfigurationError,
    Executor,
    ExecutorConfig,
    FetchChainError,
    HttpxExecutor,
    Interceptor,
    InterceptorObject,
    PipelineError,
    RequestOptions,
    RequestTarget,
    TransportError,
    to_interceptor,
)


__version__ = "1.0.0"

__all__ = [
    "CancellationError",
    "Chain",
    "ConfigurationError",
    "Executor",
    "ExecutorConfig",
    "FetchChainClient",
    "FetchChainClientBuilder",
    "FetchChainError",
    "HttpxExecutor",
    "Interceptor",
    "InterceptorObject",
    "PipelineError",
    "RequestOptions",
    "RequestTarget",
    "TransportError",
    "build_client",
    "to_interceptor",
]
