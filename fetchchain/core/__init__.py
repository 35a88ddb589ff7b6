"""Request pipeline core: chain, interceptors, and executors.

A request travels down an ordered list of interceptors, each handed a
``Chain`` positioned after itself, until the last chain passes it to the
executor. The response then travels back up in reverse order.
"""

from fetchchain.core.chain import Chain
from fetchchain.core.errors import (
    CancellationError,
    ConfigurationError,
    FetchChainError,
    PipelineError,
    TransportError,
)
from fetchchain.core.executor import (
    Executor,
    ExecutorConfig,
    HttpxExecutor,
    default_executor,
)
from fetchchain.core.interceptor import Interceptor, InterceptorObject, to_interceptor
from fetchchain.core.models import RequestOptions, RequestTarget, target_to_str


__all__ = [
    # Chain
    "Chain",
    # Interceptors
    "Interceptor",
    "InterceptorObject",
    "to_interceptor",
    # Executors
    "Executor",
    "ExecutorConfig",
    "HttpxExecutor",
    "default_executor",
    # Models
    "RequestOptions",
    "RequestTarget",
    "target_to_str",
    # Errors
    "CancellationError",
    "ConfigurationError",
    "FetchChainError",
    "PipelineError",
    "TransportError",
]
