"""Interceptor that records request metrics."""

import time

import httpx

from fetchchain.core.chain import Chain
from fetchchain.observability.metrics import FetchMetrics


class MetricsInterceptor:
    """Record status, size, duration, and failures of each request.

    Failures are counted and re-raised unchanged.
    """

    def __init__(self, metrics: FetchMetrics | None = None) -> None:
        """Initialize the interceptor.

        Args:
            metrics: Metrics to record into. Defaults to the shared instance,
                looked up on every request so that ``FetchMetrics.reset``
                takes effect.
        """
        self._metrics = metrics

    @property
    def metrics(self) -> FetchMetrics:
        """Get the metrics this interceptor records into."""
        if self._metrics is not None:
            return self._metrics
        return FetchMetrics.get_instance()

    async def intercept(self, chain: Chain) -> httpx.Response:
        metrics = self.metrics
        start_ns = time.perf_counter_ns()
        try:
            response = await chain.proceed(chain.request(), chain.options())
        except Exception as e:
            metrics.record_failure(e)
            raise
        finally:
            metrics.record_duration((time.perf_counter_ns() - start_ns) / 1_000_000)

        metrics.record_request(response.status_code, len(response.content))
        return response
