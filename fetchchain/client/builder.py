"""Fluent builder for FetchChainClient."""

from typing import TYPE_CHECKING

import httpx
import structlog

from fetchchain.client.client import FetchChainClient
from fetchchain.core.executor import Executor, ExecutorConfig, HttpxExecutor
from fetchchain.core.interceptor import Interceptor, to_interceptor
from fetchchain.observability.logging import configure_logging_from_settings


if TYPE_CHECKING:
    from fetchchain.settings.app import ClientSettings


logger = structlog.get_logger()


class FetchChainClientBuilder:
    """Collects client configuration and assembles a FetchChainClient.

    Setters only record values and return the builder. Interceptors are
    normalized as they are added; the base URL is validated by ``build``,
    when the client is constructed.
    """

    def __init__(self) -> None:
        self._base_url: str | httpx.URL | None = None
        self._interceptors: list[Interceptor] = []
        self._executor: Executor | None = None

    @classmethod
    def from_settings(
        cls,
        settings: "ClientSettings",
        configure_logs: bool = True,
    ) -> "FetchChainClientBuilder":
        """Create a builder seeded from application settings.

        Args:
            settings: Loaded client settings.
            configure_logs: Apply ``log_level`` and ``log_json`` to the
                process-wide structlog configuration.

        Returns:
            Builder with base URL and an httpx executor configured.
        """
        if configure_logs:
            configure_logging_from_settings(settings)

        config = ExecutorConfig(
            user_agent=settings.user_agent,
            default_timeout_seconds=settings.timeout_seconds,
        )
        builder = cls().executor(HttpxExecutor(config))
        if settings.base_url is not None:
            builder.base_url(settings.base_url)
        return builder

    def base_url(self, base_url: str | httpx.URL) -> "FetchChainClientBuilder":
        """Set the base URL for relative request targets."""
        self._base_url = base_url
        return self

    def add_interceptor(self, interceptor: object) -> "FetchChainClientBuilder":
        """Append an interceptor.

        Args:
            interceptor: Async callable or object with an ``intercept`` method.

        Returns:
            This builder.

        Raises:
            ConfigurationError: If the interceptor has neither form.
        """
        self._interceptors.append(to_interceptor(interceptor))
        return self

    def add_interceptors(self, *interceptors: object) -> "FetchChainClientBuilder":
        """Append several interceptors in order."""
        for interceptor in interceptors:
            self.add_interceptor(interceptor)
        return self

    def executor(self, executor: Executor) -> "FetchChainClientBuilder":
        """Set the terminal executor."""
        self._executor = executor
        return self

    def build(self) -> FetchChainClient:
        """Assemble the client.

        Returns:
            A new client holding a snapshot of the current configuration.

        Raises:
            ConfigurationError: If the base URL is invalid.
        """
        client = FetchChainClient(
            base_url=self._base_url,
            interceptors=self._interceptors,
            executor=self._executor,
        )
        logger.debug(
            "client_built",
            component="builder",
            base_url=client.base_url,
            interceptors=len(client.interceptors),
        )
        return client


def build_client() -> FetchChainClientBuilder:
    """Start configuring a new client."""
    return FetchChainClientBuilder()
