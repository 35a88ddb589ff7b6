"""Immutable cursor that threads a request through the interceptors."""

from collections.abc import Sequence
from dataclasses import dataclass

import httpx

from fetchchain.core.executor import Executor
from fetchchain.core.interceptor import Interceptor
from fetchchain.core.models import RequestOptions, RequestTarget


@dataclass(frozen=True, eq=False)
class Chain:
    """Position-indexed view of what remains of the pipeline.

    A chain at ``position`` p hands control to ``interceptors[p]`` on
    ``proceed``; a chain past the last interceptor hands it to the executor.
    ``proceed`` never modifies the chain it is called on. It builds the next
    chain, so the same instance may be proceeded from any number of times,
    each call running an independent downstream execution.

    The interceptor sequence and executor are shared by reference between
    every chain of every call and must not be mutated.

    Attributes:
        position: Index of the interceptor that ``proceed`` will invoke.
        interceptors: Shared, ordered interceptor sequence.
        executor: Shared terminal executor.
        current_request: Request target captured at this position.
        current_options: Call options captured at this position.
    """

    position: int
    interceptors: Sequence[Interceptor]
    executor: Executor
    current_request: RequestTarget
    current_options: RequestOptions

    def __post_init__(self) -> None:
        if not 0 <= self.position <= len(self.interceptors):
            msg = (
                f"Chain position {self.position} out of range "
                f"0..{len(self.interceptors)}"
            )
            raise ValueError(msg)

    @classmethod
    def first(
        cls,
        interceptors: Sequence[Interceptor],
        executor: Executor,
        request: RequestTarget,
        options: RequestOptions | None = None,
    ) -> "Chain":
        """Create the chain at position zero.

        Args:
            interceptors: Interceptor sequence to share with later chains.
            executor: Executor to share with later chains.
            request: Initial request target.
            options: Initial options; empty options if omitted.

        Returns:
            The first chain of a pipeline run.
        """
        return cls(
            position=0,
            interceptors=interceptors,
            executor=executor,
            current_request=request,
            current_options=options if options is not None else RequestOptions(),
        )

    @property
    def is_terminal(self) -> bool:
        """Check whether ``proceed`` will call the executor."""
        return self.position == len(self.interceptors)

    def request(self) -> RequestTarget:
        """Get the request target captured at this position."""
        return self.current_request

    def options(self) -> RequestOptions:
        """Get the call options captured at this position."""
        return self.current_options

    async def proceed(
        self,
        request: RequestTarget,
        options: RequestOptions | None = None,
    ) -> httpx.Response:
        """Run the rest of the pipeline with ``request`` and ``options``.

        Errors raised downstream propagate unchanged.

        Args:
            request: Request target to forward.
            options: Options to forward; empty options if omitted.

        Returns:
            Response produced by the next interceptor or the executor.
        """
        if options is None:
            options = RequestOptions()

        if self.position < len(self.interceptors):
            interceptor = self.interceptors[self.position]
            return await interceptor(self._next(request, options))

        return await self.executor(request, options)

    def _next(self, request: RequestTarget, options: RequestOptions) -> "Chain":
        """Build the chain for the following position."""
        return Chain(
            position=self.position + 1,
            interceptors=self.interceptors,
            executor=self.executor,
            current_request=request,
            current_options=options,
        )
