"""Interceptor that adds fixed headers to every request."""

from collections.abc import Mapping

import httpx

from fetchchain.core.chain import Chain


class HeaderInterceptor:
    """Merge a fixed set of headers into each request's options.

    Headers already present on the request with the same name are
    overridden unless ``override`` is False.
    """

    def __init__(self, headers: Mapping[str, str], override: bool = True) -> None:
        self._headers = dict(headers)
        self._override = override

    async def intercept(self, chain: Chain) -> httpx.Response:
        options = chain.options()
        if self._override:
            headers = self._headers
        else:
            present = {key.lower() for key in options.headers}
            headers = {
                key: value
                for key, value in self._headers.items()
                if key.lower() not in present
            }
        return await chain.proceed(chain.request(), options.with_headers(headers))
