"""Interceptor that logs each request and its response."""

import json
import time

import httpx
import structlog

from fetchchain.core.chain import Chain
from fetchchain.core.models import RequestOptions, target_to_str
from fetchchain.interceptors.redact import redact_headers, redact_url_credentials


logger = structlog.get_logger()

FORM_BODY_PLACEHOLDER = "<<form>>"
BINARY_BODY_PLACEHOLDER = "<<binary>>"


class LoggingInterceptor:
    """Log request and response details around the rest of the pipeline.

    Headers and URL credentials are redacted. With ``log_bodies`` the
    request body and the response text are logged as well; the response is
    buffered by the executor, so reading it here leaves it intact for the
    caller. Errors from downstream are logged and re-raised unchanged.
    """

    def __init__(self, log_bodies: bool = False) -> None:
        self._log_bodies = log_bodies
        self._log = logger.bind(component="interceptor", interceptor="logging")

    async def intercept(self, chain: Chain) -> httpx.Response:
        request = chain.request()
        options = chain.options()
        url = redact_url_credentials(target_to_str(request))
        log = self._log.bind(method=options.method, url=url)

        request_fields: dict[str, object] = {
            "headers": redact_headers(options.headers),
        }
        if self._log_bodies and options.has_body:
            request_fields["body"] = describe_body(options)
        log.info("http_request", **request_fields)

        start_ns = time.perf_counter_ns()
        try:
            response = await chain.proceed(request, options)
        except Exception as e:
            log.warning(
                "http_error",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=_elapsed_ms(start_ns),
            )
            raise

        response_fields: dict[str, object] = {
            "status_code": response.status_code,
            "bytes": len(response.content),
            "duration_ms": _elapsed_ms(start_ns),
        }
        if self._log_bodies:
            response_fields["body"] = response.text
        log.info("http_response", **response_fields)
        return response


def describe_body(options: RequestOptions) -> str:
    """Render the request body of ``options`` as loggable text."""
    if options.data is not None or options.files is not None:
        return FORM_BODY_PLACEHOLDER
    if options.json is not None:
        return json.dumps(options.json, ensure_ascii=False)
    if isinstance(options.content, bytes):
        try:
            return options.content.decode("utf-8")
        except UnicodeDecodeError:
            return BINARY_BODY_PLACEHOLDER
    return options.content or ""


def _elapsed_ms(start_ns: int) -> float:
    return round((time.perf_counter_ns() - start_ns) / 1_000_000, 2)
