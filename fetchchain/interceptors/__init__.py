"""Ready-made interceptors built on the pipeline core."""

from fetchchain.interceptors.headers import HeaderInterceptor
from fetchchain.interceptors.logging import LoggingInterceptor, describe_body
from fetchchain.interceptors.metrics import MetricsInterceptor
from fetchchain.interceptors.redact import (
    REDACTED_VALUE,
    SENSITIVE_HEADERS,
    is_sensitive_header,
    redact_headers,
    redact_url_credentials,
)
from fetchchain.interceptors.status import (
    HttpStatusError,
    StatusCheckInterceptor,
    StatusErrorClass,
    classify_response,
    parse_retry_after,
)


__all__ = [
    # Interceptors
    "HeaderInterceptor",
    "LoggingInterceptor",
    "MetricsInterceptor",
    "StatusCheckInterceptor",
    "describe_body",
    # Status
    "HttpStatusError",
    "StatusErrorClass",
    "classify_response",
    "parse_retry_after",
    # Redaction
    "REDACTED_VALUE",
    "SENSITIVE_HEADERS",
    "is_sensitive_header",
    "redact_headers",
    "redact_url_credentials",
]
