"""Base URL validation and request target resolution."""

import httpx

from fetchchain.core.constants import ABSOLUTE_URL_PREFIXES, PATH_SEPARATOR
from fetchchain.core.errors import ConfigurationError
from fetchchain.core.models import RequestTarget


def validate_base_url(base_url: str | httpx.URL | None) -> str | None:
    """Validate a base URL and return it as a string.

    Args:
        base_url: Base URL, or None when requests are not resolved.

    Returns:
        The base URL as a string, or None.

    Raises:
        ConfigurationError: If the base URL ends with a slash or is not an
            absolute http(s) URL.
    """
    if base_url is None:
        return None

    value = str(base_url)
    if value.endswith(PATH_SEPARATOR):
        raise ConfigurationError("base_url must not end with a slash", field="base_url")

    if not is_absolute(value):
        msg = f"base_url must be an absolute http(s) URL, got {value!r}"
        raise ConfigurationError(msg, field="base_url")

    try:
        httpx.URL(value)
    except httpx.InvalidURL as e:
        msg = f"Invalid base_url: {e}"
        raise ConfigurationError(msg, field="base_url") from e

    return value


def is_absolute(url: str) -> bool:
    """Check whether ``url`` starts with a recognized scheme."""
    return url.startswith(ABSOLUTE_URL_PREFIXES)


def normalize_path(path: str) -> str:
    """Ensure ``path`` starts with a single leading slash."""
    if path.startswith(PATH_SEPARATOR):
        return path
    return f"{PATH_SEPARATOR}{path}"


def resolve_request(request: RequestTarget, base_url: str | None) -> RequestTarget:
    """Resolve a request target against the base URL.

    Only string targets are resolved. Absolute strings, ``httpx.URL`` and
    ``httpx.Request`` values pass through unchanged, as does everything when
    no base URL is configured.

    Args:
        request: Request target from the caller.
        base_url: Validated base URL, or None.

    Returns:
        The resolved request target.
    """
    if not isinstance(request, str):
        return request

    if is_absolute(request) or base_url is None:
        return request

    return f"{base_url}{normalize_path(request)}"
