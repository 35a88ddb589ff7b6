"""Client composition root and its builder."""

from fetchchain.client.builder import FetchChainClientBuilder, build_client
from fetchchain.client.client import FetchChainClient
from fetchchain.client.url import (
    is_absolute,
    normalize_path,
    resolve_request,
    validate_base_url,
)


__all__ = [
    "FetchChainClient",
    "FetchChainClientBuilder",
    "build_client",
    "is_absolute",
    "normalize_path",
    "resolve_request",
    "validate_base_url",
]
