"""Constants for the request pipeline."""

# URL schemes that mark a request target as already absolute
ABSOLUTE_URL_PREFIXES = ("http://", "https://")

# Path separator that a base URL must not end with
PATH_SEPARATOR = "/"

DEFAULT_METHOD = "GET"
DEFAULT_USER_AGENT = "fetchchain/1.0"
DEFAULT_TIMEOUT_SECONDS = 30.0

# HTTP status code ranges
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_TOO_MANY_REQUESTS = 429
HTTP_STATUS_SERVER_ERROR_MIN = 500
HTTP_STATUS_SERVER_ERROR_MAX = 600
