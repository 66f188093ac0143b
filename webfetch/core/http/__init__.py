"""
HTTP fetch layer.

This package provides the transport-bound client, rate limiter helpers,
the rate-limited fetch operation and its exception hierarchy.
"""

from webfetch.core.http.exceptions import (
    HTTPClientError,
    FetchConfigError,
    RequestBuildError,
    FetchCancelledError,
    RateLimitWaitError,
    HTTPConnectionError,
    HTTPTimeoutError,
    HTTPStatusError,
    BodyReadError,
    ResponseDecodeError
)
from webfetch.core.http.client import Client, new_client
from webfetch.core.http.rate_limit import (
    DEFAULT_RATE_LIMIT_INTERVAL,
    DEFAULT_RATE_LIMIT_BURST,
    new_rate_limiter,
    wait_for_permit
)
from webfetch.core.http.fetch import (
    CLASSIFIED_ERROR_STATUSES,
    fetch,
    fetch_json,
    validate_response
)

__all__ = [
    "Client",
    "new_client",
    "DEFAULT_RATE_LIMIT_INTERVAL",
    "DEFAULT_RATE_LIMIT_BURST",
    "new_rate_limiter",
    "wait_for_permit",
    "CLASSIFIED_ERROR_STATUSES",
    "fetch",
    "fetch_json",
    "validate_response",
    "HTTPClientError",
    "FetchConfigError",
    "RequestBuildError",
    "FetchCancelledError",
    "RateLimitWaitError",
    "HTTPConnectionError",
    "HTTPTimeoutError",
    "HTTPStatusError",
    "BodyReadError",
    "ResponseDecodeError",
]
