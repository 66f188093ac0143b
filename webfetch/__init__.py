"""
webfetch - rate-limited outbound HTTP fetching over an injectable transport.
"""

from webfetch.core.http import (
    Client,
    new_client,
    fetch,
    fetch_json,
    new_rate_limiter,
    HTTPClientError,
    FetchConfigError,
    RequestBuildError,
    FetchCancelledError,
    RateLimitWaitError,
    HTTPConnectionError,
    HTTPTimeoutError,
    HTTPStatusError,
    BodyReadError,
    ResponseDecodeError,
)
from webfetch.pydantic_models.fetch.fetch_config_model import FetchConfig

__all__ = [
    "Client",
    "new_client",
    "fetch",
    "fetch_json",
    "new_rate_limiter",
    "FetchConfig",
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
