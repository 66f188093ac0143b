"""
Rate-limited fetch: validate, throttle, send, classify, read.

One call is one linear pass with no retries. Any step's failure is raised
straight to the caller, and the response stream is closed on every way out.
"""

import asyncio
import json
from typing import Any, Optional

import httpx
from aiolimiter import AsyncLimiter
from pydantic import BaseModel, ValidationError

from webfetch.core.http.exceptions import (
    BodyReadError,
    FetchCancelledError,
    HTTPConnectionError,
    HTTPStatusError,
    ResponseDecodeError
)
from webfetch.core.http.rate_limit import wait_for_permit
from webfetch.core.logging import get_logger
from webfetch.pydantic_models.fetch.fetch_config_model import FetchConfigModel

logger = get_logger(__name__)

# Exactly these statuses are errors at this layer; 402, 503 etc. pass through.
CLASSIFIED_ERROR_STATUSES = frozenset({
    400,  # Bad Request
    401,  # Unauthorized
    403,  # Forbidden
    404,  # Not Found
    429,  # Too Many Requests
    500,  # Internal Server Error
})


class _Deadline:
    """Remaining-time bookkeeping for one call's optional timeout."""

    def __init__(self, timeout: Optional[float]):
        self.timeout = timeout
        self._expires_at = None
        if timeout is not None:
            self._expires_at = asyncio.get_running_loop().time() + timeout

    def remaining(self) -> Optional[float]:
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - asyncio.get_running_loop().time())

    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    async def run(self, awaitable, stage: str, url: str):
        if self.expired():
            awaitable.close()
            raise FetchCancelledError(
                message=f"deadline of {self.timeout}s exceeded before {stage}",
                url=url
            )
        try:
            return await asyncio.wait_for(awaitable, self.remaining())
        except asyncio.TimeoutError as e:
            raise FetchCancelledError(
                message=f"deadline of {self.timeout}s exceeded during {stage}",
                url=url,
                original_error=e
            )


async def _read_body(response: httpx.Response) -> bytes:
    try:
        return await response.aread()
    except (httpx.HTTPError, OSError) as e:
        raise BodyReadError(
            message=f"error reading response body: {e}",
            url=str(response.request.url),
            status_code=response.status_code,
            original_error=e
        )


async def validate_response(response: Optional[httpx.Response]) -> None:
    """
    Raise if the response is missing or carries a classified error status.

    Args:
        response: Response to inspect, or None if the transport produced nothing

    Raises:
        HTTPConnectionError: If there is no response
        HTTPStatusError: If the status is in CLASSIFIED_ERROR_STATUSES
        BodyReadError: If the error body could not be read
    """
    if response is None:
        raise HTTPConnectionError("no response, check request and env file")

    if response.status_code not in CLASSIFIED_ERROR_STATUSES:
        return

    await _read_body(response)
    raise HTTPStatusError(
        status_code=response.status_code,
        reason_phrase=response.reason_phrase,
        body=response.text,
        url=str(response.request.url)
    )


async def fetch(config: FetchConfigModel, timeout: Optional[float] = None) -> bytes:
    """
    Make one rate-limited request and return the raw response body.

    Args:
        config: Client, method, URL and optional rate limiter
        timeout: Deadline in seconds for the whole call, covering the permit
            wait, the send and the body read (None means no deadline; zero or
            negative means already expired)

    Returns:
        Response body bytes

    Raises:
        FetchConfigError: If client, method or URL is missing
        RequestBuildError: If the method or URL is malformed
        FetchCancelledError: If the deadline expires (RateLimitWaitError while throttled)
        HTTPConnectionError: If no response was received
        HTTPStatusError: If the status is a classified error
        BodyReadError: If the body stream fails
    """
    config.validate_required()

    limiter: AsyncLimiter = config.resolve_rate_limiter()
    request = config.client.build_request(config.method, config.url)
    url = str(request.url)

    deadline = _Deadline(timeout)
    if deadline.expired():
        raise FetchCancelledError(
            message=f"deadline of {timeout}s already expired, request not sent",
            url=url
        )

    await wait_for_permit(limiter, deadline.remaining(), url=url)

    response = await deadline.run(config.client.send(request), "send", url)
    try:
        logger.debug(f"{request.method} {url} -> {response.status_code} {response.reason_phrase}")
        await deadline.run(validate_response(response), "response classification", url)
        return await deadline.run(_read_body(response), "body read", url)
    finally:
        await response.aclose()


async def fetch_json(
    config: FetchConfigModel,
    response_model: Optional[type[BaseModel]] = None,
    timeout: Optional[float] = None
) -> Any:
    """
    Fetch and decode a JSON body.

    Args:
        config: Same as fetch
        response_model: Pydantic model to validate the body into (optional)
        timeout: Same as fetch

    Returns:
        Instance of response_model, or the decoded JSON value when no model is given

    Raises:
        ResponseDecodeError: If the body is not valid JSON or fails model validation
        HTTPClientError: Any error fetch raises
    """
    body = await fetch(config, timeout=timeout)

    try:
        if response_model is not None:
            return response_model.model_validate_json(body)
        return json.loads(body)
    except (ValidationError, ValueError) as e:
        raise ResponseDecodeError(
            message=f"could not decode response body: {e}",
            url=str(config.url),
            original_error=e
        )
