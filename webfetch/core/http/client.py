"""
HTTP client adapter over an injectable transport.

The transport is any httpx.AsyncBaseTransport; it is the piece that actually
moves bytes, and swapping it (e.g. for httpx.MockTransport) changes nothing
else about how requests are built, sent or classified.
"""

import re
from typing import Optional, Dict, Union

import httpx

from webfetch.core.config import WEBFETCH_TIMEOUT, WEBFETCH_USER_AGENT
from webfetch.core.http.exceptions import (
    HTTPConnectionError,
    HTTPTimeoutError,
    RequestBuildError
)
from webfetch.core.logging import get_logger

logger = get_logger(__name__)

# RFC 9110 token: the only characters allowed in a method name
_METHOD_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")

_ALLOWED_SCHEMES = ("http", "https")


class Client:
    """
    Async HTTP client bound to a caller-supplied transport.

    Example:
        ```python
        transport = httpx.AsyncHTTPTransport(retries=0)
        async with Client(transport) as client:
            request = client.build_request("GET", "https://api.example.com/data")
            response = await client.send(request)
        ```
    """

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport,
        *,
        timeout: float = WEBFETCH_TIMEOUT,
        headers: Optional[Dict[str, str]] = None
    ):
        """
        Initialize the client.

        Args:
            transport: Transport that executes requests
            timeout: Per-request transport timeout in seconds (default: WEBFETCH_TIMEOUT)
            headers: Extra headers sent with every request (optional)
        """
        merged_headers = {"User-Agent": WEBFETCH_USER_AGENT}
        if headers:
            merged_headers.update(headers)

        self.timeout = timeout
        self._client = httpx.AsyncClient(
            transport=transport,
            timeout=httpx.Timeout(timeout),
            headers=merged_headers
        )

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        """Close the underlying httpx client and its transport."""
        await self._client.aclose()

    def build_request(self, method: str, url: Union[httpx.URL, str]) -> httpx.Request:
        """
        Build a request with no body.

        Args:
            method: HTTP method token (GET, DELETE, ...)
            url: Absolute http(s) URL

        Returns:
            httpx.Request ready to send

        Raises:
            RequestBuildError: If the method or URL is malformed
        """
        if not isinstance(method, str) or not _METHOD_TOKEN.fullmatch(method):
            raise RequestBuildError(
                message=f"invalid method {method!r}",
                url=str(url)
            )

        try:
            parsed = url if isinstance(url, httpx.URL) else httpx.URL(url)
        except (httpx.InvalidURL, TypeError) as e:
            raise RequestBuildError(
                message=f"invalid URL {url!r}: {e}",
                url=str(url),
                original_error=e
            )

        if not parsed.is_absolute_url or parsed.scheme not in _ALLOWED_SCHEMES or not parsed.host:
            raise RequestBuildError(
                message=f"URL must be an absolute http(s) URL, got {str(parsed)!r}",
                url=str(parsed)
            )

        return self._client.build_request(method, parsed)

    async def send(self, request: httpx.Request) -> httpx.Response:
        """
        Send a request and return the response with its body still unread.

        The caller owns the returned response and must close it.

        Args:
            request: Request produced by build_request

        Returns:
            Open streaming httpx.Response

        Raises:
            HTTPTimeoutError: If the transport times out
            HTTPConnectionError: If the transport fails to produce a response
        """
        url = str(request.url)
        logger.debug(f"Sending {request.method} {url}")

        try:
            return await self._client.send(request, stream=True)

        except httpx.TimeoutException as e:
            raise HTTPTimeoutError(
                message=f"no response, {request.method} {url} timed out after {self.timeout}s",
                url=url,
                original_error=e
            )

        except httpx.RequestError as e:
            raise HTTPConnectionError(
                message=f"no response, error making request {request.method} {url}: {e}",
                url=url,
                original_error=e
            )

        except OSError as e:
            raise HTTPConnectionError(
                message=f"no response, connection failed for {request.method} {url}: {e}",
                url=url,
                original_error=e
            )

        except Exception as e:
            # transports that return None or a non-Response object end up here
            raise HTTPConnectionError(
                message=f"no response, transport failed for {request.method} {url}: {e!r}",
                url=url,
                original_error=e
            )


def new_client(transport: httpx.AsyncBaseTransport, **kwargs) -> Client:
    """
    Create a Client around the given transport.

    Args:
        transport: Transport that executes requests
        **kwargs: Passed through to Client (timeout, headers)

    Returns:
        Client instance
    """
    return Client(transport, **kwargs)
