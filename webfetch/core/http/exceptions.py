"""
Custom exceptions for fetch operations.

Every failure a fetch can hit is raised as a subclass of HTTPClientError,
so callers can catch the base class to handle any of them generically.
"""

from typing import Optional


class HTTPClientError(Exception):
    """
    Base exception for all fetch errors.

    Catch this to handle any fetch error generically.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        original_error: Optional[BaseException] = None
    ):
        """
        Initialize HTTP client error.

        Args:
            message: Human-readable error description
            url: The URL that was being accessed (optional)
            status_code: HTTP status code if applicable (optional)
            original_error: The underlying exception that caused this error (optional)
        """
        self.message = message
        self.url = url
        self.status_code = status_code
        self.original_error = original_error

        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.url:
            parts.append(f"URL: {self.url}")
        if self.status_code:
            parts.append(f"Status: {self.status_code}")
        return " | ".join(parts)


class FetchConfigError(HTTPClientError):
    """
    Exception raised when a required fetch configuration field is missing.

    Raised before any rate limiter or network activity.
    """

    def __init__(self, field: str):
        self.field = field
        super().__init__(f'"{field}" is a required field')


class RequestBuildError(HTTPClientError):
    """
    Exception raised when the method or URL cannot form a valid request.
    """
    pass


class FetchCancelledError(HTTPClientError):
    """
    Exception raised when the call's deadline expires.

    Also raised when the deadline had already expired before the call began.
    """
    pass


class RateLimitWaitError(FetchCancelledError):
    """
    Exception raised when the deadline expires while waiting for a rate limiter permit.

    No request has been sent when this is raised.
    """
    pass


class HTTPConnectionError(HTTPClientError):
    """
    Exception raised when no response was received.

    This includes DNS resolution failures, refused connections,
    dropped connections, etc.
    """
    pass


class HTTPTimeoutError(HTTPConnectionError):
    """
    Exception raised when the transport gives up waiting for the server.
    """
    pass


class HTTPStatusError(HTTPClientError):
    """
    Exception raised when the server answers with a classified error status.

    The message embeds the status code, the status line and the response body.
    """

    def __init__(
        self,
        status_code: int,
        reason_phrase: str,
        body: str,
        url: Optional[str] = None
    ):
        self.reason_phrase = reason_phrase
        self.body = body
        super().__init__(
            message=f"Status Code {status_code} ({status_code} {reason_phrase}): {body}",
            url=url,
            status_code=status_code
        )

    def __str__(self) -> str:
        """Status code, status line and body, with the body last."""
        return self.message


class BodyReadError(HTTPClientError):
    """
    Exception raised when the response body stream fails after the headers arrived.
    """
    pass


class ResponseDecodeError(HTTPClientError):
    """
    Exception raised when a response body cannot be decoded as the expected JSON.
    """
    pass
