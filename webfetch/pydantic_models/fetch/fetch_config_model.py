from typing import Optional, Union

import httpx
from aiolimiter import AsyncLimiter
from pydantic import BaseModel, ConfigDict

from webfetch.core.http.client import Client
from webfetch.core.http.exceptions import FetchConfigError
from webfetch.core.http.rate_limit import new_rate_limiter


'''Fetch configuration model (Pydantic)'''


class FetchConfigModel(BaseModel):
    """
    Everything one fetch call needs.

    Fields are optional at construction so an incomplete config can still be
    built and then reported by validate_required().
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    client: Optional[Client] = None
    method: Optional[str] = None
    url: Optional[Union[httpx.URL, str]] = None
    rate_limiter: Optional[AsyncLimiter] = None

    def validate_required(self) -> None:
        """
        Check that client, method and URL are all present, in that order.

        Raises:
            FetchConfigError: Naming the first missing field
        """
        if self.client is None:
            raise FetchConfigError("Client")
        if not self.method:
            raise FetchConfigError("Method")
        if self.url is None or (isinstance(self.url, str) and not self.url):
            raise FetchConfigError("URL")

    def resolve_rate_limiter(self) -> AsyncLimiter:
        """
        Return the configured limiter, or a fresh default one.

        The default is never stored back on the config, so calls without an
        explicit limiter do not throttle each other.
        """
        if self.rate_limiter is not None:
            return self.rate_limiter
        return new_rate_limiter()


FetchConfig = FetchConfigModel
