import asyncio

import httpx
import pytest
from aiolimiter import AsyncLimiter
from pydantic import ValidationError

from webfetch import Client, FetchConfig, FetchConfigError, new_rate_limiter
from webfetch.core.http.rate_limit import DEFAULT_RATE_LIMIT_BURST, DEFAULT_RATE_LIMIT_INTERVAL
from tests.mock_transport import RecordingHandler


class TestFetchConfig:
    """Unit tests for fetch configuration validation"""

    def setup_method(self):
        self.client = Client(httpx.MockTransport(RecordingHandler()))

    def teardown_method(self):
        asyncio.run(self.client.aclose())

    def test_complete_config_is_valid(self):
        config = FetchConfig(client=self.client, method="GET", url="https://api.example.com")
        config.validate_required()

    def test_empty_config_reports_client_first(self):
        with pytest.raises(FetchConfigError) as exc_info:
            FetchConfig().validate_required()
        assert exc_info.value.field == "Client"

    def test_method_reported_before_url(self):
        with pytest.raises(FetchConfigError) as exc_info:
            FetchConfig(client=self.client).validate_required()
        assert exc_info.value.field == "Method"

    def test_empty_url_reported(self):
        with pytest.raises(FetchConfigError) as exc_info:
            FetchConfig(client=self.client, method="GET", url="").validate_required()
        assert exc_info.value.field == "URL"
        assert str(exc_info.value) == '"URL" is a required field'

    def test_accepts_httpx_url(self):
        url = httpx.URL("https://api.example.com/accounts")
        config = FetchConfig(client=self.client, method="GET", url=url)
        config.validate_required()
        assert config.url == url

    def test_rejects_wrong_client_type(self):
        with pytest.raises(ValidationError):
            FetchConfig(client=object(), method="GET", url="https://api.example.com")

    def test_resolve_returns_supplied_limiter(self):
        limiter = new_rate_limiter(interval=0.5, burst=2)
        config = FetchConfig(client=self.client, method="GET", url="https://a.example", rate_limiter=limiter)
        assert config.resolve_rate_limiter() is limiter

    def test_resolve_builds_fresh_default_each_time(self):
        config = FetchConfig(client=self.client, method="GET", url="https://a.example")

        first = config.resolve_rate_limiter()
        second = config.resolve_rate_limiter()

        assert isinstance(first, AsyncLimiter)
        assert first is not second
        assert first.max_rate == DEFAULT_RATE_LIMIT_BURST
        assert first.time_period == DEFAULT_RATE_LIMIT_BURST * DEFAULT_RATE_LIMIT_INTERVAL
        assert config.rate_limiter is None
