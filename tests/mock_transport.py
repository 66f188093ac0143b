"""Helpers for driving webfetch through httpx.MockTransport"""
import asyncio
import time
import httpx


class CountingStream(httpx.AsyncByteStream):
    """Response body stream that records how often it was closed"""

    def __init__(self, chunks, fail_at=None, delay=None):
        self.chunks = list(chunks)
        self.fail_at = fail_at
        self.delay = delay
        self.close_count = 0

    async def __aiter__(self):
        for index, chunk in enumerate(self.chunks):
            if self.delay is not None:
                await asyncio.sleep(self.delay)
            if self.fail_at is not None and index == self.fail_at:
                raise httpx.ReadError("connection reset mid-body")
            yield chunk

    async def aclose(self):
        self.close_count += 1


class RecordingHandler:
    """MockTransport handler that serves one canned response and records calls"""

    def __init__(self, status_code=200, body=b"", fail_at=None, error=None, delay=None):
        self.status_code = status_code
        self.body = body
        self.fail_at = fail_at
        self.error = error
        self.delay = delay
        self.requests = []
        self.sent_at = []
        self.streams = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.sent_at.append(time.monotonic())
        if self.error is not None:
            raise self.error
        stream = CountingStream(
            [self.body] if self.body else [],
            fail_at=self.fail_at,
            delay=self.delay
        )
        self.streams.append(stream)
        return httpx.Response(self.status_code, stream=stream)

    @property
    def calls(self):
        return len(self.requests)


class EmptyTransport(httpx.AsyncBaseTransport):
    """Transport that hands back nothing instead of a response"""

    def __init__(self):
        self.calls = 0

    async def handle_async_request(self, request: httpx.Request):
        self.calls += 1
        return None
