"""Testing utilities for code built on the Tumblr client.

Example:
    ```python
    from tumblr_client import TumblrClient
    from tumblr_client.testing import DUMMY_CREDENTIALS, RecordingTransport, envelope_response


    async def test_blog_info():
        transport = RecordingTransport(lambda request: envelope_response({"blog": {"name": "staff"}}))
        client = TumblrClient(**DUMMY_CREDENTIALS, transport=transport)
        assert (await client.blog_info("staff"))["blog"]["name"] == "staff"
        assert transport.requests[0].url.path == "/v2/blog/staff/info"
    ```
"""

from collections.abc import Callable
from typing import Any

import httpx

DUMMY_CREDENTIALS = {
    "consumer_key": "Mario",
    "consumer_secret": "Luigi",
    "token": "Toad",
    "token_secret": "Princess Toadstool",
}

DUMMY_API_URL = "https://example.com"


def envelope_response(response: Any = None, status_code: int = 200, msg: str = "OK", **kwargs: Any) -> httpx.Response:
    """Build a success-shaped ``{meta, response}`` reply."""
    if response is None:
        response = {}
    return httpx.Response(
        status_code,
        json={"meta": {"status": status_code, "msg": msg}, "response": response},
        **kwargs,
    )


def error_response(status_code: int, msg: str, **kwargs: Any) -> httpx.Response:
    """Build an error reply with only ``meta``."""
    return httpx.Response(status_code, json={"meta": {"status": status_code, "msg": msg}}, **kwargs)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled.

    Args:
        handler: Called with each request, returns the response. Defaults to
            an empty success envelope.
    """

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response] | None = None):
        self.requests: list[httpx.Request] = []
        self._reply = handler or (lambda request: envelope_response())
        super().__init__(self._record)

    def _record(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._reply(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


__all__ = [
    "DUMMY_API_URL",
    "DUMMY_CREDENTIALS",
    "RecordingTransport",
    "envelope_response",
    "error_response",
]
