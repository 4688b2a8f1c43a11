"""Transport layer: wire request construction and sending.

Modules:
    builder: Logical call -> WireRequest (query, JSON or multipart body, headers)
    sender: WireRequest -> httpx.Response through the shared AsyncClient

Example:
    ```python
    from tumblr_client.transport import LogicalRequest, build_request

    wire = build_request(
        LogicalRequest("GET", "/v2/tagged", {"tag": "cats"}, "https://api.tumblr.com/"),
        user_agent="tumblr-client/0.1.0",
    )
    ```
"""

from tumblr_client.transport.builder import (
    BodyKind,
    LogicalRequest,
    MultipartPart,
    WireRequest,
    build_request,
)
from tumblr_client.transport.sender import send

__all__ = [
    "BodyKind",
    "LogicalRequest",
    "MultipartPart",
    "WireRequest",
    "build_request",
    "send",
]
