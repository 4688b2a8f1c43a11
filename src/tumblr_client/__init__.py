"""Tumblr API client library.

Signs requests with an API key or OAuth1, builds JSON or multipart bodies,
unwraps the ``{meta, response}`` envelope and maps failures to typed errors.
Every request method can be awaited or given a callback.

Example:
    ```python
    from tumblr_client import TumblrClient

    async with TumblrClient(
        consumer_key="...",
        consumer_secret="...",
        token="...",
        token_secret="...",
    ) as client:
        user = await client.user_info()
        await client.create_post(user["user"]["name"], {"content": [{"type": "text", "text": "hi"}]})
    ```
"""

__version__ = "0.1.0"

from tumblr_client.client import TumblrClient, create_client  # noqa: E402
from tumblr_client.config import ClientConfig  # noqa: E402
from tumblr_client.errors import (  # noqa: E402
    AuthError,
    ConfigError,
    EnvelopeError,
    HttpError,
    InvalidParameterError,
    TransportError,
    TumblrError,
)

__all__ = [
    "AuthError",
    "ClientConfig",
    "ConfigError",
    "EnvelopeError",
    "HttpError",
    "InvalidParameterError",
    "TransportError",
    "TumblrClient",
    "TumblrError",
    "__version__",
    "create_client",
]
