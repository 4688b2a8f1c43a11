"""OAuth 1.0a HMAC-SHA1 request signing (RFC 5849).

Everything in this module is a pure function of its arguments: nonce and
timestamp are inputs, so a signature can be reproduced exactly.

Example:
    ```python
    signature = oauth1_signature(
        "GET",
        "https://api.tumblr.com/v2/user/info",
        [("limit", "10")],
        credentials,
        nonce="abc",
        timestamp="1700000000",
    )
    ```
"""

import base64
import hashlib
import hmac
import secrets
import time
from collections.abc import Iterable
from urllib.parse import quote

import httpx

from tumblr_client.auth.credentials import OAuth1Credentials

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"


def percent_encode(value: object) -> str:
    """Encode per RFC 3986, leaving only unreserved characters as-is."""
    return quote(str(value), safe="~")


def generate_nonce() -> str:
    return secrets.token_hex(16)


def generate_timestamp() -> str:
    return str(int(time.time()))


def normalize_url(url: str) -> str:
    """Base string URI: scheme, host, non-default port and path, no query."""
    parsed = httpx.URL(url)
    return str(parsed.copy_with(query=None, fragment=None))


def normalize_parameters(params: Iterable[tuple[str, str]]) -> str:
    """Sort encoded ``name=value`` pairs and join them with ``&``."""
    encoded = sorted((percent_encode(name), percent_encode(value)) for name, value in params)
    return "&".join(f"{name}={value}" for name, value in encoded)


def signature_base_string(method: str, url: str, params: Iterable[tuple[str, str]]) -> str:
    return "&".join(
        [
            percent_encode(method.upper()),
            percent_encode(normalize_url(url)),
            percent_encode(normalize_parameters(params)),
        ]
    )


def protocol_parameters(credentials: OAuth1Credentials, nonce: str, timestamp: str) -> list[tuple[str, str]]:
    """OAuth protocol parameters, without the signature."""
    return [
        ("oauth_consumer_key", credentials.consumer_key),
        ("oauth_nonce", nonce),
        ("oauth_signature_method", SIGNATURE_METHOD),
        ("oauth_timestamp", timestamp),
        ("oauth_token", credentials.token),
        ("oauth_version", OAUTH_VERSION),
    ]


def oauth1_signature(
    method: str,
    url: str,
    params: Iterable[tuple[str, str]],
    credentials: OAuth1Credentials,
    nonce: str,
    timestamp: str,
) -> str:
    """Compute the ``oauth_signature`` value for a request.

    Args:
        method: HTTP method
        url: Request URL; any query string on it is ignored, pass query
            parameters through ``params``
        params: Query parameters (and url-encoded body parameters, if any)
        credentials: OAuth1 credentials
        nonce: Request nonce
        timestamp: Seconds since the epoch, as a string

    Returns:
        Base64-encoded HMAC-SHA1 signature
    """
    all_params = list(params) + protocol_parameters(credentials, nonce, timestamp)
    base_string = signature_base_string(method, url, all_params)
    key = f"{percent_encode(credentials.consumer_secret)}&{percent_encode(credentials.token_secret)}"
    digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


def authorization_header(
    method: str,
    url: str,
    params: Iterable[tuple[str, str]],
    credentials: OAuth1Credentials,
    nonce: str | None = None,
    timestamp: str | None = None,
) -> str:
    """Build the ``Authorization: OAuth ...`` header value.

    A fresh nonce and timestamp are generated unless given.
    """
    nonce = nonce or generate_nonce()
    timestamp = timestamp or generate_timestamp()
    signature = oauth1_signature(method, url, params, credentials, nonce, timestamp)

    header_params = protocol_parameters(credentials, nonce, timestamp) + [("oauth_signature", signature)]
    header_params.sort()
    return "OAuth " + ", ".join(f'{name}="{percent_encode(value)}"' for name, value in header_params)
