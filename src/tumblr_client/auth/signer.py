"""Apply credentials to a wire request."""

import logging

from tumblr_client.auth.credentials import ApiKeyCredentials, Credentials, NoAuth, OAuth1Credentials
from tumblr_client.auth.oauth1 import authorization_header
from tumblr_client.errors.exceptions import AuthError
from tumblr_client.transport.builder import WireRequest

logger = logging.getLogger(__name__)


def sign_request(
    wire: WireRequest,
    credentials: Credentials,
    *,
    nonce: str | None = None,
    timestamp: str | None = None,
) -> WireRequest:
    """Return a signed copy of ``wire``.

    API keys travel as the ``api_key`` query parameter for every method.
    OAuth1 signs the query parameters only; JSON and multipart bodies are
    never part of the signature base string.

    Args:
        wire: Unsigned request
        credentials: Resolved credentials
        nonce: Fixed OAuth nonce, generated when omitted
        timestamp: Fixed OAuth timestamp, generated when omitted

    Returns:
        Signed WireRequest

    Raises:
        AuthError: If OAuth1 credentials have an empty field
    """
    if isinstance(credentials, NoAuth):
        return wire

    if isinstance(credentials, ApiKeyCredentials):
        if not credentials.api_key:
            raise AuthError("API key credentials have an empty api_key")
        query = tuple(pair for pair in wire.query if pair[0] != "api_key")
        return wire.with_query(query + (("api_key", credentials.api_key),))

    if isinstance(credentials, OAuth1Credentials):
        missing = [
            name
            for name in ("consumer_key", "consumer_secret", "token", "token_secret")
            if not getattr(credentials, name)
        ]
        if missing:
            raise AuthError(f"OAuth1 credentials are missing: {', '.join(missing)}")

        header = authorization_header(
            wire.method,
            wire.url,
            wire.query,
            credentials,
            nonce=nonce,
            timestamp=timestamp,
        )
        logger.debug(f"Signed {wire.method} {wire.url} with OAuth1")
        return wire.with_header("Authorization", header)

    raise AuthError(f"Unsupported credentials type: {type(credentials).__name__}")
