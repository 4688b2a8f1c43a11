"""Authentication components for the Tumblr client.

This module provides:
- Credential classification (none, API key, OAuth1)
- Credential sources (explicit values, env vars, .env, JSON files)
- OAuth1 HMAC-SHA1 signing and API key injection

Example:
    ```python
    from tumblr_client.auth import resolve_credentials, sign_request

    credentials = resolve_credentials(consumer_key="abc123")
    signed = sign_request(wire_request, credentials)
    ```
"""

from tumblr_client.auth.credentials import (
    ApiKeyCredentials,
    CredentialResolver,
    Credentials,
    NoAuth,
    OAuth1Credentials,
    resolve_credentials,
)
from tumblr_client.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)
from tumblr_client.auth.oauth1 import authorization_header, oauth1_signature
from tumblr_client.auth.signer import sign_request

__all__ = [
    "ApiKeyCredentials",
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "Credentials",
    "NoAuth",
    "OAuth1Credentials",
    "authorization_header",
    "oauth1_signature",
    "resolve_credentials",
    "sign_request",
]
