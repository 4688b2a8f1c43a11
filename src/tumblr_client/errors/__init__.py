"""Error taxonomy and response envelope handling for the Tumblr client."""

from tumblr_client.errors.exceptions import (
    AuthError,
    BadRequestError,
    ClientError,
    ConfigError,
    ConflictError,
    EnvelopeError,
    ForbiddenError,
    HttpError,
    InvalidParameterError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TransportError,
    TumblrError,
    UnauthorizedError,
    ValidationError,
)
from tumblr_client.errors.handler import normalize_response, raise_http_error
from tumblr_client.errors.models import ResponseEnvelope

__all__ = [
    "AuthError",
    "BadRequestError",
    "ClientError",
    "ConfigError",
    "ConflictError",
    "EnvelopeError",
    "ForbiddenError",
    "HttpError",
    "InvalidParameterError",
    "NotFoundError",
    "RateLimitError",
    "ResponseEnvelope",
    "ServerError",
    "TransportError",
    "TumblrError",
    "UnauthorizedError",
    "ValidationError",
    "normalize_response",
    "raise_http_error",
]
