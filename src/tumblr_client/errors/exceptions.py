"""Structured exceptions for API errors."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from tumblr_client.errors.models import ResponseEnvelope


class TumblrError(Exception):
    """Base exception for every error raised by the client."""


class ConfigError(TumblrError, ValueError):
    """Invalid client configuration (credentials or base URL)."""


class AuthError(TumblrError):
    """Credentials turned out to be unusable while signing a request."""


class InvalidParameterError(TumblrError, ValueError):
    """Endpoint arguments failed validation before a request was built."""


class TransportError(TumblrError):
    """The request never produced a response (connect, DNS, timeout)."""

    def __init__(self, message: str, original: Exception | None = None):
        super().__init__(message)
        self.original = original


class EnvelopeError(TumblrError):
    """The API answered with a body that is not a valid response envelope."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
        response: "httpx.Response | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.response = response


class HttpError(TumblrError):
    """Base exception for non-success API responses."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
        envelope: "ResponseEnvelope | None" = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response
        self.envelope = envelope


class ClientError(HttpError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class ConflictError(ClientError):
    """409 Conflict."""

    pass


class ValidationError(ClientError):
    """422 Unprocessable Entity (validation errors)."""

    def __init__(self, message: str, validation_errors: list[dict] | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.validation_errors = validation_errors if validation_errors is not None else []


class RateLimitError(ClientError):
    """429 Too Many Requests."""

    def __init__(self, message: str, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(HttpError):
    """5xx server errors."""

    pass
