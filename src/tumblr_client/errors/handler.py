"""Response normalization: envelope validation and status to exception mapping."""

import json
import logging
from typing import Any

import httpx

from tumblr_client.errors.exceptions import (
    BadRequestError,
    ClientError,
    ConflictError,
    EnvelopeError,
    ForbiddenError,
    HttpError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)
from tumblr_client.errors.models import ResponseEnvelope

logger = logging.getLogger(__name__)

# Raw bodies quoted in error messages are cut to this many characters
MAX_BODY_EXCERPT = 200

EXCEPTION_MAP: dict[int, type[HttpError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def _excerpt(text: str) -> str:
    if len(text) <= MAX_BODY_EXCERPT:
        return text
    return text[:MAX_BODY_EXCERPT] + "..."


def exception_class_for(status_code: int) -> type[HttpError]:
    """Pick the HttpError subclass for a status code."""
    if status_code in EXCEPTION_MAP:
        return EXCEPTION_MAP[status_code]
    if 400 <= status_code < 500:
        return ClientError
    if 500 <= status_code < 600:
        return ServerError
    return HttpError


def raise_http_error(
    status_code: int,
    envelope: ResponseEnvelope | None,
    response: httpx.Response | None = None,
) -> None:
    """Raise the HttpError subclass matching ``status_code``.

    Args:
        status_code: HTTP (or envelope) status to report
        envelope: Parsed envelope, if the body was a JSON object
        response: Raw HTTP response

    Raises:
        HttpError subclass based on status code
    """
    reason = envelope.error_message() if envelope else "unknown"
    message = f"API error: {status_code} {reason}"
    exc_class = exception_class_for(status_code)

    if exc_class is RateLimitError:
        retry_after = None
        if response is not None and "retry-after" in response.headers:
            try:
                retry_after = int(response.headers["retry-after"])
            except (ValueError, TypeError):
                retry_after = None
        raise exc_class(
            message=message,
            retry_after=retry_after,
            status_code=status_code,
            response=response,
            envelope=envelope,
        )

    if exc_class is ValidationError:
        validation_errors = None
        if envelope and isinstance(envelope.response, dict):
            errors = envelope.response.get("errors")
            if isinstance(errors, list):
                validation_errors = errors
        raise exc_class(
            message=message,
            validation_errors=validation_errors,
            status_code=status_code,
            response=response,
            envelope=envelope,
        )

    raise exc_class(
        message=message,
        status_code=status_code,
        response=response,
        envelope=envelope,
    )


def normalize_response(response: httpx.Response, method: str = "GET") -> Any:
    """Validate an API response and unwrap its ``response`` member.

    A 301 answering a GET is success-shaped (legacy avatar redirects) and
    passes ``response`` through when the body carries one.

    Args:
        response: HTTP response object
        method: Method of the request that produced the response

    Returns:
        The ``response`` value of the envelope

    Raises:
        EnvelopeError: Body is not JSON, or a success body has no ``response``
        HttpError subclass: Non-success HTTP status, or an error ``meta.status``
    """
    status_code = response.status_code
    text = response.text

    try:
        payload = json.loads(text)
    except ValueError as e:
        raise EnvelopeError(
            f"API error (malformed API response): {status_code} {_excerpt(text)!r} ({e})",
            status_code=status_code,
            body=text,
            response=response,
        ) from e

    envelope = ResponseEnvelope.from_payload(payload)
    legacy_redirect = status_code == 301 and method.upper() == "GET"

    if not response.is_success and not legacy_redirect:
        raise_http_error(status_code, envelope, response)

    if envelope is not None and envelope.status is not None and envelope.status >= 400:
        raise_http_error(envelope.status, envelope, response)

    if legacy_redirect:
        logger.debug("Treating 301 answer to GET as success")
        return envelope.response if envelope is not None else None

    if envelope is None or not envelope.has_response:
        raise EnvelopeError(
            f"API error (malformed API response): {status_code} {_excerpt(text)!r}",
            status_code=status_code,
            body=text,
            response=response,
        )

    return envelope.response
