"""Send a signed wire request through httpx."""

import logging

import httpx

from tumblr_client.errors.exceptions import TransportError
from tumblr_client.transport.builder import WireRequest

logger = logging.getLogger(__name__)


async def send(client: httpx.AsyncClient, wire: WireRequest) -> httpx.Response:
    """Send ``wire`` once and return the buffered response.

    Redirects are never followed, a 301 is handed back to the caller.

    Args:
        client: Shared async client (carries the injected transport)
        wire: Signed request

    Returns:
        The HTTP response with its body read

    Raises:
        TransportError: If no response was obtained (connect, DNS, timeout)
    """
    request = wire.to_httpx()
    logger.debug(f"Sending {request.method} {request.url}")

    try:
        response = await client.send(request, follow_redirects=False)
    except httpx.RequestError as e:
        logger.debug(f"Request {request.method} {request.url} failed with {e!r}")
        raise TransportError(f"Request {request.method} {request.url} failed: {e}", original=e) from e

    logger.debug(f"Received {response.status_code} for {request.method} {request.url}")
    return response
