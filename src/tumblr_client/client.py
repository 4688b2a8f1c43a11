"""Tumblr API client."""

import logging
import warnings
from collections.abc import Awaitable
from pathlib import Path
from typing import Any

import httpx

from tumblr_client import __version__
from tumblr_client.auth.credentials import DEFAULT_CREDENTIALS_FILE, Credentials, CredentialResolver
from tumblr_client.auth.signer import sign_request
from tumblr_client.callbacks import Callback, RequestResult, deliver, deliver_both, split_callback
from tumblr_client.config import DEFAULT_TIMEOUT, ClientConfig
from tumblr_client.endpoints import ENDPOINTS, ENDPOINTS_BY_NAME, Endpoint
from tumblr_client.errors.handler import normalize_response
from tumblr_client.transport.builder import LogicalRequest, WireRequest, build_request
from tumblr_client.transport.sender import send

logger = logging.getLogger(__name__)


class TumblrClient:
    """Client for the Tumblr API.

    Credentials select the authentication mode: nothing, ``consumer_key``
    alone (API key), or all four OAuth1 values.

    Every request method takes an optional ``callback``. With a callback the
    request is scheduled on the running loop, the callback gets
    ``(error, body, raw_response)`` and the method returns ``None``.
    Without one the method returns an awaitable of the unwrapped body.

    Example:
        ```python
        async with TumblrClient(consumer_key="abc123") as client:
            info = await client.blog_info("staff")
        ```
    """

    version = __version__

    def __init__(
        self,
        *,
        consumer_key: str | None = None,
        consumer_secret: str | None = None,
        token: str | None = None,
        token_secret: str | None = None,
        base_url: str | None = None,
        promise_mode: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        config: ClientConfig | None = None,
    ):
        """Create a client.

        Args:
            consumer_key: OAuth consumer key, alone it is used as an API key
            consumer_secret: OAuth consumer secret
            token: OAuth token
            token_secret: OAuth token secret
            base_url: API origin, defaults to https://api.tumblr.com/
            promise_mode: Endpoint methods always return an awaitable task,
                invoking a given callback as well
            transport: httpx transport to send requests through
            timeout: Request timeout in seconds
            config: Prebuilt configuration, replaces all other options but
                ``promise_mode``

        Raises:
            ConfigError: If credentials are partial or base_url is not an origin
        """
        if config is None:
            config = ClientConfig.from_options(
                consumer_key=consumer_key,
                consumer_secret=consumer_secret,
                token=token,
                token_secret=token_secret,
                base_url=base_url,
                transport=transport,
                timeout=timeout,
            )
        self.config = config
        self.promise_mode = promise_mode
        self._http = httpx.AsyncClient(transport=config.transport, timeout=config.timeout)

    @classmethod
    def from_env(
        cls,
        *,
        dotenv_path: str | None = None,
        load_dotenv: bool = True,
        require_oauth: bool = False,
        **options: Any,
    ) -> "TumblrClient":
        """Create a client from ``TUMBLR_OAUTH_*`` environment variables.

        Explicit credential options win over the environment.

        Args:
            dotenv_path: Path to a .env file, searched for when omitted
            load_dotenv: Whether to load a .env file at all
            require_oauth: Fail unless all four OAuth1 values are found
            **options: Other :class:`TumblrClient` options

        Raises:
            CredentialNotFoundError: If ``require_oauth`` and a value is missing;
                the error names the environment variable that was checked
        """
        resolver = CredentialResolver(dotenv_path=dotenv_path, load_dotenv=load_dotenv)
        explicit = {name: options.pop(name) for name in list(options) if name in _CREDENTIAL_OPTIONS}
        return cls(**resolver.resolve_options(required=require_oauth, **explicit), **options)

    @classmethod
    def from_credentials_file(cls, path: str | Path = DEFAULT_CREDENTIALS_FILE, **options: Any) -> "TumblrClient":
        """Create a client from a JSON credential file."""
        resolver = CredentialResolver(load_dotenv=False)
        return cls(**resolver.resolve_from_file(path), **options)

    @property
    def credentials(self) -> Credentials:
        return self.config.credentials

    @property
    def base_url(self) -> str:
        return self.config.base_url

    async def __aenter__(self) -> "TumblrClient":
        await self._http.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self._http.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        await self._http.aclose()

    def return_promises(self) -> None:
        """Switch endpoint methods to promise mode.

        Deprecated: pass ``promise_mode=True`` instead; plain calls without a
        callback already return awaitables.
        """
        warnings.warn(
            "return_promises() is deprecated, awaitables are returned whenever no callback is given",
            DeprecationWarning,
            stacklevel=2,
        )
        logger.warning("return_promises is deprecated. Awaitables are returned if no callback is provided.")
        self.promise_mode = True

    def build(self, method: str, path: str, params: dict[str, Any] | None = None) -> WireRequest:
        """Build the unsigned wire request for a call."""
        logical = LogicalRequest(method=method, path=path, params=params or {}, base_url=self.config.base_url)
        return build_request(logical, self.config.user_agent)

    async def _execute(self, wire: WireRequest) -> RequestResult:
        signed = sign_request(wire, self.config.credentials)
        response = await send(self._http, signed)
        return RequestResult(body=normalize_response(response, wire.method), response=response)

    def _request(
        self,
        method: str,
        path: str,
        params: Any = None,
        callback: Callback | None = None,
        *,
        promise: bool = False,
    ) -> Awaitable[Any] | None:
        params, callback = split_callback(params, callback)
        wire = self.build(method, path, params)
        operation = self._execute(wire)
        if promise:
            return deliver_both(operation, callback)
        return deliver(operation, callback)

    def get_request(self, path: str, params: Any = None, callback: Callback | None = None) -> Awaitable[Any] | None:
        """Perform a GET request; params become the query string.

        Args:
            path: API path, may carry its own query string
            params: Query parameters, or the callback
            callback: Optional ``(error, body, raw_response)`` callback

        Returns:
            Awaitable of the unwrapped response, or None with a callback
        """
        return self._request("GET", path, params, callback)

    def post_request(self, path: str, params: Any = None, callback: Callback | None = None) -> Awaitable[Any] | None:
        """Perform a POST request with a JSON or multipart body."""
        return self._request("POST", path, params, callback)

    def put_request(self, path: str, params: Any = None, callback: Callback | None = None) -> Awaitable[Any] | None:
        """Perform a PUT request with a JSON or multipart body."""
        return self._request("PUT", path, params, callback)

    def call_endpoint(
        self,
        endpoint: Endpoint | str,
        *args: Any,
        params: Any = None,
        callback: Callback | None = None,
    ) -> Awaitable[Any] | None:
        """Dispatch a call described by an :class:`Endpoint`.

        Positional arguments fill the path placeholders in order and may be
        followed by the params and the callback.

        Raises:
            InvalidParameterError: If path arguments or required fields are
                missing
            TypeError: On too many positional arguments
        """
        if isinstance(endpoint, str):
            endpoint = ENDPOINTS_BY_NAME[endpoint]

        count = len(endpoint.path_params)
        path_args, extra = args[:count], args[count:]
        if len(extra) > 2:
            raise TypeError(f"{endpoint.name}() got {len(extra)} extra positional arguments")
        if extra:
            if params is not None:
                raise TypeError(f"{endpoint.name}() got params both positionally and by keyword")
            params = extra[0]
        if len(extra) == 2:
            if callback is not None:
                raise TypeError(f"{endpoint.name}() got callback both positionally and by keyword")
            callback = extra[1]

        params, callback = split_callback(params, callback)
        path, params = endpoint.prepare(path_args, params)
        return self._request(endpoint.method, path, params, callback, promise=self.promise_mode)


_CREDENTIAL_OPTIONS = frozenset(["consumer_key", "consumer_secret", "token", "token_secret"])


def _endpoint_method(endpoint: Endpoint):
    def method(self: TumblrClient, *args: Any, params: Any = None, callback: Callback | None = None):
        return self.call_endpoint(endpoint, *args, params=params, callback=callback)

    signature = ", ".join(endpoint.path_params + ("params=None", "callback=None"))
    method.__name__ = endpoint.name
    method.__qualname__ = f"TumblrClient.{endpoint.name}"
    method.__doc__ = f"{endpoint.doc}\n\n{endpoint.method} {endpoint.path}\n\nCall as ``{endpoint.name}({signature})``."
    return method


for _endpoint in ENDPOINTS:
    setattr(TumblrClient, _endpoint.name, _endpoint_method(_endpoint))
del _endpoint


def create_client(**options: Any) -> TumblrClient:
    """Create a :class:`TumblrClient`."""
    return TumblrClient(**options)
