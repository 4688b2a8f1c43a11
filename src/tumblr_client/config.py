"""Client configuration."""

import logging
from dataclasses import dataclass, field

import httpx

from tumblr_client.auth.credentials import Credentials, NoAuth, resolve_credentials
from tumblr_client.errors.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.tumblr.com/"
DEFAULT_TIMEOUT = 30.0


def default_user_agent() -> str:
    from tumblr_client import __version__

    return f"tumblr-client/{__version__}"


def validate_base_url(base_url: str) -> str:
    """Check that ``base_url`` is an origin and return it with a trailing slash.

    Raises:
        ConfigError: If the URL is invalid or has a path, query, fragment,
            username or password.
    """
    try:
        url = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as e:
        raise ConfigError("Invalid base_url option provided.") from e

    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigError("Invalid base_url option provided.")
    if url.path not in ("", "/"):
        raise ConfigError("base_url option must not include a pathname.")
    if url.query:
        raise ConfigError("base_url option must not include search params (query).")
    if url.username:
        raise ConfigError("base_url option must not include username.")
    if url.password:
        raise ConfigError("base_url option must not include password.")
    if url.fragment:
        raise ConfigError("base_url option must not include hash.")

    return str(url.copy_with(path="/"))


@dataclass(frozen=True)
class ClientConfig:
    """Everything a client needs to build, sign and send requests.

    Attributes:
        credentials: NoAuth, ApiKeyCredentials or OAuth1Credentials
        base_url: API origin, normalized to end with ``/``
        user_agent: ``User-Agent`` header value
        transport: Optional httpx transport (``httpx.MockTransport`` in tests)
        timeout: Request timeout in seconds
    """

    credentials: Credentials = field(default_factory=NoAuth)
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = field(default_factory=default_user_agent)
    transport: httpx.AsyncBaseTransport | None = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        object.__setattr__(self, "base_url", validate_base_url(self.base_url))
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError("timeout must be positive")

    @classmethod
    def from_options(
        cls,
        *,
        consumer_key: str | None = None,
        consumer_secret: str | None = None,
        token: str | None = None,
        token_secret: str | None = None,
        base_url: str | None = None,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "ClientConfig":
        """Build a config from the flat option names the API documents."""
        credentials = resolve_credentials(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            token=token,
            token_secret=token_secret,
        )
        config = cls(
            credentials=credentials,
            base_url=base_url if base_url is not None else DEFAULT_BASE_URL,
            user_agent=user_agent or default_user_agent(),
            transport=transport,
            timeout=timeout,
        )
        logger.debug(f"Configured client for {config.base_url} with {credentials.auth} auth")
        return config
