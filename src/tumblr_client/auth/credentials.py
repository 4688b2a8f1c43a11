"""Credential classification and credential sources.

A client authenticates in one of three ways:

* no credentials at all,
* an API key (the OAuth consumer key sent as ``api_key``),
* full OAuth1 (consumer key/secret plus token/secret).

:func:`resolve_credentials` turns the four optional option values into exactly
one of those variants. :class:`CredentialResolver` finds the option values in
the environment, a ``.env`` file (python-dotenv) or a JSON credential file.

Example:
    ```python
    from tumblr_client.auth import CredentialResolver, resolve_credentials

    resolver = CredentialResolver()
    credentials = resolve_credentials(**resolver.resolve_options())
    ```

Security Considerations:
    - Secrets are never logged (masked with ***) and never part of ``repr()``
    - Only source information is logged (env var name, file path)
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock
from typing import Any

from dotenv import load_dotenv

from tumblr_client.auth.exceptions import CredentialFileError, CredentialNotFoundError
from tumblr_client.errors.exceptions import ConfigError

logger = logging.getLogger(__name__)

OAUTH_FIELDS = ("consumer_key", "consumer_secret", "token", "token_secret")

ENV_VARS = {
    "consumer_key": "TUMBLR_OAUTH_CONSUMER_KEY",
    "consumer_secret": "TUMBLR_OAUTH_CONSUMER_SECRET",
    "token": "TUMBLR_OAUTH_TOKEN",
    "token_secret": "TUMBLR_OAUTH_TOKEN_SECRET",
}

DEFAULT_CREDENTIALS_FILE = "credentials.json"


@dataclass(frozen=True)
class NoAuth:
    """Unauthenticated requests."""

    auth = "none"


@dataclass(frozen=True)
class ApiKeyCredentials:
    """Consumer key sent as the ``api_key`` query parameter."""

    api_key: str = field(repr=False)
    auth = "api_key"


@dataclass(frozen=True)
class OAuth1Credentials:
    """Consumer and token pairs used for HMAC-SHA1 request signing."""

    consumer_key: str
    consumer_secret: str = field(repr=False)
    token: str = field(repr=False)
    token_secret: str = field(repr=False)
    auth = "oauth1"


Credentials = NoAuth | ApiKeyCredentials | OAuth1Credentials


def _require_string(name: str, value: Any) -> str:
    if not value or not isinstance(value, str):
        raise ConfigError(f"Provide consumer_key or all oauth credentials. Invalid {name} provided.")
    return value


def resolve_credentials(
    consumer_key: str | None = None,
    consumer_secret: str | None = None,
    token: str | None = None,
    token_secret: str | None = None,
) -> Credentials:
    """Classify supplied credential options.

    ``None`` means the option was not supplied.

    Args:
        consumer_key: OAuth consumer key, alone it selects API key auth
        consumer_secret: OAuth consumer secret
        token: OAuth token
        token_secret: OAuth token secret

    Returns:
        NoAuth, ApiKeyCredentials or OAuth1Credentials

    Raises:
        ConfigError: If OAuth1 options are only partially supplied, or a
            supplied option is empty or not a string.
    """
    if any(value is not None for value in (consumer_secret, token, token_secret)):
        credentials = OAuth1Credentials(
            consumer_key=_require_string("consumer_key", consumer_key),
            consumer_secret=_require_string("consumer_secret", consumer_secret),
            token=_require_string("token", token),
            token_secret=_require_string("token_secret", token_secret),
        )
        logger.debug("Resolved OAuth1 credentials (consumer_key=***)")
        return credentials

    if consumer_key is not None:
        if not consumer_key or not isinstance(consumer_key, str):
            raise ConfigError("You must provide a consumer_key.")
        logger.debug("Resolved API key credentials (api_key=***)")
        return ApiKeyCredentials(api_key=consumer_key)

    logger.debug("No credentials supplied, requests will be unauthenticated")
    return NoAuth()


class CredentialResolver:
    """Find credential options in the environment, ``.env`` files and JSON files.

    Explicit values take precedence over environment variables, which are
    populated from a ``.env`` file on first use (without overriding variables
    that are already set).
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        """Initialize credential resolver.

        Args:
            dotenv_path: Path to .env file. If None, python-dotenv searches
                parent directories.
            load_dotenv: Whether to load a .env file at all.
        """
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for credential resolution")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Resolve one credential value.

        Args:
            value: Explicit value, wins over everything else.
            env_var_name: Environment variable to check.
            required: Raise instead of returning None when nothing is found.

        Returns:
            The resolved value, or None.

        Raises:
            CredentialNotFoundError: If required and not found.
        """
        if value is not None:
            logger.debug("Resolved credential from explicit parameter: ***")
            return value

        if env_var_name and os.environ.get(env_var_name):
            logger.debug(f"Resolved credential from environment variable '{env_var_name}': ***")
            return os.environ[env_var_name]

        if required:
            error_msg = "Required credential not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return None

    def resolve_options(self, *, required: bool = False, **explicit: str | None) -> dict[str, str | None]:
        """Resolve the four credential options from explicit values or env vars.

        Args:
            required: Require all four options, as OAuth1 signing does.
            **explicit: Any of ``consumer_key``, ``consumer_secret``, ``token``,
                ``token_secret``.

        Returns:
            Mapping suitable for :func:`resolve_credentials`.

        Raises:
            ConfigError: On an unknown option name.
            CredentialNotFoundError: If required and an option is not found.
        """
        unknown = set(explicit) - set(OAUTH_FIELDS)
        if unknown:
            raise ConfigError(f"Unknown credential options: {', '.join(sorted(unknown))}")

        return {
            name: self.resolve(value=explicit.get(name), env_var_name=ENV_VARS[name], required=required)
            for name in OAUTH_FIELDS
        }

    def resolve_from_file(self, file_path: str | Path = DEFAULT_CREDENTIALS_FILE) -> dict[str, str | None]:
        """Load credential options from a JSON file.

        The file holds an object with any of ``consumer_key``,
        ``consumer_secret``, ``token`` and ``token_secret``. Paths support
        ``~`` and ``$VAR`` expansion.

        Args:
            file_path: Path of the JSON credential file.

        Returns:
            Mapping suitable for :func:`resolve_credentials`.

        Raises:
            CredentialFileError: If the file is missing, unreadable, or not a
                JSON object.
        """
        path_obj = Path(os.path.expanduser(os.path.expandvars(str(file_path))))

        try:
            data = json.loads(path_obj.read_text())
        except FileNotFoundError:
            raise CredentialFileError(f"Credential file not found: {path_obj}") from None
        except PermissionError:
            raise CredentialFileError(f"Permission denied reading credential file: {path_obj}") from None
        except (OSError, ValueError) as e:
            raise CredentialFileError(f"Error reading credential file {path_obj}: {e}") from e

        if not isinstance(data, dict):
            raise CredentialFileError(f"Credential file {path_obj} must contain a JSON object")

        logger.debug(f"Resolved credentials from file: {path_obj} (***)")
        return {name: data.get(name) for name in OAUTH_FIELDS}
