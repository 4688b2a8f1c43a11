"""Custom exceptions for credential loading.

Credential problems are configuration problems, so every exception here is a
:class:`~tumblr_client.errors.ConfigError` and is raised before any request
is sent.

Example:
    ```python
    from tumblr_client.auth.exceptions import CredentialNotFoundError

    if not consumer_key:
        raise CredentialNotFoundError("Consumer key not found", env_var_name="TUMBLR_OAUTH_CONSUMER_KEY")
    ```
"""

from tumblr_client.errors.exceptions import ConfigError


class CredentialError(ConfigError):
    """Base exception for credential-related errors.

    All credential-specific exceptions inherit from this class,
    making it easy to catch any credential-related error.
    """

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required credential cannot be resolved.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        """Initialize CredentialNotFoundError.

        Args:
            message: Error message describing what credential is missing.
            env_var_name: Optional environment variable name for reference.
        """
        super().__init__(message)
        self.env_var_name = env_var_name


class CredentialFileError(CredentialError):
    """Raised when a credential file cannot be read or decoded."""

    pass
