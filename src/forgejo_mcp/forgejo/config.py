"""Configuration module for Forgejo API interactions."""

import dataclasses
import os
from dataclasses import dataclass

from ..utils.env import is_env_ssl_verify
from .constants import (
    DEFAULT_SSL_VERIFY,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    ENV_FORGEJO_SSL_VERIFY,
    ENV_FORGEJO_TIMEOUT,
    ENV_FORGEJO_TOKEN,
    ENV_FORGEJO_URL,
    ENV_FORGEJO_VERSION,
)


@dataclass(frozen=True)
class ForgejoConfig:
    """Forgejo API configuration.

    Immutable once built, so one instance can be shared by every concurrent
    tool call of the server process.
    """

    url: str  # Base URL of the Forgejo/Gitea instance
    token: str | None = None  # Access token, sent as "Authorization: token <value>"
    user_agent: str = DEFAULT_USER_AGENT
    ssl_verify: bool = DEFAULT_SSL_VERIFY
    timeout: float = DEFAULT_TIMEOUT  # Seconds, applied to every request
    server_version: str | None = None  # Skips the /version probe when set

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("Forgejo URL must not be empty")
        object.__setattr__(self, "url", self.url.rstrip("/"))
        if self.timeout <= 0:
            raise ValueError("Forgejo timeout must be a positive number of seconds")

    @property
    def has_token(self) -> bool:
        """Whether requests carry an Authorization header."""
        return bool(self.token)

    @classmethod
    def from_env(cls) -> "ForgejoConfig":
        """Create configuration from environment variables.

        Returns:
            ForgejoConfig with values from environment variables

        Raises:
            ValueError: If required environment variables are missing or invalid
        """
        url = os.getenv(ENV_FORGEJO_URL)
        if not url:
            raise ValueError(f"Missing required {ENV_FORGEJO_URL} environment variable")

        timeout_str = os.getenv(ENV_FORGEJO_TIMEOUT)
        timeout = DEFAULT_TIMEOUT
        if timeout_str:
            try:
                timeout = float(timeout_str)
            except ValueError as e:
                raise ValueError(
                    f"{ENV_FORGEJO_TIMEOUT} must be a number of seconds, "
                    f"got '{timeout_str}'"
                ) from e

        return cls(
            url=url,
            token=os.getenv(ENV_FORGEJO_TOKEN) or None,
            ssl_verify=is_env_ssl_verify(ENV_FORGEJO_SSL_VERIFY),
            timeout=timeout,
            server_version=os.getenv(ENV_FORGEJO_VERSION) or None,
        )

    def with_token(self, token: str | None) -> "ForgejoConfig":
        """Return a copy of this configuration bound to another access token."""
        return dataclasses.replace(self, token=token)
