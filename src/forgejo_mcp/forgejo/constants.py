"""Constants for the Forgejo integration."""

from typing import Final

from .. import __version__

# Environment variable names
ENV_FORGEJO_URL: Final[str] = "FORGEJO_URL"
ENV_FORGEJO_TOKEN: Final[str] = "FORGEJO_TOKEN"
ENV_FORGEJO_SSL_VERIFY: Final[str] = "FORGEJO_SSL_VERIFY"
ENV_FORGEJO_TIMEOUT: Final[str] = "FORGEJO_TIMEOUT"
ENV_FORGEJO_VERSION: Final[str] = "FORGEJO_VERSION"

# API endpoints
API_BASE_PATH: Final[str] = "/api/v1"
VERSION_ENDPOINT: Final[str] = f"{API_BASE_PATH}/version"

# Multipart field name the attachment endpoints expect for the file part
ATTACHMENT_FIELD_NAME: Final[str] = "attachment"

# Default values
DEFAULT_USER_AGENT: Final[str] = f"Forgejo-MCP/{__version__}"
DEFAULT_SSL_VERIFY: Final[bool] = True
DEFAULT_TIMEOUT: Final[float] = 30.0
DEFAULT_PAGE_LIMIT: Final[int] = 20
MAX_PAGE_LIMIT: Final[int] = 50
