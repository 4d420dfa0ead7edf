class MCPForgejoError(Exception):
    """Base exception for MCP-Forgejo errors."""

    pass


class MCPForgejoAuthenticationError(MCPForgejoError):
    """Raised when Forgejo API authentication fails (401/403)."""

    pass


class ForgejoApiError(MCPForgejoError):
    """Base class for failures of a single Forgejo API round trip."""

    pass


class InvalidEndpointError(ForgejoApiError):
    """Raised when base URL + endpoint path is not a well-formed URL."""

    def __init__(self, url: str, reason: str | None = None) -> None:
        self.url = url
        message = f"Invalid endpoint URL: {url}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ForgejoTransportError(ForgejoApiError):
    """Raised when the HTTP exchange itself fails (DNS, connection, timeout)."""

    pass


class ForgejoHTTPError(ForgejoApiError):
    """Raised when the server answers with a status code >= 400."""

    def __init__(
        self, status_code: int, reason: str, response_text: str | None = None
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.response_text = response_text
        super().__init__(f"HTTP {status_code}: {reason}")


class ForgejoDecodeError(ForgejoApiError):
    """Raised when a successful response body is not valid JSON."""

    pass


class ForgejoEncodingError(ForgejoApiError):
    """Raised when a multipart field or file cannot be written into the body."""

    pass
