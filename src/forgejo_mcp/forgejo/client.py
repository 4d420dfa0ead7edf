"""Forgejo REST API client.

Every Forgejo endpoint used by the server goes through the two primitives of
this module: :meth:`ForgejoClient.send_json_request` for JSON round trips and
:meth:`ForgejoClient.send_upload_request` for ``multipart/form-data`` uploads.
Neither retries nor caches; every failure is raised to the caller as one of
the :class:`~forgejo_mcp.exceptions.ForgejoApiError` kinds.
"""

import json
import logging
from collections.abc import Mapping
from typing import IO, Any
from urllib.parse import quote

import httpx

from ..exceptions import (
    ForgejoDecodeError,
    ForgejoEncodingError,
    ForgejoHTTPError,
    ForgejoTransportError,
    InvalidEndpointError,
)
from .config import ForgejoConfig
from .constants import API_BASE_PATH, ATTACHMENT_FIELD_NAME, VERSION_ENDPOINT

logger = logging.getLogger("forgejo-mcp.forgejo")

ALLOWED_METHODS = frozenset({"GET", "POST", "PATCH", "PUT", "DELETE"})


def api_path(*segments: str | int) -> str:
    """Build an ``/api/v1`` endpoint path, percent-encoding each segment.

    Example: ``api_path("repos", "octo", "hello", "wiki", "page", "Home Page")``
    gives ``/api/v1/repos/octo/hello/wiki/page/Home%20Page``.
    """
    return API_BASE_PATH + "".join(
        "/" + quote(str(segment), safe="") for segment in segments
    )


def repo_path(owner: str, repo: str, *segments: str | int) -> str:
    """Build an endpoint path below ``/api/v1/repos/{owner}/{repo}``."""
    return api_path("repos", owner, repo, *segments)


class ForgejoClient:
    """Client for the Forgejo REST API with manual token authentication."""

    def __init__(
        self, config: ForgejoConfig, session: httpx.Client | None = None
    ) -> None:
        """Initialize the Forgejo client.

        Args:
            config: Forgejo configuration
            session: Pre-configured HTTP client to send requests with. When
                omitted, one is created from the configuration.
        """
        self.config = config
        self.base_url = config.url
        self.session = session if session is not None else self._create_session()

    def _create_session(self) -> httpx.Client:
        """Create the HTTP session.

        Returns:
            HTTP session honouring the SSL and timeout settings
        """
        return httpx.Client(verify=self.config.ssl_verify, timeout=self.config.timeout)

    def _build_url(self, endpoint: str) -> httpx.URL:
        """Join the base URL and an endpoint path.

        Raises:
            InvalidEndpointError: If the result is not an absolute http(s) URL
        """
        raw_url = f"{self.base_url}{endpoint}"
        try:
            url = httpx.URL(raw_url)
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise InvalidEndpointError(raw_url, str(e)) from e

        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidEndpointError(raw_url, "expected an absolute http(s) URL")
        return url

    def _build_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
        }
        if self.config.has_token:
            headers["Authorization"] = f"token {self.config.token}"
        return headers

    @staticmethod
    def _clean_params(params: Mapping[str, Any] | None) -> dict[str, Any] | None:
        if not params:
            return None
        cleaned = {key: value for key, value in params.items() if value is not None}
        return cleaned or None

    def _send(self, request: httpx.Request) -> httpx.Response:
        logger.debug(f"Sending {request.method} request to {request.url}")
        try:
            return self.session.send(request)
        except httpx.RequestError as e:
            logger.error(f"Request error for {request.url}: {str(e)}")
            raise ForgejoTransportError(f"Request error: {str(e)}") from e

    def _handle_response(self, response: httpx.Response) -> Any:
        """Classify the status code and decode the JSON body.

        Returns:
            Decoded JSON value, or None for 204 and empty bodies

        Raises:
            ForgejoHTTPError: If the status code is >= 400
            ForgejoDecodeError: If the body is not valid JSON
        """
        if response.status_code >= 400:
            logger.error(
                f"HTTP error {response.status_code} for {response.request.url}: "
                f"{response.text}"
            )
            raise ForgejoHTTPError(
                response.status_code, response.reason_phrase, response.text
            )

        if response.status_code == 204 or not response.content.strip():
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {response.request.url}: {str(e)}")
            raise ForgejoDecodeError(f"failed to decode response: {str(e)}") from e

    def send_json_request(
        self,
        method: str,
        endpoint: str,
        payload: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Perform one JSON round trip against the Forgejo API.

        Args:
            method: HTTP method (GET, POST, PATCH, PUT or DELETE)
            endpoint: API endpoint path, relative to the base URL
            payload: JSON-serializable request body. None sends no body and
                no Content-Type header.
            params: Query parameters; None values are dropped

        Returns:
            Decoded JSON response, or None when the server sent no content

        Raises:
            InvalidEndpointError: If base URL + endpoint is not a valid URL
            ForgejoEncodingError: If the payload cannot be serialized
            ForgejoTransportError: If the HTTP exchange fails
            ForgejoHTTPError: If the server answers with status >= 400
            ForgejoDecodeError: If the response body is not valid JSON
        """
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        url = self._build_url(endpoint)
        headers = self._build_headers()

        content: bytes | None = None
        if payload is not None:
            try:
                content = json.dumps(payload).encode("utf-8")
            except (TypeError, ValueError) as e:
                raise ForgejoEncodingError(
                    f"failed to marshal request: {str(e)}"
                ) from e
            headers["Content-Type"] = "application/json"

        request = self.session.build_request(
            method,
            url,
            params=self._clean_params(params),
            content=content,
            headers=headers,
            timeout=self.config.timeout,
        )
        return self._handle_response(self._send(request))

    def send_upload_request(
        self,
        endpoint: str,
        filename: str,
        file: IO[bytes] | bytes,
        extra_fields: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Upload a file with a ``multipart/form-data`` POST.

        The extra fields are written first, followed by the file under the
        ``attachment`` field. The whole body is buffered before sending.

        Args:
            endpoint: API endpoint path, relative to the base URL
            filename: File name announced in the file part
            file: Binary stream (or raw bytes) with the file content
            extra_fields: Additional string form fields
            params: Query parameters; None values are dropped

        Returns:
            Decoded JSON response

        Raises:
            InvalidEndpointError: If base URL + endpoint is not a valid URL
            ForgejoEncodingError: If the file or a field cannot be encoded
            ForgejoTransportError: If the HTTP exchange fails
            ForgejoHTTPError: If the server answers with status >= 400
            ForgejoDecodeError: If the response body is not valid JSON
        """
        url = self._build_url(endpoint)
        fields = {str(key): str(value) for key, value in (extra_fields or {}).items()}

        try:
            content = file if isinstance(file, bytes) else file.read()
            request = self.session.build_request(
                "POST",
                url,
                params=self._clean_params(params),
                data=fields,
                files={ATTACHMENT_FIELD_NAME: (filename, content)},
                headers=self._build_headers(),
                timeout=self.config.timeout,
            )
            request.read()
        except (OSError, TypeError, ValueError) as e:
            raise ForgejoEncodingError(
                f"failed to encode multipart body for {filename}: {str(e)}"
            ) from e

        return self._handle_response(self._send(request))

    def get(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        """Send a GET request. See :meth:`send_json_request`."""
        return self.send_json_request("GET", endpoint, params=params)

    def post(
        self,
        endpoint: str,
        payload: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send a POST request. See :meth:`send_json_request`."""
        return self.send_json_request("POST", endpoint, payload, params=params)

    def patch(self, endpoint: str, payload: Any = None) -> Any:
        """Send a PATCH request. See :meth:`send_json_request`."""
        return self.send_json_request("PATCH", endpoint, payload)

    def put(self, endpoint: str, payload: Any = None) -> Any:
        """Send a PUT request. See :meth:`send_json_request`."""
        return self.send_json_request("PUT", endpoint, payload)

    def delete(self, endpoint: str, payload: Any = None) -> Any:
        """Send a DELETE request. See :meth:`send_json_request`."""
        return self.send_json_request("DELETE", endpoint, payload)

    def get_server_version(self) -> str:
        """Get the Forgejo server version.

        Returns the configured version when one is set, otherwise asks the
        server.
        """
        if self.config.server_version:
            return self.config.server_version
        data = self.get(VERSION_ENDPOINT)
        return str((data or {}).get("version", ""))

    def close(self) -> None:
        """Close HTTP session."""
        self.session.close()
