"""Tests for the Forgejo REST client transport."""

import io
import json

import httpx
import pytest

from forgejo_mcp.exceptions import (
    ForgejoDecodeError,
    ForgejoEncodingError,
    ForgejoHTTPError,
    ForgejoTransportError,
    InvalidEndpointError,
)
from forgejo_mcp.forgejo.client import ForgejoClient, api_path, repo_path
from forgejo_mcp.forgejo.config import ForgejoConfig

DEPENDENCIES_ENDPOINT = "/api/v1/repos/owner/repo/issues/1/dependencies"


def _client(recorder, **config_kwargs) -> ForgejoClient:
    config = ForgejoConfig(**{"url": "http://mock", **config_kwargs})
    session = httpx.Client(transport=httpx.MockTransport(recorder.handler))
    return ForgejoClient(config, session=session)


def test_api_path_encodes_each_segment():
    assert api_path("repos", "octo", "hello", "wiki", "page", "Home Page") == (
        "/api/v1/repos/octo/hello/wiki/page/Home%20Page"
    )
    assert api_path("user", "repos") == "/api/v1/user/repos"


def test_repo_path_accepts_integer_segments():
    assert repo_path("octo", "hello", "issues", 7, "labels") == (
        "/api/v1/repos/octo/hello/issues/7/labels"
    )


def test_repo_path_keeps_slashes_inside_a_segment():
    assert repo_path("octo", "hello", "wiki", "page", "a/b") == (
        "/api/v1/repos/octo/hello/wiki/page/a%2Fb"
    )


def test_get_dependencies_scenario(recorder):
    """GET with a token returns the decoded JSON object."""
    recorder.queue(200, json={"id": 1, "title": "Test Issue"})
    client = _client(recorder, token="test-token")

    result = client.send_json_request("GET", DEPENDENCIES_ENDPOINT)

    assert result["id"] == 1
    assert result["title"] == "Test Issue"
    assert str(recorder.last.url) == f"http://mock{DEPENDENCIES_ENDPOINT}"
    assert recorder.last.method == "GET"


def test_not_found_scenario(recorder):
    recorder.queue(404, json={"error": "Not found"})
    client = _client(recorder, token="test-token")

    with pytest.raises(ForgejoHTTPError) as exc_info:
        client.send_json_request("GET", DEPENDENCIES_ENDPOINT)

    assert exc_info.value.status_code == 404
    assert exc_info.value.reason == "Not Found"
    assert "Not found" in exc_info.value.response_text
    assert str(exc_info.value) == "HTTP 404: Not Found"


def test_authorization_header_with_token(recorder):
    client = _client(recorder, token="test-token")
    client.get("/api/v1/version")
    assert recorder.last.headers["Authorization"] == "token test-token"


@pytest.mark.parametrize("token", [None, ""])
def test_no_authorization_header_without_token(recorder, token):
    client = _client(recorder, token=token)
    client.get("/api/v1/version")
    assert "Authorization" not in recorder.last.headers


def test_default_headers(recorder):
    client = _client(recorder, user_agent="Forgejo-MCP/test")
    client.get("/api/v1/version")
    assert recorder.last.headers["Accept"] == "application/json"
    assert recorder.last.headers["User-Agent"] == "Forgejo-MCP/test"


def test_payload_is_sent_as_exact_json(recorder):
    client = _client(recorder, token="test-token")
    payload = {"index": 3, "owner": "octo", "repo": "hello"}

    client.send_json_request("POST", DEPENDENCIES_ENDPOINT, payload)

    request = recorder.last
    assert request.headers["Content-Type"] == "application/json"
    assert request.content == json.dumps(payload).encode("utf-8")


@pytest.mark.parametrize("method", ["GET", "DELETE"])
def test_no_payload_sends_no_body_and_no_content_type(recorder, method):
    client = _client(recorder)
    client.send_json_request(method, DEPENDENCIES_ENDPOINT)
    assert recorder.last.content == b""
    assert "Content-Type" not in recorder.last.headers


def test_empty_list_payload_is_still_sent(recorder):
    client = _client(recorder)
    client.put("/api/v1/repos/o/r/issues/1/labels", {"labels": []})
    assert json.loads(recorder.last.content) == {"labels": []}


@pytest.mark.parametrize("status_code", [200, 201, 299])
def test_success_status_codes_decode_body(recorder, status_code):
    recorder.queue(status_code, json={"ok": True})
    client = _client(recorder)
    assert client.get("/api/v1/version") == {"ok": True}


@pytest.mark.parametrize("status_code", [400, 401, 403, 409, 422, 500, 503])
def test_error_status_codes_raise_http_error(recorder, status_code):
    recorder.queue(status_code, json={"id": 99})
    client = _client(recorder)
    with pytest.raises(ForgejoHTTPError) as exc_info:
        client.get("/api/v1/version")
    assert exc_info.value.status_code == status_code


def test_error_body_that_is_not_json_still_raises_http_error(recorder):
    recorder.queue(502, content=b"<html>Bad Gateway</html>")
    client = _client(recorder)
    with pytest.raises(ForgejoHTTPError) as exc_info:
        client.get("/api/v1/version")
    assert exc_info.value.response_text == "<html>Bad Gateway</html>"


def test_malformed_json_raises_decode_error(recorder):
    recorder.queue(200, content=b'{"id": 1, "title": ')
    client = _client(recorder)
    with pytest.raises(ForgejoDecodeError) as exc_info:
        client.get(DEPENDENCIES_ENDPOINT)
    assert isinstance(exc_info.value.__cause__, ValueError)


@pytest.mark.parametrize(
    "response_kwargs", [{"status_code": 204}, {"status_code": 200, "content": b""}]
)
def test_no_content_decodes_to_none(recorder, response_kwargs):
    recorder.queue(**response_kwargs)
    client = _client(recorder)
    assert client.delete("/api/v1/repos/o/r/labels/1") is None


def test_transport_failure_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = ForgejoClient(
        ForgejoConfig(url="http://mock"),
        session=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    with pytest.raises(ForgejoTransportError) as exc_info:
        client.get("/api/v1/version")
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_timeout_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = ForgejoClient(
        ForgejoConfig(url="http://mock"),
        session=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    with pytest.raises(ForgejoTransportError):
        client.get("/api/v1/version")


@pytest.mark.parametrize("base_url", ["not a url", "ftp://mock", "http://"])
def test_invalid_base_url_raises_invalid_endpoint(recorder, base_url):
    client = _client(recorder, url=base_url)
    with pytest.raises(InvalidEndpointError):
        client.get("/api/v1/version")
    assert recorder.requests == []


def test_unsupported_method_is_rejected(recorder):
    client = _client(recorder)
    with pytest.raises(ValueError, match="Unsupported HTTP method"):
        client.send_json_request("HEAD", "/api/v1/version")


def test_unserializable_payload_raises_encoding_error(recorder):
    client = _client(recorder)
    with pytest.raises(ForgejoEncodingError):
        client.post("/api/v1/repos/o/r/issues", {"labels": {1, 2}})
    assert recorder.requests == []


def test_none_query_params_are_dropped(recorder):
    client = _client(recorder)
    client.get("/api/v1/repos/o/r/issues", params={"state": "open", "q": None})
    assert recorder.last.url.params.get("state") == "open"
    assert "q" not in recorder.last.url.params


def test_repeated_calls_use_identical_urls(recorder):
    client = _client(recorder, token="test-token")
    params = {"page": 2, "limit": 10, "state": "all"}
    client.get("/api/v1/repos/o/r/issues", params=params)
    client.get("/api/v1/repos/o/r/issues", params=params)
    first, second = recorder.requests
    assert str(first.url) == str(second.url)


def test_configured_timeout_is_applied(recorder):
    client = _client(recorder, timeout=5.0)
    client.get("/api/v1/version")
    timeout = recorder.last.extensions["timeout"]
    assert timeout["connect"] == 5.0
    assert timeout["read"] == 5.0


def test_upload_writes_fields_then_file(recorder):
    recorder.queue(201, json={"id": 5, "name": "test.txt", "size": 17})
    client = _client(recorder, token="test-token")

    result = client.send_upload_request(
        "/api/v1/repos/o/r/issues/1/assets",
        "test.txt",
        io.BytesIO(b"test file content"),
        extra_fields={"name": "test.txt"},
    )

    assert result["id"] == 5
    request = recorder.last
    assert request.method == "POST"
    assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    assert request.headers["Authorization"] == "token test-token"
    assert request.headers["Accept"] == "application/json"

    body = request.content
    field_part = b'Content-Disposition: form-data; name="name"\r\n\r\ntest.txt\r\n'
    file_header = b'Content-Disposition: form-data; name="attachment"; filename="test.txt"'
    assert field_part in body
    assert file_header in body
    assert b"\r\n\r\ntest file content\r\n" in body
    assert body.index(field_part) < body.index(file_header)


def test_upload_accepts_raw_bytes(recorder):
    recorder.queue(201, json={"id": 6})
    client = _client(recorder)
    client.send_upload_request("/api/v1/repos/o/r/issues/1/assets", "a.bin", b"\x00\x01")
    assert b"\r\n\r\n\x00\x01\r\n" in recorder.last.content


def test_upload_of_empty_file_succeeds(recorder):
    recorder.queue(201, json={"id": 7, "name": "empty.txt", "size": 0})
    client = _client(recorder)

    result = client.send_upload_request(
        "/api/v1/repos/o/r/issues/1/assets", "empty.txt", io.BytesIO(b"")
    )

    assert result == {"id": 7, "name": "empty.txt", "size": 0}
    assert b'name="attachment"; filename="empty.txt"' in recorder.last.content


def test_upload_read_failure_raises_encoding_error(recorder):
    class BrokenStream(io.RawIOBase):
        def read(self, size=-1):
            raise OSError("disk error")

    client = _client(recorder)
    with pytest.raises(ForgejoEncodingError):
        client.send_upload_request(
            "/api/v1/repos/o/r/issues/1/assets", "x.txt", BrokenStream()
        )
    assert recorder.requests == []


def test_upload_error_status_raises_http_error(recorder):
    recorder.queue(413, json={"message": "file too large"})
    client = _client(recorder)
    with pytest.raises(ForgejoHTTPError) as exc_info:
        client.send_upload_request(
            "/api/v1/repos/o/r/releases/2/assets", "big.zip", b"zip"
        )
    assert exc_info.value.status_code == 413


def test_server_version_from_config_skips_probe(recorder):
    client = _client(recorder, server_version="9.0.0")
    assert client.get_server_version() == "9.0.0"
    assert recorder.requests == []


def test_server_version_probe(recorder):
    recorder.queue(200, json={"version": "1.21.0"})
    client = _client(recorder)
    assert client.get_server_version() == "1.21.0"
    assert recorder.last.url.path == "/api/v1/version"
