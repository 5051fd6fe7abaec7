"""Tests for the upload client.

The HTTP layer is replaced with httpx.MockTransport so requests can be
inspected without a server.
"""

import httpx
import pytest

from pdfdrop.client import UploadClient, UploadResponse
from pdfdrop.config import UploadConfig
from pdfdrop.errors import ResponseShapeError, UploadRejectedError, UploadTransportError
from pdfdrop.state import SelectedFile


def _file(name="a.pdf"):
    return SelectedFile(name=name, mime_type="application/pdf", data=b"%PDF-1.4 test")


def _client(handler, **config):
    upload_config = UploadConfig(base_url="http://upload.test", **config)
    return UploadClient(upload_config, client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestUploadResponse:
    def test_single_url(self):
        resp = UploadResponse.from_payload({"data": {"url": "http://x/a.pdf"}, "error": None})
        assert resp.ok is True
        assert resp.urls == ["http://x/a.pdf"]

    def test_url_list(self):
        resp = UploadResponse.from_payload({"data": {"url": ["u1", "u2"]}, "error": None})
        assert resp.urls == ["u1", "u2"]

    def test_error_only(self):
        resp = UploadResponse.from_payload({"data": None, "error": "too big"})
        assert resp.ok is False
        assert resp.urls == []
        with pytest.raises(UploadRejectedError) as excinfo:
            resp.raise_for_error()
        assert excinfo.value.server_message == "too big"

    def test_missing_data_is_rejected(self):
        resp = UploadResponse.from_payload({"error": None})
        assert resp.ok is False
        with pytest.raises(UploadRejectedError) as excinfo:
            resp.raise_for_error()
        assert excinfo.value.server_message is None

    def test_empty_error_string_with_data_is_ok(self):
        resp = UploadResponse.from_payload({"data": {"url": "u"}, "error": ""})
        assert resp.ok is True

    @pytest.mark.parametrize("payload", [
        [],
        "ok",
        {"data": {"url": "u"}, "error": None, "extra": 1},
        {"data": "u"},
        {"data": {"url": 3}},
        {"data": {"url": ["u", 3]}},
        {"data": {}},
        {"error": 500},
    ])
    def test_bad_shapes(self, payload):
        with pytest.raises(ResponseShapeError):
            UploadResponse.from_payload(payload)


class TestUploadClient:
    def test_posts_one_multipart_field(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"data": {"url": "http://cdn/a.pdf"}, "error": None})

        client = _client(handler)
        resp = client.upload(_file())

        assert resp.urls == ["http://cdn/a.pdf"]
        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "http://upload.test/api/upload"
        assert request.headers["content-type"].startswith("multipart/form-data")
        assert b'name="media"' in request.content
        assert b'filename="a.pdf"' in request.content
        assert b"%PDF-1.4 test" in request.content

    def test_custom_field_name(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"data": {"url": "u"}, "error": None})

        _client(handler, field_name="file").upload(_file())
        assert b'name="file"' in seen[0].content

    def test_error_status_body_is_still_parsed(self):
        def handler(request):
            return httpx.Response(413, json={"data": None, "error": "File too large"})

        resp = _client(handler).upload(_file())
        assert resp.status_code == 413
        assert resp.error == "File too large"

    def test_non_json_body_is_transport_error(self):
        def handler(request):
            return httpx.Response(502, text="<html>Bad gateway</html>")

        with pytest.raises(UploadTransportError, match="not JSON"):
            _client(handler).upload(_file())

    def test_connection_error_is_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UploadTransportError, match="connection refused"):
            _client(handler).upload(_file())

    def test_deeply_nested_body_is_transport_error(self):
        def handler(request):
            return httpx.Response(200, content=b"[" * 200000 + b"]" * 200000)

        with pytest.raises(UploadTransportError, match="not JSON"):
            _client(handler).upload(_file())

    def test_context_manager_closes(self):
        def handler(request):
            return httpx.Response(200, json={"data": {"url": "u"}, "error": None})

        with _client(handler) as client:
            pass
        assert client.client.is_closed
