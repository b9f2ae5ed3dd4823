"""Integration tests for the FastAPI endpoints with real Pillow images."""

import io
import json
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from devtools.config import settings
from devtools.core.constants import OG_CARD_HEIGHT, OG_CARD_WIDTH
from devtools.main import app, create_app

pytestmark = pytest.mark.integration


def assert_error(response, status_code: int, error_code: str):
    assert response.status_code == status_code
    body = response.json()
    assert body["error_code"] == error_code
    assert body["error"]
    assert body["correlation_id"] == response.headers["X-Correlation-ID"]
    assert "timestamp" in body
    return body


class TestImageConverterEndpoint:
    def test_default_format_is_webp(self, api_client, png_bytes):
        response = api_client.post(
            "/api/image/converter",
            files={"file": ("photo.png", png_bytes, "image/png")},
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/webp"
        assert (
            response.headers["content-disposition"]
            == 'attachment; filename="photo.webp"'
        )
        assert Image.open(io.BytesIO(response.content)).format == "WEBP"

    @pytest.mark.parametrize(
        "output_format,content_type,pillow_format",
        [
            ("png", "image/png", "PNG"),
            ("jpg", "image/jpeg", "JPEG"),
            ("jpeg", "image/jpeg", "JPEG"),
            ("ico", "image/x-icon", "ICO"),
        ],
    )
    def test_convert_formats(
        self, api_client, jpeg_bytes, output_format, content_type, pillow_format
    ):
        response = api_client.post(
            "/api/image/converter",
            files={"file": ("shot.jpg", jpeg_bytes, "image/jpeg")},
            data={"format": output_format, "quality": "80"},
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == content_type
        assert f'filename="shot.{output_format}"' in response.headers["content-disposition"]
        assert response.headers["X-Output-Format"] == output_format
        assert Image.open(io.BytesIO(response.content)).format == pillow_format

    def test_missing_file(self, api_client):
        response = api_client.post("/api/image/converter", data={"format": "png"})

        body = assert_error(response, 400, "VAL400")
        assert body["error"] == "No file provided"

    def test_unknown_format(self, api_client, png_bytes):
        response = api_client.post(
            "/api/image/converter",
            files={"file": ("photo.png", png_bytes, "image/png")},
            data={"format": "bmp"},
        )

        body = assert_error(response, 400, "VAL400")
        assert body["details"]["validation_errors"]

    def test_quality_out_of_range(self, api_client, png_bytes):
        response = api_client.post(
            "/api/image/converter",
            files={"file": ("photo.png", png_bytes, "image/png")},
            data={"quality": "101"},
        )

        assert_error(response, 400, "VAL400")

    def test_not_an_image(self, api_client):
        response = api_client.post(
            "/api/image/converter",
            files={"file": ("fake.png", b"this is text", "image/png")},
        )

        assert_error(response, 400, "IMG400")

    def test_empty_file(self, api_client):
        response = api_client.post(
            "/api/image/converter",
            files={"file": ("empty.png", b"", "image/png")},
        )

        assert_error(response, 400, "IMG400")

    def test_wrong_mime_type(self, api_client):
        response = api_client.post(
            "/api/image/converter",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )

        assert_error(response, 415, "FMT415")

    def test_file_too_large(self, api_client, png_bytes, monkeypatch):
        monkeypatch.setattr(settings, "max_file_size", 100)

        response = api_client.post(
            "/api/image/converter",
            files={"file": ("photo.png", png_bytes, "image/png")},
        )

        assert_error(response, 413, "REQ413")

    def test_unexpected_error_is_wrapped(self, png_bytes):
        client = TestClient(app, raise_server_exceptions=False)

        with patch(
            "devtools.api.routes.conversion.conversion_service.convert",
            new=AsyncMock(side_effect=RuntimeError("encoder exploded")),
        ):
            response = client.post(
                "/api/image/converter",
                files={"file": ("photo.png", png_bytes, "image/png")},
            )

        body = assert_error(response, 500, "SRV500")
        assert "exploded" not in body["error"]

    def test_correlation_id_is_echoed(self, api_client, png_bytes):
        response = api_client.post(
            "/api/image/converter",
            files={"file": ("photo.png", png_bytes, "image/png")},
            headers={"X-Correlation-ID": "trace-42"},
        )

        assert response.headers["X-Correlation-ID"] == "trace-42"


class TestIcoEndpoint:
    def test_generates_requested_sizes(self, api_client, square_png_bytes):
        response = api_client.post(
            "/api/tools/img-to-ico",
            files={"image": ("logo.png", square_png_bytes, "image/png")},
            data={"sizes": json.dumps([16, 32, 64])},
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/x-icon"
        assert 'filename="favicon.ico"' in response.headers["content-disposition"]
        ico = Image.open(io.BytesIO(response.content))
        assert ico.info["sizes"] == {(16, 16), (32, 32), (64, 64)}

    def test_crops_non_square(self, api_client, jpeg_bytes):
        response = api_client.post(
            "/api/tools/img-to-ico",
            files={"image": ("wide.jpg", jpeg_bytes, "image/jpeg")},
            data={"sizes": "[48]"},
        )

        assert response.status_code == 200
        assert Image.open(io.BytesIO(response.content)).info["sizes"] == {(48, 48)}

    @pytest.mark.parametrize("sizes", ["[]", "not json", "[0]", "[512]", '{"a": 1}'])
    def test_invalid_sizes(self, api_client, png_bytes, sizes):
        response = api_client.post(
            "/api/tools/img-to-ico",
            files={"image": ("logo.png", png_bytes, "image/png")},
            data={"sizes": sizes},
        )

        assert_error(response, 400, "VAL400")

    def test_missing_sizes(self, api_client, png_bytes):
        response = api_client.post(
            "/api/tools/img-to-ico",
            files={"image": ("logo.png", png_bytes, "image/png")},
        )

        assert_error(response, 400, "VAL400")

    def test_missing_image(self, api_client):
        response = api_client.post("/api/tools/img-to-ico", data={"sizes": "[16]"})

        body = assert_error(response, 400, "VAL400")
        assert body["details"] == {"field_name": "image"}


class TestOgImageEndpoint:
    @pytest.mark.parametrize(
        "output_format,content_type", [("png", "image/png"), ("webp", "image/webp")]
    )
    def test_card(self, api_client, png_bytes, output_format, content_type):
        response = api_client.post(
            "/api/tools/og-image",
            files={"file": ("banner.png", png_bytes, "image/png")},
            data={"format": output_format},
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == content_type
        assert f'filename="banner.{output_format}"' in response.headers["content-disposition"]
        card = Image.open(io.BytesIO(response.content))
        assert card.size == (OG_CARD_WIDTH, OG_CARD_HEIGHT)

    def test_rejects_jpeg_export(self, api_client, png_bytes):
        response = api_client.post(
            "/api/tools/og-image",
            files={"file": ("banner.png", png_bytes, "image/png")},
            data={"format": "jpg"},
        )

        assert_error(response, 400, "VAL400")


class TestThemeEndpoints:
    def test_get_defaults(self, api_client):
        response = api_client.get("/api/tools/theme")

        assert response.status_code == 200
        body = response.json()
        assert body["light"]["background"] == "0 0% 100%"
        assert body["dark"]["background"] == "240 10% 3.9%"
        assert body["keys"][0] == "background"
        assert "radius" in body["keys"]

    def test_css_with_overrides(self, api_client):
        response = api_client.post(
            "/api/tools/theme/css",
            json={"light": {"primary": "#2563eb"}, "dark": {"radius": "1rem"}},
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/css")
        light, dark = response.text.split("\n\n")
        assert light.startswith(":root {")
        assert "  --primary: 221.2 83.2% 53.3%;" in light
        assert dark.startswith(".dark {")
        assert "  --radius: 1rem;" in dark

    def test_css_without_body_fields(self, api_client):
        response = api_client.post("/api/tools/theme/css", json={})

        assert response.status_code == 200
        assert "  --radius: 0.5rem;" in response.text

    @pytest.mark.parametrize(
        "payload",
        [
            {"light": {"primary": "blue"}},
            {"dark": {"not-a-key": "#000000"}},
            {"light": {"radius": "10px"}},
        ],
    )
    def test_css_rejects_bad_overrides(self, api_client, payload):
        response = api_client.post("/api/tools/theme/css", json=payload)

        assert_error(response, 400, "VAL400")


class TestCatalogAndHealth:
    def test_tool_catalog(self, api_client):
        response = api_client.get("/api/tools")

        assert response.status_code == 200
        tools = response.json()
        assert [t["title"] for t in tools][:1] == ["Image Converter"]
        assert {t["endpoint"] for t in tools} >= {
            "/api/image/converter",
            "/api/tools/img-to-ico",
            "/api/tools/og-image",
        }

    def test_health(self, api_client):
        response = api_client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert set(body["codecs"]) == {"webp", "avif"}

    def test_unknown_route_uses_error_shape(self, api_client):
        response = api_client.get("/api/nope")

        assert_error(response, 404, "HTTP404")


class TestApiPrefix:
    def test_routes_follow_configured_prefix(self, monkeypatch):
        monkeypatch.setattr(settings, "api_prefix", "/v2")
        client = TestClient(create_app())

        assert client.get("/v2/health").status_code == 200
        assert client.get("/api/health").status_code == 404

        endpoints = {t["endpoint"] for t in client.get("/v2/tools").json()}
        assert "/v2/image/converter" in endpoints
        assert all(e.startswith("/v2/") for e in endpoints)
