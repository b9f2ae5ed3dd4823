"""Pytest fixtures for devtools tests."""

import io
import os

import pytest
from PIL import Image

# Set test environment variables BEFORE any imports
os.environ["DEVTOOLS_ENV"] = "testing"
os.environ["DEVTOOLS_LOGGING_ENABLED"] = "false"


def make_image_bytes(
    size=(64, 48), mode="RGB", color=(200, 30, 30), format="PNG"
) -> bytes:
    """Encode a solid-color Pillow image."""
    if mode == "RGBA" and len(color) == 3:
        color = color + (128,)
    img = Image.new(mode, size, color=color)
    buffer = io.BytesIO()
    img.save(buffer, format=format)
    return buffer.getvalue()


@pytest.fixture
def make_image():
    return make_image_bytes


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes()


@pytest.fixture
def rgba_png_bytes() -> bytes:
    """Half transparent PNG."""
    return make_image_bytes(size=(40, 40), mode="RGBA")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes(size=(120, 80), color=(10, 120, 200), format="JPEG")


@pytest.fixture
def square_png_bytes() -> bytes:
    return make_image_bytes(size=(256, 256), mode="RGBA", color=(0, 128, 0, 255))


@pytest.fixture
def image_files(tmp_path, png_bytes, jpeg_bytes):
    """Three image files on disk."""
    paths = []
    for name, data in (
        ("first.png", png_bytes),
        ("second.jpg", jpeg_bytes),
        ("third.png", png_bytes),
    ):
        path = tmp_path / name
        path.write_bytes(data)
        paths.append(path)
    return paths


@pytest.fixture
def api_client():
    """FastAPI test client (lifespan not run, so logging stays untouched)."""
    from fastapi.testclient import TestClient

    from devtools.main import app

    return TestClient(app)
