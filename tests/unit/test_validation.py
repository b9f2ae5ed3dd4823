"""Tests for upload validation helpers."""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import UploadFile

from devtools.api.utils.validation import (
    content_disposition,
    output_filename,
    read_upload,
    sanitize_filename,
    validate_content_type,
)
from devtools.config import settings
from devtools.core.exceptions import (
    InvalidImageError,
    PayloadTooLargeError,
    UnsupportedFormatError,
    ValidationError,
)


def mock_upload(data: bytes = b"data", content_type: str = "image/png", filename="a.png"):
    file = Mock(spec=UploadFile)
    file.filename = filename
    file.content_type = content_type
    file.read = AsyncMock(return_value=data)
    return file


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("photo.png", "photo.png"),
        ("../../etc/passwd", "passwd"),
        ("C:\\Users\\me\\cat.jpg", "cat.jpg"),
        ('bad"name\r\n.png', "badname.png"),
        ("", "unnamed"),
    ],
)
def test_sanitize_filename(raw, expected):
    assert sanitize_filename(raw) == expected


def test_sanitize_filename_truncates_keeping_extension():
    result = sanitize_filename("a" * 300 + ".png")

    assert len(result) == 255
    assert result.endswith(".png")


@pytest.mark.parametrize(
    "source,extension,expected",
    [
        ("photo.png", "webp", "photo.webp"),
        ("archive.tar.png", "jpg", "archive.tar.jpg"),
        ("noext", "png", "noext.png"),
        (None, "ico", "image.ico"),
    ],
)
def test_output_filename(source, extension, expected):
    assert output_filename(source, extension) == expected


def test_content_disposition_ascii():
    assert content_disposition("photo.webp") == 'attachment; filename="photo.webp"'


def test_content_disposition_non_ascii():
    header = content_disposition("café.webp")

    assert 'filename="caf.webp"' in header
    assert "filename*=UTF-8''caf%C3%A9.webp" in header


@pytest.mark.parametrize(
    "content_type,allowed",
    [
        ("image/png", True),
        ("image/jpeg; charset=binary", True),
        ("application/octet-stream", True),
        ("", True),
        ("text/plain", False),
        ("application/pdf", False),
    ],
)
def test_validate_content_type(content_type, allowed):
    assert validate_content_type(mock_upload(content_type=content_type)) is allowed


@pytest.mark.asyncio
async def test_read_upload_returns_bytes():
    assert await read_upload(mock_upload(b"pixels")) == b"pixels"


@pytest.mark.asyncio
async def test_read_upload_missing_file():
    with pytest.raises(ValidationError, match="No file provided") as exc_info:
        await read_upload(None, "image")
    assert exc_info.value.details == {"field_name": "image"}


@pytest.mark.asyncio
async def test_read_upload_wrong_type():
    with pytest.raises(UnsupportedFormatError):
        await read_upload(mock_upload(content_type="text/plain"))


@pytest.mark.asyncio
async def test_read_upload_empty():
    with pytest.raises(InvalidImageError):
        await read_upload(mock_upload(b""))


@pytest.mark.asyncio
async def test_read_upload_too_large(monkeypatch):
    monkeypatch.setattr(settings, "max_file_size", 10)

    with pytest.raises(PayloadTooLargeError) as exc_info:
        await read_upload(mock_upload(b"x" * 11))
    assert exc_info.value.details["max_size"] == 10
