"""Common validation and utility functions for API endpoints."""

import os
from typing import Optional
from urllib.parse import quote

import structlog
from fastapi import UploadFile

from devtools.config import settings
from devtools.core.exceptions import (
    InvalidImageError,
    PayloadTooLargeError,
    UnsupportedFormatError,
    ValidationError,
)

logger = structlog.get_logger()


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename to prevent path traversal and header injection.

    Args:
        filename: Original filename

    Returns:
        Sanitized filename
    """
    for sep in ["/", "\\"]:
        filename = filename.split(sep)[-1]

    filename = "".join(
        char for char in filename if char.isprintable() and char not in '"\r\n'
    )
    filename = filename.replace("..", "")

    if not filename or filename == ".":
        filename = "unnamed"

    max_length = 255
    if len(filename) > max_length:
        name, ext = os.path.splitext(filename)
        filename = name[: max_length - len(ext)] + ext

    return filename


def output_filename(source_name: Optional[str], extension: str) -> str:
    """Replace the source extension, e.g. photo.png -> photo.webp."""
    stem = os.path.splitext(sanitize_filename(source_name or "image"))[0] or "image"
    return f"{stem}.{extension}"


def content_disposition(filename: str) -> str:
    """Attachment header that survives non-ASCII names."""
    ascii_name = filename.encode("ascii", "ignore").decode() or "download"
    if ascii_name == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


def validate_content_type(file: UploadFile) -> bool:
    """Check the declared MIME type against the configured allow-list.

    A missing or generic content type is let through; Pillow decides later.
    """
    content_type = (file.content_type or "").split(";")[0].strip().lower()
    if not content_type or content_type == "application/octet-stream":
        return True
    return content_type in settings.allowed_upload_mime_types


async def read_upload(
    file: Optional[UploadFile], field_name: str = "file", max_size: Optional[int] = None
) -> bytes:
    """
    Validate an uploaded file and return its contents.

    Raises:
        ValidationError: No file supplied
        UnsupportedFormatError: MIME type outside the allow-list
        InvalidImageError: Empty file
        PayloadTooLargeError: File larger than the configured limit
    """
    if file is None:
        raise ValidationError(
            "No file provided", details={"field_name": field_name}
        )

    if not validate_content_type(file):
        raise UnsupportedFormatError(
            "Unsupported file type. Please upload an image file.",
            details={
                "mime_type": file.content_type or "",
                "supported_formats": list(settings.allowed_upload_mime_types),
            },
        )

    if max_size is None:
        max_size = settings.max_file_size

    contents = await file.read()
    file_size = len(contents)

    if file_size == 0:
        raise InvalidImageError(
            "The uploaded file is empty", details={"field_name": field_name}
        )

    if file_size > max_size:
        raise PayloadTooLargeError(
            f"File size exceeds maximum allowed size of {max_size / 1024 / 1024:.0f}MB",
            details={"file_size": file_size, "max_size": max_size},
        )

    return contents
