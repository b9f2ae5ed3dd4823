"""API utility functions."""

from .validation import (
    content_disposition,
    output_filename,
    read_upload,
    sanitize_filename,
    validate_content_type,
)

__all__ = [
    "content_disposition",
    "output_filename",
    "read_upload",
    "sanitize_filename",
    "validate_content_type",
]
