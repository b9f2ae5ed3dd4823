"""Data models for image conversion requests."""

import json
from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator


class OutputFormat(str, Enum):
    """Formats the image converter can produce."""

    WEBP = "webp"
    JPG = "jpg"
    JPEG = "jpeg"
    PNG = "png"
    AVIF = "avif"
    ICO = "ico"


class OgFormat(str, Enum):
    """Export formats for Open Graph cards."""

    PNG = "png"
    WEBP = "webp"


class IcoSizes(BaseModel):
    """Icon sizes parsed from the `sizes` form field."""

    sizes: List[int] = Field(..., description="Square edge lengths in pixels")

    @field_validator("sizes", mode="before")
    @classmethod
    def parse_json_list(cls, v):
        """Accept a JSON array string (as browsers send it) or a list."""
        if isinstance(v, str):
            try:
                v = json.loads(v)
            except json.JSONDecodeError:
                raise ValueError("sizes must be a JSON array of integers")
        if not isinstance(v, list):
            raise ValueError("sizes must be a JSON array of integers")
        return v
