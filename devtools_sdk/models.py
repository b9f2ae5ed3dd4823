"""Data models for the devtools client."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class OutputFormat(str, Enum):
    """Formats the converter endpoint can produce."""

    WEBP = "webp"
    JPG = "jpg"
    JPEG = "jpeg"
    PNG = "png"
    AVIF = "avif"
    ICO = "ico"


CONTENT_TYPES: Dict[str, str] = {
    "webp": "image/webp",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "avif": "image/avif",
    "ico": "image/x-icon",
}


def content_type_for(output_format: str) -> str:
    return CONTENT_TYPES.get(output_format.lower(), "application/octet-stream")


class ErrorResponse(BaseModel):
    """Error body returned by the server."""

    error: str
    error_code: str
    correlation_id: Optional[str] = None
    details: Optional[Dict] = None


class ToolInfo(BaseModel):
    title: str
    path: str
    description: str
    endpoint: Optional[str] = None


class HealthStatus(BaseModel):
    status: str
    version: str
    codecs: Dict[str, bool] = Field(default_factory=dict)


class ThemePalettes(BaseModel):
    """Default light/dark CSS variable values."""

    light: Dict[str, str]
    dark: Dict[str, str]
    keys: List[str] = Field(default_factory=list)
