"""Data models for the devtools API."""

from devtools.models.conversion import IcoSizes, OgFormat, OutputFormat
from devtools.models.responses import (
    ErrorResponse,
    HealthResponse,
    ThemeResponse,
    ToolInfo,
)

__all__ = [
    "IcoSizes",
    "OgFormat",
    "OutputFormat",
    "ErrorResponse",
    "HealthResponse",
    "ThemeResponse",
    "ToolInfo",
]
