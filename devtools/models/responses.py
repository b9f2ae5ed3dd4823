"""Response models for API endpoints."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Human-readable error message")
    error_code: str = Field(..., description="Error code (e.g., VAL400)")
    correlation_id: str = Field(..., description="Request correlation ID for tracking")
    details: Optional[Dict[str, Any]] = Field(
        None, description="Additional error details"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Error timestamp",
    )


class ToolInfo(BaseModel):
    """One entry of the tool catalog."""

    title: str
    path: str
    description: str
    endpoint: Optional[str] = Field(None, description="Backing API endpoint, if any")


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str = "healthy"
    version: str
    codecs: Dict[str, bool] = Field(
        default_factory=dict, description="Output codecs available in this build"
    )


class ThemeResponse(BaseModel):
    """Light and dark palettes as CSS variable values."""

    light: Dict[str, str]
    dark: Dict[str, str]
    keys: List[str]
