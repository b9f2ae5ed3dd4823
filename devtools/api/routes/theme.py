"""shadcn/ui theme variable endpoints."""

from typing import Dict

import structlog
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from devtools.core.theme import (
    DEFAULT_DARK_THEME,
    DEFAULT_LIGHT_THEME,
    apply_overrides,
    generate_css,
    theme_values,
)
from devtools.models.responses import ErrorResponse, ThemeResponse

logger = structlog.get_logger()

router = APIRouter()


class ThemeOverrides(BaseModel):
    """Hex colors (or a rem radius) keyed by CSS variable name, per mode."""

    light: Dict[str, str] = Field(default_factory=dict)
    dark: Dict[str, str] = Field(default_factory=dict)


@router.get("/tools/theme", response_model=ThemeResponse)
async def get_theme() -> ThemeResponse:
    """Return the default light and dark palettes."""
    return ThemeResponse(
        light=theme_values(DEFAULT_LIGHT_THEME),
        dark=theme_values(DEFAULT_DARK_THEME),
        keys=list(DEFAULT_LIGHT_THEME),
    )


@router.post(
    "/tools/theme/css",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "CSS custom properties", "content": {"text/css": {}}},
        400: {"model": ErrorResponse, "description": "Unknown key or malformed value"},
    },
)
async def theme_css(overrides: ThemeOverrides) -> PlainTextResponse:
    light = apply_overrides(DEFAULT_LIGHT_THEME, overrides.light)
    dark = apply_overrides(DEFAULT_DARK_THEME, overrides.dark)

    logger.debug(
        "Theme CSS generated",
        light_overrides=len(overrides.light),
        dark_overrides=len(overrides.dark),
    )
    return PlainTextResponse(generate_css(light, dark), media_type="text/css")
