from typing import List

from fastapi import APIRouter

from devtools.config import settings
from devtools.models.responses import ToolInfo

router = APIRouter()

TOOLS: List[ToolInfo] = [
    ToolInfo(
        title="Image Converter",
        path="/tools/image-converter",
        description="Convert images to WebP, JPEG, PNG, AVIF or ICO.",
        endpoint="/image/converter",
    ),
    ToolInfo(
        title="ICO Generator",
        path="/tools/ico-gen",
        description="Build a multi-resolution favicon from one image.",
        endpoint="/tools/img-to-ico",
    ),
    ToolInfo(
        title="Open Graph Gen",
        path="/tools/og-thumbnail-generator",
        description="Create eye-catching thumbnails for your Open Graph meta tags.",
        endpoint="/tools/og-image",
    ),
    ToolInfo(
        title="shadcn Theme Gen",
        path="/tools/theme-generator",
        description="Customize the colors of your shadcn UI theme.",
        endpoint="/tools/theme/css",
    ),
]


@router.get("/tools", response_model=List[ToolInfo])
async def list_tools() -> List[ToolInfo]:
    """List the available tools with endpoints under the configured API prefix."""
    return [
        tool.model_copy(update={"endpoint": f"{settings.api_prefix}{tool.endpoint}"})
        for tool in TOOLS
    ]
