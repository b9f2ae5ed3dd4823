from fastapi import APIRouter

from devtools import __version__
from devtools.core.conversion.image_processor import codec_available
from devtools.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint to verify API is running.

    Returns:
        Status, version and which optional output codecs this Pillow build has
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        codecs={fmt: codec_available(fmt) for fmt in ("webp", "avif")},
    )
