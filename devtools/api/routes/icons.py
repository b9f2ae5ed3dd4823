"""Favicon (ICO) generation endpoint."""

from typing import Optional

import structlog
from fastapi import APIRouter, File, Form, Request, Response, UploadFile
from pydantic import ValidationError as PydanticValidationError

from devtools.api.utils.validation import content_disposition, read_upload
from devtools.core.constants import FORMAT_TO_CONTENT_TYPE, ICO_FILENAME
from devtools.core.exceptions import ValidationError
from devtools.models.conversion import IcoSizes
from devtools.models.responses import ErrorResponse
from devtools.services.conversion_service import conversion_service

logger = structlog.get_logger()

router = APIRouter()


def parse_sizes(raw: Optional[str]) -> list:
    """Parse the `sizes` form field (a JSON array) into a list of ints."""
    if raw is None or not raw.strip():
        raise ValidationError("Invalid input: sizes are required", details={"field_name": "sizes"})
    try:
        return IcoSizes(sizes=raw).sizes
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid input: sizes must be a JSON array of integers",
            details={"field_name": "sizes", "constraints": str(e.errors()[0]["msg"])},
        )


@router.post(
    "/tools/img-to-ico",
    response_model=None,
    responses={
        200: {"description": "ICO file", "content": {"image/x-icon": {}}},
        400: {"model": ErrorResponse, "description": "Invalid input"},
        413: {"model": ErrorResponse, "description": "Payload Too Large"},
        500: {"model": ErrorResponse, "description": "ICO generation failed"},
    },
    summary="Generate a multi-resolution favicon",
)
async def image_to_ico(
    request: Request,
    image: Optional[UploadFile] = File(None, description="Source image (PNG or JPEG)"),
    sizes: Optional[str] = Form(None, description="JSON array of icon sizes, e.g. [16,32]"),
) -> Response:
    """Resize the image to every requested size and pack the frames into one ICO."""
    size_list = parse_sizes(sizes)
    contents = await read_upload(image, "image")

    logger.info(
        "ICO request received",
        sizes=size_list,
        input_size=len(contents),
        correlation_id=request.state.correlation_id,
    )

    ico_data = await conversion_service.build_ico(contents, size_list)

    return Response(
        content=ico_data,
        media_type=FORMAT_TO_CONTENT_TYPE["ico"],
        headers={
            "Content-Disposition": content_disposition(ICO_FILENAME),
            "Cache-Control": "no-store",
        },
    )
