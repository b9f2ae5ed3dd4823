"""Open Graph thumbnail endpoint."""

from typing import Optional

import structlog
from fastapi import APIRouter, File, Form, Request, Response, UploadFile

from devtools.api.utils.validation import (
    content_disposition,
    output_filename,
    read_upload,
)
from devtools.core.constants import FORMAT_TO_CONTENT_TYPE
from devtools.models.conversion import OgFormat
from devtools.models.responses import ErrorResponse
from devtools.services.conversion_service import conversion_service

logger = structlog.get_logger()

router = APIRouter()


@router.post(
    "/tools/og-image",
    response_model=None,
    responses={
        200: {"description": "1200x630 card", "content": {"image/png": {}, "image/webp": {}}},
        400: {"model": ErrorResponse, "description": "Invalid input"},
        413: {"model": ErrorResponse, "description": "Payload Too Large"},
    },
    summary="Render an Open Graph thumbnail card",
)
async def og_image(
    request: Request,
    file: Optional[UploadFile] = File(None, description="Image to place on the card"),
    format: OgFormat = Form(OgFormat.PNG, description="Export format"),
) -> Response:
    contents = await read_upload(file, "file")

    logger.info(
        "Open Graph request received",
        output_format=format.value,
        correlation_id=request.state.correlation_id,
    )

    card = await conversion_service.compose_og_card(contents, format.value)

    return Response(
        content=card,
        media_type=FORMAT_TO_CONTENT_TYPE[format.value],
        headers={
            "Content-Disposition": content_disposition(
                output_filename(file.filename, format.value)
            ),
            "Cache-Control": "no-store",
        },
    )
