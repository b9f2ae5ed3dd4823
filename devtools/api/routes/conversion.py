"""Image format conversion endpoint."""

from typing import Optional

import structlog
from fastapi import APIRouter, File, Form, Request, Response, UploadFile

from devtools.api.utils.validation import (
    content_disposition,
    output_filename,
    read_upload,
)
from devtools.config import settings
from devtools.core.constants import FORMAT_TO_CONTENT_TYPE
from devtools.models.conversion import OutputFormat
from devtools.models.responses import ErrorResponse
from devtools.services.conversion_service import conversion_service

logger = structlog.get_logger()

router = APIRouter()


@router.post(
    "/image/converter",
    response_model=None,
    responses={
        200: {
            "description": "Converted image binary data",
            "content": {
                "image/webp": {},
                "image/jpeg": {},
                "image/png": {},
                "image/avif": {},
                "image/x-icon": {},
            },
        },
        400: {"model": ErrorResponse, "description": "Bad Request"},
        413: {"model": ErrorResponse, "description": "Payload Too Large"},
        415: {"model": ErrorResponse, "description": "Unsupported Media Type"},
        500: {"model": ErrorResponse, "description": "Conversion failed"},
    },
    summary="Convert an image to a different format",
)
async def convert_image(
    request: Request,
    file: Optional[UploadFile] = File(None, description="Image file to convert"),
    format: Optional[OutputFormat] = Form(None, description="Target image format"),
    quality: Optional[int] = Form(
        None, ge=1, le=100, description="Output quality for lossy formats (1-100)"
    ),
) -> Response:
    """
    Convert an uploaded image and return it as an attachment.

    The format defaults to the configured default (webp). The response is the
    encoded file with a Content-Disposition naming it after the upload.
    """
    contents = await read_upload(file, "file")
    output_format = format.value if format else settings.default_output_format

    logger.info(
        "Conversion request received",
        output_format=output_format,
        input_size=len(contents),
        correlation_id=request.state.correlation_id,
    )

    output_data = await conversion_service.convert(contents, output_format, quality)

    filename = output_filename(file.filename, output_format)
    return Response(
        content=output_data,
        media_type=FORMAT_TO_CONTENT_TYPE.get(output_format, "application/octet-stream"),
        headers={
            "Content-Disposition": content_disposition(filename),
            "X-Input-Size": str(len(contents)),
            "X-Output-Size": str(len(output_data)),
            "X-Output-Format": output_format,
            "Cache-Control": "no-store",
        },
    )
