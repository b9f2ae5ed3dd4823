import uuid

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...core.exceptions import DevToolsError
from ...models.responses import ErrorResponse

logger = structlog.get_logger()


def _correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", None) or str(uuid.uuid4())


def handle_exception(exc: Exception, correlation_id: str) -> JSONResponse:
    """Translate an exception into the standard `{error, error_code, ...}` body."""
    error_code = "SRV500"
    message = "An unexpected error occurred"
    details = None
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if isinstance(exc, DevToolsError):
        error_code = exc.error_code
        message = exc.message
        details = dict(exc.details) or None
        status_code = exc.status_code
        log = logger.bind(correlation_id=correlation_id, error_code=error_code)
        if status_code >= 500:
            log.error("Processing error", message=message)
        else:
            log.warning("Request rejected", message=message)

    elif isinstance(exc, RequestValidationError):
        error_code = "VAL400"
        message = "Request validation failed"
        details = {
            "validation_errors": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in exc.errors()
            ]
        }
        status_code = status.HTTP_400_BAD_REQUEST
        logger.bind(correlation_id=correlation_id).warning(
            "Request validation error", errors=details["validation_errors"]
        )

    elif isinstance(exc, StarletteHTTPException):
        error_code = f"HTTP{exc.status_code}"
        status_code = exc.status_code
        message = str(exc.detail) if exc.detail else "HTTP error"
        logger.bind(correlation_id=correlation_id, status_code=exc.status_code).warning(
            "HTTP exception", detail=exc.detail
        )

    else:
        logger.bind(correlation_id=correlation_id, error_type=type(exc).__name__).exception(
            "Unexpected error", error=str(exc)
        )

    error_response = ErrorResponse(
        error=message,
        error_code=error_code,
        correlation_id=correlation_id,
        details=details,
    )

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
        headers={"X-Correlation-ID": correlation_id},
    )


def setup_exception_handlers(app) -> None:
    """Set up exception handlers for the FastAPI app."""

    @app.exception_handler(DevToolsError)
    async def devtools_exception_handler(request: Request, exc: DevToolsError):
        return handle_exception(exc, _correlation_id(request))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        return handle_exception(exc, _correlation_id(request))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return handle_exception(exc, _correlation_id(request))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        return handle_exception(exc, _correlation_id(request))
