import uuid
from time import time
from typing import Callable

from fastapi import Request

from ...utils.logging import LoggingContext, get_logger

logger = get_logger(__name__)


async def logging_middleware(request: Request, call_next: Callable):
    """Log all requests and responses with a correlation ID."""
    start_time = time()

    correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
    request.state.correlation_id = correlation_id

    request_info = {
        "method": request.method,
        "path": request.url.path,
    }

    with LoggingContext(correlation_id=correlation_id):
        logger.info("Request received", **request_info)

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed",
                error=str(exc),
                duration_ms=round((time() - start_time) * 1000, 2),
                **request_info,
            )
            raise

        logger.info(
            "Request completed",
            status_code=response.status_code,
            duration_ms=round((time() - start_time) * 1000, 2),
            **request_info,
        )

        response.headers["X-Correlation-ID"] = correlation_id
        return response
