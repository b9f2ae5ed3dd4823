"""Async client for the devtools API."""

from typing import Any, List, Mapping, Optional, Sequence

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from .config import ClientConfig
from .exceptions import (
    ConversionError,
    DevToolsError,
    PayloadTooLargeError,
    ServiceUnavailableError,
    TransportError,
    UnsupportedFormatError,
    ValidationError,
)
from .models import ErrorResponse, HealthStatus, ThemePalettes, ToolInfo

logger = structlog.get_logger()

_STATUS_ERRORS = {
    400: ValidationError,
    413: PayloadTooLargeError,
    415: UnsupportedFormatError,
    422: ValidationError,
    500: ConversionError,
    503: ServiceUnavailableError,
}


class AsyncDevToolsClient:
    """Async client for the image, favicon, Open Graph and theme endpoints."""

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        host: str = "localhost",
        port: int = 8000,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize async client.

        Args:
            host: API host
            port: API port
            base_url: Full API root (e.g. http://localhost:8000/api); overrides host/port
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests use MockTransport/ASGITransport)
        """
        self.base_url = (base_url or f"http://{host}:{port}/api").rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_config(
        cls, config: ClientConfig, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "AsyncDevToolsClient":
        return cls(base_url=config.api_url, timeout=config.timeout, transport=transport)

    async def __aenter__(self):
        """Context manager entry."""
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if not self._client:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=False,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        client = await self._ensure_client()
        try:
            return await client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request to {path} timed out") from e
        except httpx.TransportError as e:
            raise TransportError(f"Request to {path} failed: {e}") from e

    def _handle_response(self, response: httpx.Response) -> Any:
        """Return the body of a successful response or raise a typed error.

        Binary bodies (images, CSS) come back as bytes; JSON bodies are decoded.

        Raises:
            Various DevToolsError subclasses based on status
        """
        if response.is_success:
            content_type = response.headers.get("content-type", "")
            if content_type.startswith("application/json"):
                return response.json()
            return response.content

        error_msg = f"HTTP {response.status_code}"
        error_code = str(response.status_code)
        details = None
        error = self._parse_error(response)
        if error is not None:
            error_msg = error.error or error_msg
            error_code = error.error_code
            details = error.details

        logger.debug(
            "Request failed",
            status_code=response.status_code,
            error_code=error_code,
            correlation_id=response.headers.get("X-Correlation-ID"),
        )

        exc_class = _STATUS_ERRORS.get(response.status_code)
        if exc_class is None and response.status_code >= 500:
            exc_class = ConversionError
        if exc_class is None:
            exc_class = DevToolsError
        raise exc_class(
            error_msg,
            error_code=error_code,
            details=details,
            status_code=response.status_code,
        )

    @staticmethod
    def _parse_error(response: httpx.Response) -> Optional[ErrorResponse]:
        """Read the server's JSON error body; None if it is missing or another shape."""
        try:
            error_data = response.json()
        except ValueError:
            return None
        if not isinstance(error_data, dict):
            return None
        try:
            return ErrorResponse.model_validate(error_data)
        except PydanticValidationError:
            return None

    async def convert_image(
        self,
        data: bytes,
        filename: str,
        output_format: str = "webp",
        quality: Optional[int] = None,
    ) -> bytes:
        """Convert one image.

        The positional signature matches what BatchQueue expects of a
        converter, so a client's bound method can be passed straight in.

        Args:
            data: Source image bytes
            filename: Original filename (used for the download name)
            output_format: Target format
            quality: Quality setting (1-100)

        Returns:
            Converted image bytes
        """
        files = {"file": (filename, data, "application/octet-stream")}
        form = {"format": output_format}
        if quality is not None:
            form["quality"] = str(quality)

        response = await self._request("POST", "/image/converter", files=files, data=form)
        return self._handle_response(response)

    async def generate_ico(
        self, data: bytes, filename: str, sizes: Sequence[int]
    ) -> bytes:
        """Build a multi-resolution ICO.

        Raises:
            ValidationError: sizes is empty (checked before any request)
        """
        if not sizes:
            raise ValidationError("Select at least one icon size")

        files = {"image": (filename, data, "application/octet-stream")}
        form = {"sizes": "[" + ",".join(str(int(s)) for s in sizes) + "]"}

        response = await self._request("POST", "/tools/img-to-ico", files=files, data=form)
        return self._handle_response(response)

    async def og_image(self, data: bytes, filename: str, output_format: str = "png") -> bytes:
        """Render a 1200x630 Open Graph card around the image."""
        files = {"file": (filename, data, "application/octet-stream")}
        response = await self._request(
            "POST", "/tools/og-image", files=files, data={"format": output_format}
        )
        return self._handle_response(response)

    async def get_theme(self) -> ThemePalettes:
        response = await self._request("GET", "/tools/theme")
        return ThemePalettes(**self._handle_response(response))

    async def theme_css(
        self,
        light: Optional[Mapping[str, str]] = None,
        dark: Optional[Mapping[str, str]] = None,
    ) -> str:
        """Generate `:root`/`.dark` CSS with the given hex overrides."""
        payload = {"light": dict(light or {}), "dark": dict(dark or {})}
        response = await self._request("POST", "/tools/theme/css", json=payload)
        return self._handle_response(response).decode("utf-8")

    async def list_tools(self) -> List[ToolInfo]:
        response = await self._request("GET", "/tools")
        return [ToolInfo(**tool) for tool in self._handle_response(response)]

    async def health_check(self) -> HealthStatus:
        """Check API health status."""
        response = await self._request("GET", "/health")
        return HealthStatus(**self._handle_response(response))

