"""Exception classes for the devtools client."""

from typing import Any, Dict, Optional


class DevToolsError(Exception):
    """Base exception for all devtools client errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        """Initialize exception.

        Args:
            message: Error message
            error_code: Server error code (e.g. VAL400) or a client category
            details: Additional error details
            status_code: HTTP status of the failed response, if any
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class ValidationError(DevToolsError):
    """Raised when a request is rejected as invalid (locally or with a 400)."""

    def __init__(self, message: str = "Invalid request parameters", **kwargs):
        kwargs.setdefault("error_code", "validation")
        super().__init__(message, **kwargs)


class PayloadTooLargeError(DevToolsError):
    """Raised when the server refuses an upload as too large."""

    def __init__(self, message: str = "File too large", **kwargs):
        kwargs.setdefault("error_code", "payload_too_large")
        super().__init__(message, **kwargs)


class UnsupportedFormatError(DevToolsError):
    """Raised when the server does not accept the upload's type."""

    def __init__(self, message: str = "Unsupported file format", **kwargs):
        kwargs.setdefault("error_code", "unsupported_format")
        super().__init__(message, **kwargs)


class ServiceUnavailableError(DevToolsError):
    """Raised when the service is unavailable."""

    def __init__(self, message: str = "Service temporarily unavailable", **kwargs):
        kwargs.setdefault("error_code", "service_unavailable")
        super().__init__(message, **kwargs)


class ConversionError(DevToolsError):
    """Raised when the server failed while processing the image."""

    def __init__(self, message: str = "Conversion failed", **kwargs):
        kwargs.setdefault("error_code", "conversion")
        super().__init__(message, **kwargs)


class TransportError(DevToolsError):
    """Raised when the request never produced a response."""

    def __init__(self, message: str = "Could not reach the service", **kwargs):
        kwargs.setdefault("error_code", "transport")
        super().__init__(message, **kwargs)


class EntryNotFoundError(DevToolsError):
    """Raised when a batch queue operation names an id that is not queued."""

    def __init__(self, entry_id: str):
        super().__init__(
            f"No queued entry with id {entry_id}",
            error_code="entry_not_found",
            details={"entry_id": entry_id},
        )
        self.entry_id = entry_id
