"""Python client for the devtools API, plus a client-side batch conversion queue."""

from .async_client import AsyncDevToolsClient
from .batch import (
    BatchQueue,
    BatchSummary,
    DownloadItem,
    EntryStatus,
    FileEntry,
    Notification,
    UploadedFile,
)
from .config import ClientConfig
from .exceptions import (
    ConversionError,
    DevToolsError,
    EntryNotFoundError,
    PayloadTooLargeError,
    ServiceUnavailableError,
    TransportError,
    UnsupportedFormatError,
    ValidationError,
)
from .models import OutputFormat

__version__ = "0.1.0"
__all__ = [
    "AsyncDevToolsClient",
    "BatchQueue",
    "BatchSummary",
    "ClientConfig",
    "DownloadItem",
    "EntryStatus",
    "FileEntry",
    "Notification",
    "OutputFormat",
    "UploadedFile",
    "ConversionError",
    "DevToolsError",
    "EntryNotFoundError",
    "PayloadTooLargeError",
    "ServiceUnavailableError",
    "TransportError",
    "UnsupportedFormatError",
    "ValidationError",
]
