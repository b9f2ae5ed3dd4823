"""Client-side multi-file conversion queue."""

from .models import (
    BatchSummary,
    DownloadItem,
    EntryStatus,
    FileEntry,
    Notification,
    UploadedFile,
)
from .preview import PreviewHandle
from .queue import BatchQueue

__all__ = [
    "BatchQueue",
    "BatchSummary",
    "DownloadItem",
    "EntryStatus",
    "FileEntry",
    "Notification",
    "PreviewHandle",
    "UploadedFile",
]
