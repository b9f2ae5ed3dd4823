"""Data models for the client-side batch conversion queue."""

import uuid
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class EntryStatus(str, Enum):
    """Status of one queued file."""

    PENDING = "pending"
    CONVERTING = "converting"
    CONVERTED = "converted"
    FAILED = "failed"


class UploadedFile(BaseModel):
    """A file handed to the queue: name plus raw bytes."""

    filename: str
    data: bytes = Field(..., repr=False)


class FileEntry(BaseModel):
    """One uploaded file moving through conversion."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    filename: str
    source_bytes: bytes = Field(..., repr=False)
    preview: Optional[Any] = Field(None, repr=False, description="PreviewHandle")
    status: EntryStatus = EntryStatus.PENDING
    result_bytes: Optional[bytes] = Field(None, repr=False)
    result_format: Optional[str] = None
    progress: int = Field(default=0, ge=0, le=100)
    error: Optional[str] = None

    @property
    def is_converted(self) -> bool:
        return self.status == EntryStatus.CONVERTED


class Notification(BaseModel):
    """User-facing toast emitted for each conversion outcome."""

    title: str
    description: str
    variant: str = Field(default="default", description="default or destructive")


class DownloadItem(BaseModel):
    data: bytes = Field(..., repr=False)
    filename: str
    content_type: str


class BatchSummary(BaseModel):
    """Outcome counts of one convert_all pass."""

    total: int = 0
    converted: int = 0
    failed: int = 0
    skipped: int = 0
