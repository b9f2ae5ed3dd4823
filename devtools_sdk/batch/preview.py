"""Revocable local previews of queued source images."""

import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog

logger = structlog.get_logger()


class PreviewHandle:
    """A temporary file holding a copy of an entry's source bytes.

    The file exists until release() is called; release is idempotent.
    """

    def __init__(self, path: Path):
        self._path: Optional[Path] = path

    @classmethod
    def create(cls, data: bytes, filename: str = "") -> "PreviewHandle":
        suffix = Path(filename).suffix if filename else ""
        fd, name = tempfile.mkstemp(prefix="devtools-preview-", suffix=suffix)
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        return cls(Path(name))

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def released(self) -> bool:
        return self._path is None

    def release(self) -> None:
        if self._path is None:
            return
        path, self._path = self._path, None
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug("Preview already gone", path=str(path))

    def __repr__(self) -> str:
        return f"PreviewHandle({self._path!s})"
