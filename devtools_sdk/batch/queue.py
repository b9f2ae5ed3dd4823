"""Client-side batch conversion queue.

BatchQueue keeps an ordered set of FileEntry records and drives each one
through a converter coroutine. Entries are independent: a failing conversion
marks only its own entry failed, and removing an entry while its conversion
is suspended discards the eventual result instead of writing it back.

All state changes happen on the event loop between awaits, so no lock is held.
"""

import asyncio
import io
import zipfile
from collections import OrderedDict
from pathlib import Path
from typing import (
    Awaitable,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Union,
)

import structlog

from ..exceptions import EntryNotFoundError
from ..models import content_type_for
from .models import (
    BatchSummary,
    DownloadItem,
    EntryStatus,
    FileEntry,
    Notification,
    UploadedFile,
)
from .preview import PreviewHandle

logger = structlog.get_logger()

Converter = Callable[[bytes, str, str], Awaitable[bytes]]
PreviewFactory = Callable[[bytes, str], PreviewHandle]
FileInput = Union[UploadedFile, str, Path]


class BatchQueue:
    """Ordered queue of files awaiting conversion."""

    def __init__(
        self,
        converter: Converter,
        target_format: str = "webp",
        preview_factory: Optional[PreviewFactory] = None,
        on_notify: Optional[Callable[[Notification], None]] = None,
        on_change: Optional[Callable[[FileEntry], None]] = None,
    ):
        """Initialize the queue.

        Args:
            converter: Coroutine function (source, filename, target_format) -> bytes.
                Any exception it raises marks the entry failed.
            target_format: Format new conversions are requested in
            preview_factory: Builds a PreviewHandle from (bytes, filename)
            on_notify: Called with a Notification after each conversion outcome
            on_change: Called with the entry after each state transition
        """
        self._converter = converter
        self.target_format = target_format.lower()
        self._preview_factory = preview_factory or PreviewHandle.create
        self._on_notify = on_notify
        self._on_change = on_change
        self._entries: "OrderedDict[str, FileEntry]" = OrderedDict()

    async def __aenter__(self) -> "BatchQueue":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FileEntry]:
        return iter(list(self._entries.values()))

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    @property
    def entries(self) -> List[FileEntry]:
        """Snapshot of the live entries in insertion order."""
        return list(self._entries.values())

    def get(self, entry_id: str) -> Optional[FileEntry]:
        return self._entries.get(entry_id)

    def counts(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in EntryStatus}
        for entry in self._entries.values():
            counts[entry.status.value] += 1
        return counts

    def set_target_format(self, target_format: str) -> None:
        """Change the format used by conversions started from now on."""
        self.target_format = target_format.lower()

    def enqueue(self, files: Iterable[FileInput]) -> List[FileEntry]:
        """Append one pending entry per file, preserving order.

        Paths are read from disk; UploadedFile instances are used as given.
        Every input is read before any entry is added, so an unreadable path
        leaves the queue unchanged.

        Raises:
            OSError: If a path cannot be read
        """
        sources = []
        for item in files:
            if isinstance(item, UploadedFile):
                sources.append((item.filename, item.data))
            else:
                path = Path(item)
                sources.append((path.name, path.read_bytes()))

        added = []
        for filename, data in sources:
            entry = FileEntry(
                filename=filename,
                source_bytes=data,
                preview=self._preview_factory(data, filename),
            )
            self._entries[entry.id] = entry
            added.append(entry)
            logger.debug("Entry queued", entry_id=entry.id, size=len(data))
            self._changed(entry)

        logger.info("Files queued", added=len(added), total=len(self._entries))
        return added

    async def convert_one(self, entry_id: str) -> None:
        """Convert a pending or failed entry.

        Converted entries are never sent again and an entry already converting
        is not restarted; both calls return without doing anything.

        Raises:
            EntryNotFoundError: If no live entry has this id
        """
        entry = self._require(entry_id)
        if entry.status not in (EntryStatus.PENDING, EntryStatus.FAILED):
            logger.debug(
                "Conversion skipped", entry_id=entry_id, status=entry.status.value
            )
            return

        target_format = self.target_format
        entry.status = EntryStatus.CONVERTING
        entry.progress = 0
        entry.error = None
        self._changed(entry)

        try:
            result = await self._converter(
                entry.source_bytes, entry.filename, target_format
            )
        except asyncio.CancelledError:
            if self._is_live(entry):
                self._mark_failed(entry, "Conversion cancelled")
            raise
        except Exception as e:
            if not self._is_live(entry):
                logger.debug("Discarding failure for removed entry", entry_id=entry_id)
                return
            logger.warning(
                "Conversion failed",
                entry_id=entry_id,
                target_format=target_format,
                error=str(e),
            )
            self._mark_failed(entry, str(e) or type(e).__name__)
            self._notify(
                Notification(
                    title="Conversion failed",
                    description=f"An error occurred while converting {entry.filename}.",
                    variant="destructive",
                )
            )
            return

        if not self._is_live(entry):
            logger.debug("Discarding result for removed entry", entry_id=entry_id)
            return

        entry.result_bytes = result
        entry.result_format = target_format
        entry.status = EntryStatus.CONVERTED
        entry.progress = 100
        logger.info(
            "Conversion complete",
            entry_id=entry_id,
            target_format=target_format,
            output_size=len(result),
        )
        self._changed(entry)
        self._notify(
            Notification(
                title="Conversion complete",
                description=f"{entry.filename} converted to {target_format.upper()}",
            )
        )

    async def convert_all(self) -> BatchSummary:
        """Convert every unconverted entry, one at a time, in insertion order.

        Works on a snapshot taken at call time: entries added meanwhile wait for
        the next pass and entries removed meanwhile are skipped. A failure does
        not stop the pass.
        """
        snapshot = list(self._entries.values())
        summary = BatchSummary(total=len(snapshot))

        for entry in snapshot:
            if not self._is_live(entry) or entry.status not in (
                EntryStatus.PENDING,
                EntryStatus.FAILED,
            ):
                summary.skipped += 1
                continue

            await self.convert_one(entry.id)

            if not self._is_live(entry):
                summary.skipped += 1
            elif entry.is_converted:
                summary.converted += 1
            elif entry.status == EntryStatus.FAILED:
                summary.failed += 1
            else:
                summary.skipped += 1

        logger.info("Batch pass finished", **summary.model_dump())
        return summary

    def remove(self, entry_id: str) -> bool:
        """Drop an entry and release its preview.

        Returns False if the id is not queued.
        """
        entry = self._entries.pop(entry_id, None)
        if entry is None:
            return False
        self._release(entry)
        logger.debug("Entry removed", entry_id=entry_id, status=entry.status.value)
        return True

    def download_one(self, entry_id: str) -> Optional[DownloadItem]:
        """Return the converted bytes, or None if the entry is not converted yet.

        Raises:
            EntryNotFoundError: If no live entry has this id
        """
        entry = self._require(entry_id)
        if not entry.is_converted or entry.result_bytes is None:
            return None
        return DownloadItem(
            data=entry.result_bytes,
            filename=f"{Path(entry.filename).stem or 'image'}.{entry.result_format}",
            content_type=content_type_for(entry.result_format),
        )

    def download_all(self) -> List[DownloadItem]:
        """download_one for every converted entry, in order."""
        items = []
        for entry in list(self._entries.values()):
            item = self.download_one(entry.id)
            if item is not None:
                items.append(item)
        return items

    def write_downloads(self, directory: Union[str, Path]) -> List[Path]:
        """Write every converted result into directory and return the paths.

        Colliding names get a numeric suffix, e.g. photo.webp, photo-1.webp.
        """
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)

        written = []
        for item in _unique_names(self.download_all()):
            path = directory / item.filename
            path.write_bytes(item.data)
            written.append(path)
        return written

    def build_archive(self) -> bytes:
        """ZIP of every converted result."""
        zip_buffer = io.BytesIO()
        with zipfile.ZipFile(zip_buffer, "w", zipfile.ZIP_DEFLATED) as zip_file:
            for item in _unique_names(self.download_all()):
                zip_file.writestr(item.filename, item.data)
        zip_buffer.seek(0)
        return zip_buffer.read()

    def close(self) -> None:
        """Remove every entry, releasing all previews."""
        for entry_id in list(self._entries):
            self.remove(entry_id)

    def _require(self, entry_id: str) -> FileEntry:
        entry = self._entries.get(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        return entry

    def _is_live(self, entry: FileEntry) -> bool:
        # Identity, not equality: a removed entry must never be written back
        return self._entries.get(entry.id) is entry

    def _mark_failed(self, entry: FileEntry, message: str) -> None:
        entry.status = EntryStatus.FAILED
        entry.progress = 0
        entry.result_bytes = None
        entry.result_format = None
        entry.error = message
        self._changed(entry)

    def _release(self, entry: FileEntry) -> None:
        if entry.preview is not None:
            entry.preview.release()

    def _changed(self, entry: FileEntry) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(entry)
        except Exception as e:
            logger.error("Error in change callback", entry_id=entry.id, error=str(e))

    def _notify(self, notification: Notification) -> None:
        if self._on_notify is None:
            return
        try:
            self._on_notify(notification)
        except Exception as e:
            logger.error("Error in notify callback", error=str(e))


def _unique_names(items: List[DownloadItem]) -> List[DownloadItem]:
    seen: Dict[str, int] = {}
    unique = []
    for item in items:
        name = item.filename
        count = seen.get(name, 0)
        seen[name] = count + 1
        if count:
            path = Path(name)
            name = f"{path.stem}-{count}{path.suffix}"
            item = item.model_copy(update={"filename": name})
        unique.append(item)
    return unique
