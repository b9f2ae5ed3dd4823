"""Service layer that runs Pillow work off the event loop."""

import asyncio
import time
from typing import Optional, Sequence

import structlog
from starlette.concurrency import run_in_threadpool

from devtools.config import settings
from devtools.core.conversion.image_processor import ImageProcessor, image_processor

logger = structlog.get_logger()


class ConversionService:
    """Async facade over ImageProcessor with a bound on concurrent work."""

    def __init__(
        self,
        processor: Optional[ImageProcessor] = None,
        max_concurrent: Optional[int] = None,
    ):
        self.processor = processor or image_processor
        self.max_concurrent = max_concurrent or settings.max_concurrent_conversions
        self._semaphore: Optional[asyncio.Semaphore] = None

    @property
    def semaphore(self) -> asyncio.Semaphore:
        # Created lazily so it binds to the running loop
        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self.max_concurrent)
        return self._semaphore

    async def _run(self, operation: str, func, *args) -> bytes:
        start_time = time.perf_counter()
        async with self.semaphore:
            output = await run_in_threadpool(func, *args)
        logger.info(
            "Image operation completed",
            operation=operation,
            output_size=len(output),
            processing_time=round(time.perf_counter() - start_time, 4),
        )
        return output

    async def convert(
        self, image_data: bytes, output_format: str, quality: Optional[int] = None
    ) -> bytes:
        """Convert image bytes to output_format."""
        if quality is None:
            quality = settings.default_quality
        return await self._run(
            "convert", self.processor.convert, image_data, output_format, quality
        )

    async def build_ico(self, image_data: bytes, sizes: Sequence[int]) -> bytes:
        """Generate a multi-resolution ICO."""
        return await self._run("ico", self.processor.build_ico, image_data, sizes)

    async def compose_og_card(self, image_data: bytes, output_format: str) -> bytes:
        """Render an Open Graph thumbnail card."""
        return await self._run(
            "og_card", self.processor.compose_og_card, image_data, output_format
        )


conversion_service = ConversionService()
