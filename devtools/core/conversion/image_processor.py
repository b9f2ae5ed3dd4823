"""Core image processing operations backed by Pillow."""

import io
from typing import List, Sequence

import structlog
from PIL import Image, ImageDraw, ImageOps, UnidentifiedImageError

from devtools.config import settings
from devtools.core.constants import (
    OG_CARD_HEIGHT,
    OG_CARD_WIDTH,
    OG_CORNER_RADIUS,
    OG_FRAME_COLOR,
    OG_FRAME_WIDTH,
    OG_OUTPUT_FORMATS,
    OG_WEBP_QUALITY,
    OPAQUE_FORMATS,
    PILLOW_FORMAT_NAMES,
)
from devtools.core.exceptions import (
    ConversionFailedError,
    InvalidImageError,
    UnsupportedFormatError,
    ValidationError,
)

logger = structlog.get_logger()


def codec_available(output_format: str) -> bool:
    """Return True when the installed Pillow build can write the format."""
    pillow_name = PILLOW_FORMAT_NAMES.get(output_format.lower())
    if pillow_name is None:
        return False
    Image.init()
    return pillow_name in Image.SAVE


class ImageProcessor:
    """Handles the three image transforms the tools need."""

    # Maximum image dimensions to prevent memory issues
    MAX_DIMENSION = 10000
    MAX_PIXELS = 100_000_000  # 100 megapixels

    def load_image(self, image_data: bytes) -> Image.Image:
        """
        Decode image bytes into a fully loaded Pillow image.

        EXIF orientation is applied so the output matches what a browser shows.

        Raises:
            InvalidImageError: If the data is empty, not an image or too large
        """
        if not image_data:
            raise InvalidImageError("Empty image data")

        try:
            with Image.open(io.BytesIO(image_data)) as img:
                if img.width > self.MAX_DIMENSION or img.height > self.MAX_DIMENSION:
                    raise InvalidImageError(
                        f"Image dimensions exceed maximum allowed ({self.MAX_DIMENSION}x{self.MAX_DIMENSION})",
                        details={"constraints": f"max {self.MAX_DIMENSION}px per edge"},
                    )
                if img.width * img.height > self.MAX_PIXELS:
                    raise InvalidImageError(
                        f"Image size exceeds maximum allowed pixels ({self.MAX_PIXELS})"
                    )
                img.load()
                image = ImageOps.exif_transpose(img)
        except InvalidImageError:
            raise
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise InvalidImageError(f"Invalid image data: {e}")

        return image

    def convert(self, image_data: bytes, output_format: str, quality: int = 100) -> bytes:
        """
        Re-encode an image in another format.

        Args:
            image_data: Raw source bytes
            output_format: One of the supported output formats
            quality: Quality for lossy encoders (1-100)

        Returns:
            Encoded output bytes
        """
        output_format = output_format.lower()
        pillow_name = PILLOW_FORMAT_NAMES.get(output_format)
        if pillow_name is None or not codec_available(output_format):
            raise UnsupportedFormatError(
                f"Output format '{output_format}' is not available",
                details={
                    "requested_format": output_format,
                    "supported_formats": sorted(PILLOW_FORMAT_NAMES),
                },
            )

        image = self.load_image(image_data)

        if output_format == "ico":
            edge = max(image.size)
            defaults = sorted(settings.default_ico_sizes)
            sizes = [s for s in defaults if s <= edge] or defaults[:1]
            return self._encode_ico(image, sizes)

        image = self._prepare_mode(image, output_format)
        save_params = self._save_params(output_format, quality)

        buffer = io.BytesIO()
        try:
            image.save(buffer, format=pillow_name, **save_params)
        except (OSError, ValueError, KeyError) as e:
            raise ConversionFailedError(
                f"Failed to encode image as {output_format}: {e}",
                details={"output_format": output_format},
            )

        output = buffer.getvalue()
        logger.debug(
            "Image converted",
            output_format=output_format,
            input_size=len(image_data),
            output_size=len(output),
        )
        return output

    def build_ico(self, image_data: bytes, sizes: Sequence[int]) -> bytes:
        """
        Pack one square frame per requested size into an ICO file.

        Each frame is a centre crop of the source scaled to size x size, so
        non-square sources are cropped to a square rather than stretched.
        """
        sizes = self.validate_ico_sizes(sizes)
        image = self.load_image(image_data)
        return self._encode_ico(image, sizes)

    def compose_og_card(self, image_data: bytes, output_format: str = "png") -> bytes:
        """
        Render the 1200x630 Open Graph card: the image stretched over the inner
        area with rounded corners, inside a muted frame.
        """
        output_format = output_format.lower()
        if output_format not in OG_OUTPUT_FORMATS:
            raise UnsupportedFormatError(
                f"Open Graph images can only be exported as {', '.join(OG_OUTPUT_FORMATS)}",
                details={
                    "requested_format": output_format,
                    "supported_formats": OG_OUTPUT_FORMATS,
                },
            )

        image = self.load_image(image_data).convert("RGBA")
        inner_size = (
            OG_CARD_WIDTH - 2 * OG_FRAME_WIDTH,
            OG_CARD_HEIGHT - 2 * OG_FRAME_WIDTH,
        )
        inner = image.resize(inner_size, Image.Resampling.LANCZOS)

        mask = Image.new("L", inner_size, 0)
        ImageDraw.Draw(mask).rounded_rectangle(
            (0, 0, inner_size[0] - 1, inner_size[1] - 1),
            radius=OG_CORNER_RADIUS,
            fill=255,
        )
        alpha = Image.new("L", inner_size, 0)
        alpha.paste(inner.getchannel("A"), mask=mask)

        card = Image.new("RGB", (OG_CARD_WIDTH, OG_CARD_HEIGHT), OG_FRAME_COLOR)
        card.paste(inner.convert("RGB"), (OG_FRAME_WIDTH, OG_FRAME_WIDTH), alpha)

        buffer = io.BytesIO()
        if output_format == "webp":
            card.save(buffer, format="WEBP", quality=OG_WEBP_QUALITY)
        else:
            card.save(buffer, format="PNG", optimize=True)
        return buffer.getvalue()

    @staticmethod
    def validate_ico_sizes(sizes: Sequence[int]) -> List[int]:
        """Return sorted unique sizes, rejecting empty or out-of-range lists."""
        if not sizes:
            raise ValidationError(
                "At least one icon size is required",
                details={"field_name": "sizes"},
            )
        cleaned = []
        for size in sizes:
            if isinstance(size, bool) or not isinstance(size, int):
                raise ValidationError(
                    "Icon sizes must be integers",
                    details={"field_name": "sizes", "field_value": str(size)},
                )
            if size < 1 or size > settings.max_ico_size:
                raise ValidationError(
                    f"Icon sizes must be between 1 and {settings.max_ico_size}",
                    details={"field_name": "sizes", "field_value": size},
                )
            cleaned.append(size)
        return sorted(set(cleaned))

    def _encode_ico(self, image: Image.Image, sizes: Sequence[int]) -> bytes:
        image = image.convert("RGBA")
        frames = [
            ImageOps.fit(image, (size, size), Image.Resampling.LANCZOS)
            for size in sorted(sizes, reverse=True)
        ]
        # Pillow drops sizes larger than the base frame, so the largest goes first
        base, rest = frames[0], frames[1:]

        buffer = io.BytesIO()
        try:
            base.save(
                buffer,
                format="ICO",
                sizes=[(size, size) for size in sizes],
                append_images=rest,
            )
        except (OSError, ValueError) as e:
            raise ConversionFailedError(
                f"ICO generation failed: {e}", details={"output_format": "ico"}
            )
        return buffer.getvalue()

    @staticmethod
    def _prepare_mode(image: Image.Image, output_format: str) -> Image.Image:
        """Convert color mode to one the target encoder accepts."""
        has_alpha = image.mode in ("RGBA", "LA") or (
            image.mode == "P" and "transparency" in image.info
        )
        if output_format in OPAQUE_FORMATS:
            if has_alpha:
                rgba = image.convert("RGBA")
                background = Image.new("RGB", rgba.size, (255, 255, 255))
                background.paste(rgba, mask=rgba.getchannel("A"))
                return background
            return image.convert("RGB") if image.mode != "RGB" else image

        if image.mode not in ("RGB", "RGBA"):
            return image.convert("RGBA" if has_alpha else "RGB")
        return image

    @staticmethod
    def _save_params(output_format: str, quality: int) -> dict:
        if output_format == "webp":
            return {"quality": quality, "method": 4}
        if output_format in ("jpg", "jpeg"):
            return {"quality": min(quality, 95), "optimize": True}
        if output_format == "avif":
            return {"quality": quality}
        if output_format == "png":
            return {"optimize": True}
        return {}


image_processor = ImageProcessor()
