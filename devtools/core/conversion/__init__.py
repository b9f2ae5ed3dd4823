"""Pillow-backed image transforms."""

from .image_processor import ImageProcessor, codec_available, image_processor

__all__ = ["ImageProcessor", "codec_available", "image_processor"]
