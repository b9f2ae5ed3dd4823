"""Shared constants for the devtools server."""

# Upload limits
DEFAULT_MAX_FILE_SIZE = 20 * 1024 * 1024  # 20MB
DEFAULT_OUTPUT_QUALITY = 100

# Output formats offered by the image converter, in display order
SUPPORTED_OUTPUT_FORMATS = ["webp", "jpg", "jpeg", "png", "avif", "ico"]

# Pillow encoder name per output format
PILLOW_FORMAT_NAMES = {
    "webp": "WEBP",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "png": "PNG",
    "avif": "AVIF",
    "ico": "ICO",
}

FORMAT_TO_CONTENT_TYPE = {
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "tiff": "image/tiff",
    "avif": "image/avif",
    "ico": "image/x-icon",
}

# Formats that cannot carry an alpha channel
OPAQUE_FORMATS = {"jpg", "jpeg"}

# Favicon generation
DEFAULT_ICO_SIZES = [16, 32, 48, 64, 128]
MAX_ICO_SIZE = 256
ICO_FILENAME = "favicon.ico"

# Open Graph card layout
OG_CARD_WIDTH = 1200
OG_CARD_HEIGHT = 630
OG_FRAME_WIDTH = 40
OG_FRAME_COLOR = (244, 244, 245)  # muted, #f4f4f5
OG_CORNER_RADIUS = 8
OG_OUTPUT_FORMATS = ["png", "webp"]
OG_WEBP_QUALITY = 95
