"""Shared console, error reporting and input checks for CLI commands."""

import mimetypes
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

from rich.console import Console

from devtools.config import settings
from devtools_sdk.config import ClientConfig
from devtools_sdk.exceptions import (
    DevToolsError,
    PayloadTooLargeError,
    TransportError,
    UnsupportedFormatError,
    ValidationError,
)

mimetypes.add_type("image/webp", ".webp")
mimetypes.add_type("image/avif", ".avif")

console = Console()
err_console = Console(stderr=True)


def client_config() -> ClientConfig:
    return ClientConfig.from_env()


def handle_api_error(error: Exception, console: Console = err_console) -> None:
    """Print a one-line explanation of a client error."""
    if isinstance(error, TransportError):
        console.print(f"[red]Error: {error.message}[/red]")
        console.print("[dim]Is the API server running? Start it with: devtools serve[/dim]")
    elif isinstance(error, PayloadTooLargeError):
        console.print("[red]Error: File too large for conversion.[/red]")
    elif isinstance(error, UnsupportedFormatError):
        console.print("[red]Error: Unsupported file type.[/red]")
    elif isinstance(error, ValidationError):
        console.print(f"[red]Error: {error.message}[/red]")
    elif isinstance(error, DevToolsError):
        status = error.status_code or "unknown"
        console.print(f"[red]Error: {error.message} (status {status})[/red]")
    else:
        console.print(f"[red]Error: {error}[/red]")


def is_image_file(path: Path) -> bool:
    """True for existing files whose guessed MIME type is an accepted upload type."""
    if not path.is_file():
        return False
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type in settings.allowed_upload_mime_types


def split_images(paths: Iterable[Path]) -> Tuple[List[Path], List[Path]]:
    accepted, rejected = [], []
    for path in paths:
        (accepted if is_image_file(path) else rejected).append(path)
    return accepted, rejected


def parse_assignments(values: Iterable[str]) -> Dict[str, str]:
    """Parse repeated `key=value` options into a dict."""
    result = {}
    for value in values:
        key, sep, raw = value.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected key=value, got {value!r}")
        result[key.strip()] = raw.strip()
    return result


def parse_sizes(value: str) -> List[int]:
    """Parse `16,32,48` into a list of ints."""
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError:
        raise ValueError(f"Sizes must be comma separated integers, got {value!r}")
