"""
Tool Commands
Favicon, Open Graph card and theme CSS generation
"""

import asyncio
from pathlib import Path
from typing import Annotated, List, Optional

import typer

from devtools.config import settings
from devtools.core.constants import ICO_FILENAME
from devtools_sdk import AsyncDevToolsClient, DevToolsError

from ..utils import (
    client_config,
    console,
    err_console,
    handle_api_error,
    is_image_file,
    parse_assignments,
    parse_sizes,
)


def _require_image(path: Path) -> bytes:
    if not is_image_file(path):
        err_console.print(f"[red]Not an accepted image file: {path}[/red]")
        raise typer.Exit(1)
    return path.read_bytes()


def _call(coro):
    """Run a client coroutine, turning client errors into exit code 1."""
    try:
        return asyncio.run(coro)
    except DevToolsError as e:
        handle_api_error(e)
        raise typer.Exit(1)


def ico(
    image: Annotated[Path, typer.Argument(help="Source image (PNG or JPEG)")],
    sizes: Annotated[
        str, typer.Option("--sizes", "-s", help="Comma separated icon sizes")
    ] = ",".join(str(s) for s in settings.default_ico_sizes),
    output: Annotated[
        Path, typer.Option("-o", "--output", help="Where to write the icon")
    ] = Path(ICO_FILENAME),
):
    """
    Generate a multi-resolution favicon

    Example:
      devtools ico logo.png --sizes 16,32,48 -o favicon.ico
    """
    try:
        size_list = parse_sizes(sizes)
    except ValueError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)

    data = _require_image(image)

    async def run() -> bytes:
        async with AsyncDevToolsClient.from_config(client_config()) as client:
            return await client.generate_ico(data, image.name, size_list)

    output.write_bytes(_call(run()))
    console.print(f"[green]Icon written:[/green] {output} ({', '.join(map(str, size_list))})")


def og(
    image: Annotated[Path, typer.Argument(help="Image to place on the card")],
    format: Annotated[
        str, typer.Option("-f", "--format", help="Export format: png or webp")
    ] = "png",
    output: Annotated[
        Optional[Path], typer.Option("-o", "--output", help="Output file")
    ] = None,
):
    """
    Render a 1200x630 Open Graph thumbnail

    Example:
      devtools og screenshot.png -f webp
    """
    format = format.lower()
    if format not in ("png", "webp"):
        err_console.print("[red]Format must be png or webp[/red]")
        raise typer.Exit(2)

    data = _require_image(image)
    output = output or Path(f"{image.stem}.{format}")

    async def run() -> bytes:
        async with AsyncDevToolsClient.from_config(client_config()) as client:
            return await client.og_image(data, image.name, format)

    output.write_bytes(_call(run()))
    console.print(f"[green]Image downloaded:[/green] {output}")


def theme(
    set_light: Annotated[
        Optional[List[str]],
        typer.Option("--set", help="Light override, e.g. primary=#2563eb"),
    ] = None,
    set_dark: Annotated[
        Optional[List[str]],
        typer.Option("--dark-set", help="Dark override, e.g. background=#020617"),
    ] = None,
    output: Annotated[
        Optional[Path], typer.Option("-o", "--output", help="Write CSS to a file")
    ] = None,
):
    """
    Print shadcn/ui CSS variables for the light and dark themes

    Example:
      devtools theme --set primary=#2563eb --set radius=0.75rem
    """
    try:
        light = parse_assignments(set_light or [])
        dark = parse_assignments(set_dark or [])
    except ValueError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)

    async def run() -> str:
        async with AsyncDevToolsClient.from_config(client_config()) as client:
            return await client.theme_css(light, dark)

    css = _call(run())
    if output:
        output.write_text(css + "\n", encoding="utf-8")
        console.print(f"[green]CSS written:[/green] {output}")
    else:
        console.print(css, markup=False, highlight=False)
