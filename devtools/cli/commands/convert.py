"""
Convert Command
Batch image conversion through the client-side queue
"""

import asyncio
import functools
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
)
from rich.table import Table

from devtools_sdk import AsyncDevToolsClient, BatchQueue, BatchSummary, OutputFormat
from devtools_sdk.batch import EntryStatus, FileEntry, Notification

from ..utils import client_config, console, err_console, split_images


def convert_files(
    files: Annotated[List[Path], typer.Argument(help="Images to convert")],
    format: Annotated[
        OutputFormat, typer.Option("-f", "--format", help="Output format for all files")
    ] = OutputFormat.WEBP,
    output_dir: Annotated[
        Path, typer.Option("-o", "--output-dir", help="Where converted files are written")
    ] = Path("."),
    quality: Annotated[
        Optional[int],
        typer.Option("-q", "--quality", min=1, max=100, help="Quality for lossy formats"),
    ] = None,
    zip_output: Annotated[
        bool, typer.Option("--zip", help="Write one converted.zip instead of loose files")
    ] = False,
):
    """
    Convert one or more images

    Examples:
      devtools convert photo.png -f webp
      devtools convert *.jpg -f avif -o converted/ --zip
    """
    accepted, rejected = split_images(files)
    for path in rejected:
        err_console.print(f"[yellow]Skipping {path}: not an accepted image file[/yellow]")

    if not accepted:
        err_console.print("[red]No valid image files to convert[/red]")
        raise typer.Exit(1)

    summary = asyncio.run(
        _run_conversion(accepted, format.value, output_dir, quality, zip_output)
    )
    if summary.failed:
        raise typer.Exit(1)


async def _run_conversion(
    files: List[Path],
    format: str,
    output_dir: Path,
    quality: Optional[int],
    zip_output: bool,
) -> BatchSummary:
    """Queue the files, convert them one by one and write the results."""
    config = client_config()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        MofNCompleteColumn(),
        BarColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Converting...", total=len(files))

        def on_change(entry: FileEntry) -> None:
            if entry.status == EntryStatus.CONVERTING:
                progress.update(task, description=f"Converting {entry.filename}")
            elif entry.status in (EntryStatus.CONVERTED, EntryStatus.FAILED):
                progress.advance(task)

        def on_notify(notification: Notification) -> None:
            style = "red" if notification.variant == "destructive" else "green"
            progress.console.print(
                f"[{style}]{notification.title}:[/{style}] {notification.description}"
            )

        async with AsyncDevToolsClient.from_config(config) as client:
            converter = functools.partial(client.convert_image, quality=quality)
            async with BatchQueue(
                converter,
                target_format=format,
                on_notify=on_notify,
                on_change=on_change,
            ) as queue:
                queue.enqueue(files)
                summary = await queue.convert_all()

                if zip_output:
                    output_dir.mkdir(parents=True, exist_ok=True)
                    archive = output_dir / "converted.zip"
                    archive.write_bytes(queue.build_archive())
                    written = [archive] if summary.converted else []
                else:
                    written = queue.write_downloads(output_dir)

                failures = [e for e in queue if e.status == EntryStatus.FAILED]

    _print_summary(summary, format, written)
    for entry in failures:
        err_console.print(f"[red]{entry.filename}: {entry.error}[/red]")
    return summary


def _print_summary(summary: BatchSummary, format: str, written: List[Path]) -> None:
    table = Table(title="Conversion Summary", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    table.add_row("Total Files", str(summary.total))
    table.add_row("Converted", f"[green]{summary.converted}[/green]")
    if summary.failed:
        table.add_row("Failed", f"[red]{summary.failed}[/red]")
    table.add_row("Output Format", format.upper())

    console.print()
    console.print(table)
    for path in written:
        console.print(f"  [dim]{path}[/dim]")
