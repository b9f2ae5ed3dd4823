"""
Main CLI Application
Typer application wiring the server and tool commands together
"""

from typing import Annotated, Optional

import typer

from devtools import __version__

from .commands.convert import convert_files
from .commands.serve import serve
from .commands.tools import ico, og, theme
from .utils import console

app = typer.Typer(
    name="devtools",
    help="Developer tools: image conversion, favicons, Open Graph cards and theme CSS",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool):
    if value:
        console.print(f"devtools {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            callback=_version_callback,
            is_eager=True,
            help="Show version",
        ),
    ] = None,
):
    """
    Developer tools CLI

    [bold green]Quick Start:[/bold green]

      [cyan]devtools serve[/cyan]
      [cyan]devtools convert *.png -f webp -o out/[/cyan]
      [cyan]devtools ico logo.png --sizes 16,32,48[/cyan]
    """


app.command("serve")(serve)
app.command("convert")(convert_files)
app.command("ico")(ico)
app.command("og")(og)
app.command("theme")(theme)


if __name__ == "__main__":
    app()
