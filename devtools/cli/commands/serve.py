from typing import Annotated, Optional

import typer
import uvicorn

from devtools.config import settings


def serve(
    host: Annotated[
        Optional[str], typer.Option("--host", help="Interface to bind")
    ] = None,
    port: Annotated[Optional[int], typer.Option("--port", "-p", help="Port")] = None,
    reload: Annotated[
        bool, typer.Option("--reload", help="Restart on code changes")
    ] = False,
):
    """Run the API server."""
    uvicorn.run(
        "devtools.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )
