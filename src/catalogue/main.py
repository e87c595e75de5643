from __future__ import annotations

from typing import Optional

import typer
import uvicorn

from .app import create_app
from .config import get_settings
from .logging import setup_logging

cli = typer.Typer(help="Catalogue Service entrypoint")


@cli.command()
def serve(host: str = "0.0.0.0", port: Optional[int] = None) -> None:
    """Start the Catalogue Service using uvicorn."""

    settings = get_settings()
    setup_logging(settings.log_level)
    app = create_app(settings=settings)
    uvicorn.run(
        app,
        host=host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
        lifespan="on",
        access_log=False,
    )


if __name__ == "__main__":
    cli()
