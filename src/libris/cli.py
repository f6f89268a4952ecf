#!/usr/bin/env python3
"""
Main CLI entry point for Libris backend server.
"""

import asyncio
import os

import click
import uvicorn

from libris import __version__
from libris.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="libris")
def cli() -> None:
    """Libris CLI - run the server and manage the catalog database."""
    pass


@cli.command()
@click.option("--host", default=None, help="Host to bind to (default: LIBRIS_API_HOST)")
@click.option("--port", default=None, type=int, help="Port to bind to (default: 4000)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str | None, port: int | None, reload: bool, log_level: str) -> None:
    """Start the Libris API server."""
    from libris.config import settings

    configure_logging(debug=(log_level == "debug"), level=log_level)

    host = host or settings.api_host
    port = port or settings.api_port

    # Propagate to the app import when uvicorn reloads in a subprocess
    os.environ["LIBRIS_LOG_LEVEL"] = log_level
    if log_level == "debug":
        os.environ["LIBRIS_DEBUG"] = "true"

    logger.info("Starting Libris API server", host=host, port=port, reload=reload)

    uvicorn.run(
        "libris.api.app:app",
        host=host,
        port=port,
        reload=reload or settings.api_reload,
        log_level=log_level,
    )


@cli.command("init-db")
def init_db() -> None:
    """Create all tables directly from the ORM models (development only)."""
    from libris.database.connection import create_all, dispose_database

    async def _run() -> None:
        try:
            await create_all()
        finally:
            await dispose_database()

    configure_logging(debug=True)
    asyncio.run(_run())
    logger.info("Database tables created")


@cli.command()
def seed() -> None:
    """Load the sample authors and books."""
    from libris.database.connection import dispose_database
    from libris.database.seed_data import seed_catalog

    async def _run() -> dict[str, int]:
        try:
            return await seed_catalog()
        finally:
            await dispose_database()

    configure_logging(debug=True)
    created = asyncio.run(_run())
    click.echo(f"Created {created['authors']} authors and {created['books']} books")


if __name__ == "__main__":
    cli()
