"""Command-line interface for Pantry.

This module provides the CLI commands for running and managing
the Pantry server.
"""

from typing import NoReturn

import click

from pantry import __version__
from pantry.core.config import get_settings
from pantry.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="Pantry")
def cli() -> None:
    """Pantry - a minimal headless CMS with webhooks.

    Settings are read from PANTRY_* environment variables and a .env file.
    """


@cli.command()
@click.option(
    "--host",
    type=str,
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the Pantry server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting Pantry server",
        host=bind_host,
        port=bind_port,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "pantry.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else settings.workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
def init_db() -> None:
    """Create missing database tables and seed the operator account."""
    import asyncio

    from pantry.infrastructure.persistence.database import get_db_manager, init_database

    configure_logging(get_settings())

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


@cli.command()
def info() -> None:
    """Display Pantry configuration."""
    settings = get_settings()

    click.echo(f"""
Pantry v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}

Database:
  URL:          {settings.database_url}

Media:
  Path:         {settings.media_path}
  URL Prefix:   {settings.media_url_prefix}
  Max Size:     {settings.max_file_size} bytes

Webhooks:
  Timeout:      {settings.webhook_timeout_seconds}s
  User-Agent:   {settings.effective_webhook_user_agent}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the `pantry` command and `python -m pantry`."""
    cli()


if __name__ == "__main__":
    main()
