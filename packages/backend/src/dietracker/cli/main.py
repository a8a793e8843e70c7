"""dietracker CLI — run the server and apply database migrations.

Usage:
    dietracker migrate              # Upgrade the database to the latest schema
    dietracker serve                # Run the HTTP server (host/port from settings)
    dietracker serve --reload       # Auto-reload on code changes
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from dietracker.config import settings
from dietracker.logging_config import configure_logging

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "db" / "migrations"


def _alembic_config(database_url: str) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", database_url)
    return cfg


def _ensure_sqlite_dir(database_url: str) -> None:
    """SQLite creates the file but not its directory."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)


@click.group()
def cli() -> None:
    """Simple Diet Tracker backend."""
    configure_logging(settings.environment)


@cli.command()
@click.option("--database-url", default=None, help="Override DIETRACKER_DATABASE_URL.")
@click.option("--revision", default="head", show_default=True, help="Target revision.")
def migrate(database_url: Optional[str], revision: str) -> None:
    """Apply migrations up to REVISION."""
    url = database_url or settings.database_url
    _ensure_sqlite_dir(url)
    command.upgrade(_alembic_config(url), revision)
    click.secho(f"Database at {make_url(url).render_as_string(hide_password=True)} is at {revision}", fg="green")


@cli.command()
@click.option("--host", default=None, help="Bind host (default: settings).")
@click.option("--port", default=None, type=int, help="Bind port (default: settings).")
@click.option("--reload", is_flag=True, help="Reload on code changes.")
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "dietracker.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


if __name__ == "__main__":
    cli()
