"""CLI commands for mongo-seed."""

import logging
import sys
from contextlib import contextmanager
from pathlib import Path

import click
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from mongo_seed import Seeder
from mongo_seed.backends import StagingBackend
from mongo_seed.config import CONFIG_FILENAME, Config
from mongo_seed.connection import connect
from mongo_seed.exceptions import MongoSeedError


def _load_config(config_path: str | None, url: str | None) -> Config:
    try:
        config = Config.load(config_path)
    except (FileNotFoundError, ValidationError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if url is not None:
        config.database.url = url
    return config


@contextmanager
def _open_seeder(config: Config, backend: str):
    if backend == "staging":
        yield Seeder(
            StagingBackend(
                users_collection=config.database.users_collection,
                marker_collection=config.database.marker_collection,
            ),
            config,
        )
        return

    with connect(config.database) as db:
        yield Seeder.for_database(db, config)


@click.group()
@click.version_option(package_name="mongo-seed")
@click.option("--verbose", "-v", is_flag=True, help="Enable INFO logging")
def cli(verbose: bool) -> None:
    """mongo-seed - idempotent MongoDB seeding of synthetic users."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help=f"Path to {CONFIG_FILENAME} (default: search from current directory)",
)
url_option = click.option("--url", help="MongoDB connection URL (overrides config)")
backend_option = click.option(
    "--backend",
    type=click.Choice(["direct", "staging"]),
    default="direct",
    show_default=True,
    help="direct writes to MongoDB, staging runs in memory",
)


@cli.command()
@config_option
@url_option
@backend_option
@click.option("--count", type=int, help="Number of records (overrides config)")
def run(config_path: str | None, url: str | None, backend: str, count: int | None) -> None:
    """Seed users once; skip if the bootstrap marker exists."""
    config = _load_config(config_path, url)

    try:
        with _open_seeder(config, backend) as seeder:
            result = seeder.run(count)
    except (MongoSeedError, PyMongoError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if result.skipped:
        click.echo("Test data present; skipping")
    else:
        click.echo(f"Loaded {result.requested} docs")
        if result.duplicates:
            click.echo(f"Ignored {result.duplicates} duplicate keys")
    click.echo(f"Count: {result.total}")


@cli.command()
@config_option
@url_option
@backend_option
def status(config_path: str | None, url: str | None, backend: str) -> None:
    """Show bootstrap state and record count without writing."""
    config = _load_config(config_path, url)

    try:
        with _open_seeder(config, backend) as seeder:
            state, total = seeder.status()
    except (MongoSeedError, PyMongoError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"State: {state.value}")
    click.echo(f"Count: {total}")


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False), default=CONFIG_FILENAME)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(path: str, force: bool) -> None:
    """Write a default configuration file."""
    target = Path(path)
    if target.exists() and not force:
        click.echo(f"Error: {target} already exists (use --force)", err=True)
        sys.exit(1)

    Config().to_toml(target)
    click.echo(f"✓ Wrote {target}")


if __name__ == "__main__":
    cli()
