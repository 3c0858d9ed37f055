"""uniquekey CLI entry point."""

from __future__ import annotations

from pathlib import Path

import click


@click.group()
@click.version_option(package_name="uniquekey")
def cli() -> None:
    """uniquekey: prefixed, collision-checked keys from the command line."""


@cli.command()
@click.argument("names", nargs=-1, required=True)
@click.option(
    "--definitions",
    "definitions_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="YAML file of key definitions.",
)
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML settings file with an 'allocator' section.",
)
@click.option(
    "--database",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="SQLite database to check existing keys against.",
)
@click.option("--seed", type=int, default=None, help="Seed for reproducible candidates.")
@click.option("--json-logs", is_flag=True, default=False, help="Output logs as JSON.")
@click.option(
    "--metrics-port",
    type=int,
    default=0,
    help="Prometheus metrics port (0=disabled).",
)
def generate(
    names: tuple[str, ...],
    definitions_path: Path,
    settings_path: Path | None,
    database: Path | None,
    seed: int | None,
    json_logs: bool,
    metrics_port: int,
) -> None:
    """Print one unique key per definition NAME, in order."""
    import random
    import sqlite3

    from uniquekey.core.config import load_definitions, load_settings, make_allocator_config
    from uniquekey.core.errors import UniqueKeyError
    from uniquekey.core.logging import configure_logging
    from uniquekey.core.service import generate_keys
    from uniquekey.store.base import ExistenceChecker
    from uniquekey.store.memory import InMemoryKeyStore
    from uniquekey.store.sqlite import SqliteKeyStore

    configure_logging(json_output=json_logs, level="WARNING")

    if metrics_port > 0:
        from uniquekey.metrics.server import start_metrics_server

        start_metrics_server(metrics_port)

    rng = random.Random(seed) if seed is not None else None
    conn: sqlite3.Connection | None = None
    try:
        resolver = load_definitions(definitions_path)
        settings = load_settings(settings_path) if settings_path else {}
        config = make_allocator_config(settings)

        checker: ExistenceChecker
        if database is not None:
            conn = sqlite3.connect(database)
            checker = SqliteKeyStore(conn)
        else:
            checker = InMemoryKeyStore()

        keys = generate_keys(names, resolver, checker, config=config, rng=rng)
    except UniqueKeyError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        if conn is not None:
            conn.close()

    for key in keys:
        click.echo(key)


@cli.command()
@click.option(
    "--definitions",
    "definitions_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="YAML file of key definitions.",
)
def definitions(definitions_path: Path) -> None:
    """List the configured key definitions."""
    from uniquekey.core.config import load_definitions
    from uniquekey.core.errors import UniqueKeyError

    try:
        store = load_definitions(definitions_path)
    except UniqueKeyError as exc:
        raise click.ClickException(str(exc)) from exc

    if not len(store):
        click.echo("No key definitions configured.")
        return

    for name in store.names():
        d = store.resolve(name)
        assert d is not None
        click.echo(
            f"{d.name:<20} {d.prefix:<8} length={d.total_length:<3} "
            f"-> {d.target_entity}.{d.target_field}"
        )
