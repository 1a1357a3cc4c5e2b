#!/usr/bin/env python3
"""dbsource CLI.

Inspect the datasources declared in ``dbsource.yml``: validate them, render
their connection URL, unique id and persisted form, and list their tables.
"""

import json
from typing import Optional

import typer

from dbsource.cli.display import (
    console,
    display_datasources,
    display_engines,
    display_error,
    display_success,
    display_tables,
    display_validation_error,
)
from dbsource.config import Settings, load_settings, reset_settings
from dbsource.datasource import dispatcher
from dbsource.datasource.base.exceptions import DatasourceError, ValidationError
from dbsource.datasource.base.params import DatasourceParams
from dbsource.datasource.introspection import SchemaIntrospector
from dbsource.logging import configure_logging, get_logger, suppress_third_party_loggers

logger = get_logger(__name__)

app = typer.Typer(
    name="dbsource",
    help="dbsource CLI - one connection contract for many database engines",
    add_completion=False,
)


class _State:
    config_path: Optional[str] = None
    verbose: bool = False
    quiet: bool = False


state = _State()


@app.callback()
def main(
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="Path to dbsource.yml (default: $DBSOURCE_CONFIG or ./dbsource.yml)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show warnings and errors"),
) -> None:
    """Validate datasources and inspect their connection details."""
    state.config_path = config
    state.verbose = verbose
    state.quiet = quiet
    configure_logging(verbose=verbose, quiet=quiet)
    suppress_third_party_loggers()


def _load_settings() -> Settings:
    try:
        settings = load_settings(state.config_path)
    except (FileNotFoundError, ValueError) as e:
        display_error(str(e))
        raise typer.Exit(1)
    reset_settings(settings)
    # --verbose and --quiet win over log_level from the settings
    configure_logging(verbose=state.verbose, quiet=state.quiet, level=settings.log_level)
    suppress_third_party_loggers()
    return settings


def _load_params(name: str) -> DatasourceParams:
    settings = _load_settings()
    config = settings.datasources.get(name)
    if config is None:
        display_error(f"Datasource '{name}' not found")
        if settings.datasources:
            console.print(f"💡 [yellow]Available:[/yellow] {', '.join(sorted(settings.datasources))}")
        raise typer.Exit(1)
    try:
        return dispatcher.raw_params_from_dict(config)
    except DatasourceError as e:
        display_error(str(e))
        raise typer.Exit(1)


def _build(name: str):
    params = _load_params(name)
    try:
        return params, dispatcher.build_descriptor(params)
    except ValidationError as e:
        display_validation_error(name, e)
        raise typer.Exit(1)
    except DatasourceError as e:
        display_error(str(e))
        raise typer.Exit(1)


@app.command()
def engines() -> None:
    """List supported engines."""
    display_engines([dispatcher.get_processor(kind) for kind in dispatcher.supported_engines()])


@app.command("list")
def list_datasources() -> None:
    """List datasources declared in the configuration file."""
    settings = _load_settings()
    display_datasources(settings.datasources)


@app.command()
def validate(name: str = typer.Argument(..., help="Datasource name")) -> None:
    """Validate a datasource without connecting to it."""
    params = _load_params(name)
    try:
        dispatcher.validate(params)
    except ValidationError as e:
        display_validation_error(name, e)
        raise typer.Exit(1)
    display_success(f"Datasource '{name}' is valid")


@app.command()
def url(name: str = typer.Argument(..., help="Datasource name")) -> None:
    """Print the connection URL (never includes credentials)."""
    params, descriptor = _build(name)
    typer.echo(dispatcher.build_url(params.type, descriptor))


@app.command("unique-id")
def unique_id(name: str = typer.Argument(..., help="Datasource name")) -> None:
    """Print the password-free unique id used as a pooling key."""
    params, descriptor = _build(name)
    typer.echo(dispatcher.build_unique_id(descriptor, params.type))


@app.command()
def descriptor(name: str = typer.Argument(..., help="Datasource name")) -> None:
    """Print the descriptor as it would be persisted, password masked."""
    _, built = _build(name)
    typer.echo(json.dumps(built.masked(), indent=2, ensure_ascii=False))


@app.command()
def tables(
    name: str = typer.Argument(..., help="Datasource name"),
    pattern: str = typer.Option(".*", "--pattern", "-p", help="Regular expression table names must fully match"),
) -> None:
    """List tables of a datasource whose names fully match a pattern."""
    params, built = _build(name)
    try:
        found = SchemaIntrospector().scan(params.type, built, pattern)
    except DatasourceError as e:
        logger.debug(f"Table listing for '{name}' failed: {e}")
        display_error(str(e))
        raise typer.Exit(1)
    display_tables(built.database, found)


def cli() -> None:
    """Entry point for the console script."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n⚠️  [yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(130)


if __name__ == "__main__":
    cli()
