"""Rich display functions for the dbsource CLI."""

from typing import Dict, List, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dbsource.datasource.base.exceptions import ValidationError
from dbsource.datasource.base.processor import DatasourceProcessor

console = Console()


def display_engines(processors: Sequence[DatasourceProcessor]) -> None:
    """Display supported engines with their drivers and default ports.

    Args:
        processors: One processor per supported engine
    """
    table = Table(show_header=True, header_style="bold blue")
    table.add_column("Engine", style="cyan")
    table.add_column("Code", style="white", justify="right")
    table.add_column("Driver", style="white")
    table.add_column("Default port", style="white", justify="right")

    for processor in processors:
        table.add_row(
            processor.engine.descp,
            str(processor.engine.code),
            processor.driver,
            str(processor.default_port),
        )

    console.print(f"📡 [bold blue]Supported engines ({len(processors)})[/bold blue]")
    console.print(table)


def display_datasources(datasources: Dict[str, Dict[str, object]]) -> None:
    """Display the datasources configured in the settings file."""
    if not datasources:
        console.print("📋 [yellow]No datasources configured[/yellow]")
        console.print("💡 [dim]Add a 'datasources' section to dbsource.yml[/dim]")
        return

    table = Table(show_header=True, header_style="bold blue")
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="white")
    table.add_column("Host", style="white")
    table.add_column("Database", style="white")

    for name, config in datasources.items():
        table.add_row(
            name,
            str(config.get("type", "unknown")).upper(),
            str(config.get("host", "")),
            str(config.get("database", "")),
        )
    console.print(table)


def display_validation_error(name: str, error: ValidationError) -> None:
    """Display every rejected field of a datasource."""
    console.print(f"❌ [bold red]Datasource '{name}' validation failed[/bold red]")
    console.print("\n📋 [yellow]Issues found:[/yellow]")
    for field_name, reason in error.fields.items():
        console.print(f"  • [cyan]{escape(field_name)}[/cyan]: [red]{escape(reason)}[/red]")


def display_tables(database: str, tables: List[str]) -> None:
    if not tables:
        console.print(f"📭 [yellow]No matching tables in '{database}'[/yellow]")
        return
    console.print(f"📋 [bold blue]Tables in '{database}' ({len(tables)})[/bold blue]")
    for table_name in tables:
        console.print(f"  • [cyan]{escape(table_name)}[/cyan]")


def display_success(message: str) -> None:
    console.print(f"✅ [bold green]{escape(message)}[/bold green]")


def display_error(message: str) -> None:
    console.print(f"❌ [bold red]{escape(message)}[/bold red]")
