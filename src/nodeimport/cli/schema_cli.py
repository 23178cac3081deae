"""
CLI commands for inspecting and preparing destination bundles.

The importer maps legacy values onto whatever bundles and fields exist at the
destination; these commands let an operator create them before an import.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy import select

from nodeimport.core.errors import SchemaError
from nodeimport.database.bundles import add_field, create_bundle
from nodeimport.database.models import NodeType
from nodeimport.database.session import db_session, get_session

schema_app = typer.Typer(help="Commands to inspect and prepare destination bundles.")
console = Console()


@db_session
def _bundle_rows(session):
    rows = []
    for node_type in session.scalars(select(NodeType).order_by(NodeType.type)):
        if not node_type.fields:
            rows.append((node_type.type, "-", "-", "-"))
        for definition in node_type.fields:
            cardinality = "unlimited" if definition.cardinality == -1 else str(definition.cardinality)
            rows.append((node_type.type, definition.field_name, definition.field_type, cardinality))
    return rows


@schema_app.command("show")
def show_schema():
    """
    List destination bundles with their fields.
    """
    rows = _bundle_rows()
    if not rows:
        typer.echo("No bundles defined in destination.")
        return

    table = Table(title="Destination bundles")
    table.add_column("Bundle", style="cyan")
    table.add_column("Field")
    table.add_column("Type", style="green")
    table.add_column("Cardinality", justify="right")
    for row in rows:
        table.add_row(*row)
    console.print(table)


@schema_app.command("add-bundle")
def add_bundle_cmd(
    name: str = typer.Argument(..., help="Machine name of the bundle"),
    label: Optional[str] = typer.Option(None, "--label", "-l", help="Human readable name"),
):
    """
    Create a destination bundle.
    """
    with get_session() as session:
        try:
            create_bundle(session, name, label)
        except SchemaError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
    typer.echo(f"Created bundle {name}")


@schema_app.command("add-field")
def add_field_cmd(
    bundle: str = typer.Argument(..., help="Bundle to attach the field to"),
    field_name: str = typer.Argument(..., help="Machine name of the field"),
    field_type: str = typer.Argument(..., help="Field type (text_long, text_with_summary, image, ...)"),
    cardinality: int = typer.Option(1, "--cardinality", "-c", help="Maximum values, -1 for unlimited"),
):
    """
    Attach a field definition to a destination bundle.
    """
    with get_session() as session:
        try:
            add_field(session, bundle, field_name, field_type, cardinality)
        except SchemaError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
    typer.echo(f"Added field {bundle}.{field_name} ({field_type})")
