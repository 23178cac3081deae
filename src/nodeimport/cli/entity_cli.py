"""
Command-line interface for applying pending destination schema updates.
"""

import typer
from sqlalchemy.exc import SQLAlchemyError

from nodeimport.database.engine import get_engine
from nodeimport.database.schema_updates import apply_updates, pending_changes


def entity_updates():
    """
    Create missing destination tables and columns.
    """
    engine = get_engine()
    try:
        changes = pending_changes(engine)
    except SQLAlchemyError as e:
        typer.echo(f"Unable to inspect destination database: {e}", err=True)
        raise typer.Exit(1)

    if not changes:
        typer.echo("✅ No entity definition updates needed.")
        return

    typer.echo("---- Entity definition updates detected ----")
    for table_name, operations in changes.items():
        typer.echo(f"Updating entity: {table_name} ({', '.join(operations)})")

    result = apply_updates(engine)
    # A failed phase is reported; the other phase has still run.
    for error in result.errors:
        typer.echo(f"✖ {error}", err=True)
    typer.echo("✅ Entity definitions updated.")
