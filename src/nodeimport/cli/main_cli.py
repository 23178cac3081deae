"""
Top-level CLI that wires the import, schema update and schema commands together.
"""

import logging

import typer

from nodeimport.cli.entity_cli import entity_updates
from nodeimport.cli.import_cli import import_nodes
from nodeimport.cli.schema_cli import schema_app
from nodeimport.core.config import settings

main_app = typer.Typer(help="nodeimport CLI")


@main_app.callback()
def configure():
    """
    Import legacy CMS content into the destination content store.
    """
    numeric_level = getattr(logging, settings.log_level.upper(), None)
    if not isinstance(numeric_level, int):
        typer.echo(f"Invalid log level: {settings.log_level}", err=True)
        raise typer.Exit(2)
    logging.basicConfig(
        level=numeric_level,
        format="%(levelname)s %(name)s - %(message)s"
    )


main_app.command("import")(import_nodes)
main_app.command("entity-updates")(entity_updates)
main_app.add_typer(schema_app, name="schema")


def main():
    main_app()


if __name__ == "__main__":
    main()
