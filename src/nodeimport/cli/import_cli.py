"""
Command-line interface for importing legacy nodes.
"""

from typing import Optional

import typer

from nodeimport.core.config import settings
from nodeimport.core.errors import LegacyConnectionError
from nodeimport.core.utils import normalize_limit
from nodeimport.database.engine import get_engine
from nodeimport.importer.content_importer import ContentImporter
from nodeimport.legacy.connection import open_legacy_engine
from nodeimport.schemas.records import ImportOutcome, ImportStatus


def format_outcome(outcome: ImportOutcome) -> str:
    """Render one transcript line for an import outcome."""
    if outcome.status == ImportStatus.IMPORTED:
        line = (
            f"✔ nid {outcome.source_id} → new nid {outcome.new_id}  bundle={outcome.bundle}  "
            f"body={'yes' if outcome.has_body else 'no'}  images={outcome.image_count}"
        )
        if outcome.image_field:
            line += f" (dest: {outcome.image_field})"
        return line
    if outcome.status == ImportStatus.SKIPPED_NO_BUNDLE:
        return f"Skip nid {outcome.source_id}: bundle '{outcome.bundle}' not found in destination."
    return f"✖ Failed nid {outcome.source_id}: {outcome.message}"


def import_nodes(
    limit: Optional[int] = typer.Argument(
        None, help="Maximum number of nodes to import (default 10)", show_default=False
    ),
):
    """
    Import published legacy nodes with their body text and images.
    """
    limit = normalize_limit(limit)
    typer.echo(f"Importing up to {limit} nodes from legacy DB (body + images, auto-detected fields)...")

    try:
        legacy_engine = open_legacy_engine(settings.build_legacy_url())
        importer = ContentImporter.from_engines(legacy_engine, get_engine())
        records = importer.fetch_records(limit)
    except LegacyConnectionError as e:
        typer.echo(f"Failed to connect to legacy DB: {e}", err=True)
        raise typer.Exit(1)

    if not records:
        typer.echo("No rows found in legacy node_field_data.")
        return

    typer.echo(f"Found {len(records)} rows. Creating nodes...")
    report = importer.import_records(records, on_outcome=lambda outcome: typer.echo(format_outcome(outcome)))
    typer.echo(f"Done. Created {report.created} node(s).")
