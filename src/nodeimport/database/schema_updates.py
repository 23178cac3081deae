"""
Pending schema updates for the destination content store.

Compares the live database against the ORM metadata with alembic's autogenerate
comparison and applies the additive part of the difference: missing tables are
created and missing columns are added. Destructive changes (dropped or altered
columns) are only reported.
"""

import logging
from typing import Dict, List, Tuple

from alembic.autogenerate import compare_metadata
from alembic.migration import MigrationContext
from alembic.operations import Operations
from pydantic import BaseModel, Field
from sqlalchemy import Column, Table
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from nodeimport.database.models import Base

logger = logging.getLogger(__name__)


class SchemaUpdateResult(BaseModel):
    """Outcome of applying pending schema updates."""
    tables_created: List[str] = Field(default_factory=list)
    columns_added: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


def _include_object(obj, name, type_, reflected, compare_to):
    # Tables that exist only in the database belong to someone else; never report them.
    return not (type_ == "table" and reflected and compare_to is None)


def _flatten(diffs) -> List[Tuple]:
    flat = []
    for diff in diffs:
        # modify_* diffs arrive grouped per column
        if isinstance(diff, list):
            flat.extend(diff)
        else:
            flat.append(diff)
    return flat


def _table_name(diff: Tuple) -> str:
    op, target = diff[0], diff[1]
    if op in ("add_column", "remove_column") or op.startswith("modify_"):
        return diff[2]
    if isinstance(target, Table):
        return target.name
    table = getattr(target, "table", None)  # Index, UniqueConstraint, ForeignKeyConstraint
    if table is not None:
        return table.name
    return str(target)


def compare_schema(engine: Engine) -> List[Tuple]:
    """Return the flattened alembic diff between the database and the ORM metadata."""
    with engine.connect() as conn:
        context = MigrationContext.configure(conn, opts={"include_object": _include_object})
        return _flatten(compare_metadata(context, Base.metadata))


def pending_changes(engine: Engine) -> Dict[str, List[str]]:
    """
    Group pending changes by table name.

    Returns:
        Mapping of table name to the alembic operation names pending for it,
        in the order alembic reported them.
    """
    changes: Dict[str, List[str]] = {}
    for diff in compare_schema(engine):
        changes.setdefault(_table_name(diff), []).append(diff[0])
    return changes


def apply_updates(engine: Engine) -> SchemaUpdateResult:
    """
    Create missing tables, then add missing columns.

    Each phase is attempted independently; a failure in one is recorded in the
    result and does not prevent the other.
    """
    result = SchemaUpdateResult()
    diffs = compare_schema(engine)
    missing_tables = [diff[1] for diff in diffs if diff[0] == "add_table"]
    missing_columns = [(diff[2], diff[3]) for diff in diffs if diff[0] == "add_column"]

    if missing_tables:
        try:
            Base.metadata.create_all(engine, tables=missing_tables)
            result.tables_created = [table.name for table in missing_tables]
            logger.info(f"Created tables: {', '.join(result.tables_created)}")
        except SQLAlchemyError as e:
            logger.error(f"Creating tables failed: {e}")
            result.errors.append(f"Table updates: {e}")

    if missing_columns:
        try:
            with engine.begin() as conn:
                operations = Operations(MigrationContext.configure(conn))
                for table_name, column in missing_columns:
                    # Existing rows have no value for the new column.
                    operations.add_column(table_name, Column(column.name, column.type, nullable=True))
                    result.columns_added.append(f"{table_name}.{column.name}")
            logger.info(f"Added columns: {', '.join(result.columns_added)}")
        except SQLAlchemyError as e:
            logger.error(f"Adding columns failed: {e}")
            result.columns_added = []
            result.errors.append(f"Column updates: {e}")

    return result
