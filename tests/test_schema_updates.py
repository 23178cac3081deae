"""Tests for detecting and applying destination schema updates."""

from sqlalchemy import create_engine, inspect, text

from nodeimport.database.models import Base
from nodeimport.database.schema_updates import apply_updates, pending_changes


def test_empty_database_needs_every_table(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'dest.db'}")

    changes = pending_changes(engine)

    assert set(changes) == set(Base.metadata.tables)
    assert all("add_table" in operations for operations in changes.values())
    engine.dispose()


def test_apply_creates_missing_tables(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'dest.db'}")

    result = apply_updates(engine)

    assert result.errors == []
    assert set(result.tables_created) == set(Base.metadata.tables)
    assert set(Base.metadata.tables) <= set(inspect(engine).get_table_names())
    engine.dispose()


def test_apply_adds_missing_column(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'dest.db'}")
    Base.metadata.create_all(engine, tables=[
        table for name, table in Base.metadata.tables.items() if name != "files"
    ])
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE files (fid INTEGER PRIMARY KEY, uri VARCHAR NOT NULL UNIQUE, "
                          "status INTEGER NOT NULL, created INTEGER)"))

    assert "add_column" in pending_changes(engine)["files"]

    result = apply_updates(engine)

    assert result.columns_added == ["files.filename"]
    assert "filename" in {column["name"] for column in inspect(engine).get_columns("files")}
    engine.dispose()


def test_unrelated_tables_are_ignored(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'dest.db'}")
    Base.metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE cache_render (cid TEXT PRIMARY KEY)"))

    assert "cache_render" not in pending_changes(engine)
    engine.dispose()
