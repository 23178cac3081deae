"""Tests for destination file record lookup-or-create."""

from sqlalchemy import create_engine, func, select

from nodeimport.core.settings import FILE_STATUS_PERMANENT, FILE_STATUS_TEMPORARY
from nodeimport.database.models import FileAsset
from nodeimport.database.session import make_session_factory
from nodeimport.importer.asset_resolver import AssetResolver


def count_files(session_factory, uri):
    with session_factory() as session:
        return session.scalar(select(func.count()).select_from(FileAsset).where(FileAsset.uri == uri))


def test_creates_permanent_record(session_factory):
    record = AssetResolver(session_factory).ensure_asset_record("public://images/a.jpg")

    assert record is not None
    assert record.uri == "public://images/a.jpg"
    assert record.status == FILE_STATUS_PERMANENT
    with session_factory() as session:
        assert session.get(FileAsset, record.fid).filename == "a.jpg"


def test_same_uri_returns_same_record(session_factory):
    resolver = AssetResolver(session_factory)

    first = resolver.ensure_asset_record("public://a.jpg")
    second = resolver.ensure_asset_record("public://a.jpg")

    assert first.fid == second.fid
    assert count_files(session_factory, "public://a.jpg") == 1


def test_existing_record_is_left_unchanged(session_factory):
    with session_factory() as session:
        session.add(FileAsset(uri="public://tmp.jpg", filename="tmp.jpg", status=FILE_STATUS_TEMPORARY))
        session.commit()

    record = AssetResolver(session_factory).ensure_asset_record("public://tmp.jpg")

    assert record.status == FILE_STATUS_TEMPORARY


def test_failure_yields_none(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'empty.db'}")  # no files table

    assert AssetResolver(make_session_factory(engine)).ensure_asset_record("public://a.jpg") is None
    engine.dispose()
