"""Shared fixtures: SQLite files standing in for the legacy and destination databases."""

import pytest
from sqlalchemy import create_engine

from nodeimport.database.models import Base
from nodeimport.database.session import make_session_factory


@pytest.fixture
def legacy_url(tmp_path):
    return f"sqlite:///{tmp_path / 'legacy.db'}"


@pytest.fixture
def destination_url(tmp_path):
    return f"sqlite:///{tmp_path / 'destination.db'}"


@pytest.fixture
def legacy_engine(legacy_url):
    engine = create_engine(legacy_url, future=True)
    yield engine
    engine.dispose()


@pytest.fixture
def destination_engine(destination_url):
    engine = create_engine(destination_url, future=True)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(destination_engine):
    return make_session_factory(destination_engine)
