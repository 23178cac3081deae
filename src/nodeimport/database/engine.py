# File: nodeimport/database/engine.py

import functools
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from nodeimport.core.config import settings


@functools.lru_cache(maxsize=None)
def create_destination_engine(url: str) -> Engine:
    """Create (once per URL) the SQLAlchemy engine for the destination content store."""
    return create_engine(url, echo=False, future=True)


def get_engine(url: Optional[str] = None) -> Engine:
    """Return the destination engine, built from settings when no URL is given."""
    return create_destination_engine(url or settings.build_database_url())
