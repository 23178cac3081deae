"""
Connection to the legacy (read-only) database.
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from nodeimport.core.errors import LegacyConnectionError

logger = logging.getLogger(__name__)


def open_legacy_engine(url: str) -> Engine:
    """
    Create the legacy engine and prove it can connect.

    Raises:
        LegacyConnectionError: if the database is unreachable. There is no retry.
    """
    try:
        engine = create_engine(url, echo=False, future=True)
        with engine.connect():
            pass
    except (SQLAlchemyError, ImportError) as e:
        raise LegacyConnectionError(str(e)) from e
    logger.info(f"Connected to legacy database {engine.url.render_as_string(hide_password=True)}")
    return engine
