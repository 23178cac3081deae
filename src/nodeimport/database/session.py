# nodeimport/src/nodeimport/database/session.py

import contextlib
import functools
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from nodeimport.database.engine import get_engine


def make_session_factory(engine: Engine) -> sessionmaker:
    """
    Build a session factory bound to engine.

    Objects stay readable after commit so that saved nodes and files can be reported
    once their session is closed.
    """
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)


@contextlib.contextmanager
def get_session(engine: Optional[Engine] = None):
    """
    Use as:
        with get_session() as session:
            ...
    """
    db = make_session_factory(engine or get_engine())()
    try:
        yield db
    finally:
        db.close()


def db_session(func):
    """
    Decorator to provide a session to the wrapped function.
    The session is automatically closed after the function returns.

    Use as:
        @db_session
        def my_function(session, *args, **kwargs):
            ...
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with get_session() as session:
            return func(session, *args, **kwargs)
    return wrapper
