"""
Database engine construction and schema initialization.

Engines and session factories are built by the application factory and passed
to whoever needs them; nothing here opens a connection at import time.
"""

import logging
from typing import Callable, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger("diettrack.database")

# Create SQLAlchemy Base
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ships with foreign key enforcement off per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for ``database_url``.

    SQLite URLs get foreign key enforcement, and in-memory SQLite databases
    share one connection so every session sees the same data.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url.rstrip("/") in (
            "sqlite:",
            "sqlite+pysqlite:",
        ):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, echo=echo, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(database_url, echo=echo, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    """Create session factory"""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=True)


def init_database(engine: Engine) -> None:
    """Initialize database schema"""
    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
    logger.info("Database tables created successfully")


def session_scope(
    session_factory: Callable[[], Session],
) -> Generator[Session, None, None]:
    """Yield a session and ensure it is closed after use."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
