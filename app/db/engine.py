"""Database engine and the per-request session dependency."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine, event
from sqlmodel import Session, create_engine

from app.core.settings import get_settings


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on."""

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection: Any, _record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        # Required for SQLite when used with FastAPI across threads.
        sqlite_engine = create_engine(
            database_url, connect_args={"check_same_thread": False}
        )
        enable_sqlite_foreign_keys(sqlite_engine)
        return sqlite_engine
    return create_engine(database_url, pool_pre_ping=True)


engine = build_engine(get_settings().database_url)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session
