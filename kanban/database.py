import os
from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from loguru import logger
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from kanban.config import Settings

# Default to a local SQLite database if no DATABASE_URL is provided
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(BASE_DIR, ".."))
DEFAULT_DB_PATH = os.path.join(PROJECT_ROOT, "kanban.db")

# Base class for the models
Base = declarative_base()


def normalize_database_url(url: str) -> str:
    """Accept Heroku style ``postgres://`` URLs."""
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


def build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine, preferring the configured DATABASE_URL."""
    if settings.DATABASE_URL:
        url = normalize_database_url(settings.DATABASE_URL)
    else:
        url = f"sqlite:///{DEFAULT_DB_PATH}"

    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    engine = create_engine(
        url,
        echo=settings.DATABASE_ECHO,
        pool_pre_ping=True,
        connect_args=connect_args,
    )
    if url.startswith("sqlite"):
        enable_sqlite_foreign_keys(engine)
    logger.info("Database engine ready: {}", engine.url.render_as_string(hide_password=True))
    return engine


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, _record) -> None:  # pragma: no cover - SQLAlchemy callback
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Run a unit of work: commit on success, roll back and re-raise on failure.

    Order shifts issued inside the block become visible to other sessions only
    once the whole block commits, so a reader never observes a half-renumbered
    scope.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


# FastAPI dependency; the session factory is attached by ``create_app``
def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
