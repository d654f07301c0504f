"""Database engine construction and session management."""

import logging
from collections.abc import Generator
from typing import Any

from fastapi import Request
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from src.config import Settings

logger = logging.getLogger(__name__)

Base: Any = declarative_base()


def create_db_engine(settings: Settings) -> Engine:
    """Create an engine with a bounded connection pool.

    The pool never overflows past ``db_pool_size``; extra checkouts wait for a
    connection to be returned instead of failing.
    """
    url = settings.sqlalchemy_url
    if str(url).startswith("sqlite"):
        # SQLite has no server-side pool to bound; sessions cross threadpool threads
        return create_engine(url, connect_args={"check_same_thread": False})

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        max_overflow=0,
        # None blocks until a connection is returned to the pool
        pool_timeout=settings.db_pool_timeout,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory bound to an engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that provides a database session from the app's pool."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine) -> None:
    """Initialize the database by creating all tables."""
    # Import all models here so they are registered with Base.metadata
    from src import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def check_connection(engine: Engine) -> bool:
    """Try one round trip to the database; failures are logged, not raised."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Database connection failed: {e}")
        return False
    logger.info("Database connected successfully")
    return True
