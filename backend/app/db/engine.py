"""Database engine, session factory and transaction helper."""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from backend.app.config import Settings, get_settings
from backend.app.errors import EngineError, InternalError

logger = logging.getLogger(__name__)


def create_engine_from_settings(settings: Settings) -> Engine:
    """Create SQLAlchemy engine from settings.

    Raises:
        ValueError: If DATABASE_URL is unset or empty.
    """
    database_url = settings.database_url

    if not database_url:
        raise ValueError(
            "DATABASE_URL must be set to a valid connection string. "
            "Please configure the database_url setting."
        )

    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        # FastAPI runs sync dependencies in a threadpool
        connect_args["check_same_thread"] = False

    return create_engine(
        database_url,
        pool_pre_ping=True,
        echo=settings.database_echo,
        connect_args=connect_args,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create sessionmaker for creating database sessions.

    Args:
        engine: SQLAlchemy engine

    Returns:
        Sessionmaker bound to the engine
    """
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


_session_factory: sessionmaker[Session] | None = None


def get_session_factory() -> sessionmaker[Session]:
    """Get global session factory instance."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(create_engine_from_settings(get_settings()))
    return _session_factory


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency for a request-scoped database session.

    Yields:
        Session instance
    """
    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()


@contextmanager
def atomic(session: Session, operation: str) -> Iterator[Session]:
    """Run a multi-row operation as one transaction.

    Commits on success. On failure everything is rolled back; engine errors
    propagate unchanged and any other exception is surfaced as
    ``InternalError`` so callers never see a partially written graph.

    Args:
        session: Database session
        operation: Operation name used in logs and the error payload
    """
    try:
        yield session
        session.commit()
    except EngineError:
        session.rollback()
        raise
    except Exception as e:
        session.rollback()
        logger.exception(
            f"Operation {operation} aborted",
            extra={"structured": {"operation": operation, "error": type(e).__name__}},
        )
        raise InternalError(operation, type(e).__name__) from e
