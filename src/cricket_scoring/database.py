"""Database connection and session management."""

import logging
from contextlib import contextmanager
from typing import Any, Generator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings

logger = logging.getLogger(__name__)

# Global engine instance
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def configure_database(url: Optional[str] = None, **engine_kwargs: Any) -> Engine:
    """(Re)create the global engine and session factory for ``url``."""
    global _engine, _SessionLocal

    url = url or settings.database.url
    if url.startswith("sqlite"):
        engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        # In-memory databases live inside one connection; share it across threads
        if url in ("sqlite://", "sqlite:///:memory:"):
            engine_kwargs.setdefault("poolclass", StaticPool)
    else:
        engine_kwargs.setdefault("pool_recycle", 3600)

    if _engine is not None:
        _engine.dispose()

    _engine = create_engine(
        url,
        pool_pre_ping=True,
        echo=settings.database.echo,
        **engine_kwargs,
    )
    _SessionLocal = sessionmaker(autoflush=False, bind=_engine)
    logger.debug("Database configured for %s", _engine.url.render_as_string(hide_password=True))
    return _engine


def get_database_engine() -> Engine:
    """Get or create the database engine."""
    if _engine is None:
        configure_database()
    return _engine


def get_session_local() -> sessionmaker:
    """Get or create the session factory."""
    if _SessionLocal is None:
        configure_database()
    return _SessionLocal


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Get a database session with automatic commit, rollback and cleanup."""
    session_local = get_session_local()
    session = session_local()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_tables() -> None:
    """Create all database tables."""
    from .models import Base
    Base.metadata.create_all(bind=get_database_engine())


def drop_tables() -> None:
    """Drop all database tables."""
    from .models import Base
    Base.metadata.drop_all(bind=get_database_engine())
