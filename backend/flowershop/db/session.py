from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool
import logging
import os

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./flower_shop.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")

_engine = None


def _create_engine(url: str):
    kwargs = {"echo": SQL_ECHO}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # in-memory databases vanish with their connection, so share one
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def get_engine():
    global _engine
    if _engine is None:
        _engine = _create_engine(DATABASE_URL)
        logger.debug("Created engine for %s", DATABASE_URL)
    return _engine


def reset_engine(url: str = None):
    """Drop the cached engine and build a new one (used by tests)."""
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = _create_engine(url or DATABASE_URL)
    return _engine


def init_db() -> None:
    # table models register on import
    from flowershop.models import catalog, storage  # noqa: F401

    SQLModel.metadata.create_all(get_engine())


def get_session() -> Session:
    return Session(get_engine())
