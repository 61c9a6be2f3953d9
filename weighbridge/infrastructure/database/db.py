import logging

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from weighbridge.core.config import settings

# Register the tables on SQLModel.metadata
from . import models  # noqa: F401

logger = logging.getLogger(__name__)


def build_engine(database_url: str | None = None, echo: bool | None = None) -> Engine:
    """Create an engine; in-memory SQLite shares one connection across threads."""
    url = database_url or settings.DATABASE_URL
    kwargs: dict = {"echo": settings.SQL_ECHO if echo is None else echo}

    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool

    return create_engine(url, **kwargs)


engine = build_engine()


def init_db(target: Engine = engine) -> None:
    """Create all tables that do not exist yet."""
    SQLModel.metadata.create_all(target)
    logger.info("Database schema ready on %s", target.url.render_as_string(hide_password=True))


def get_session(target: Engine = engine) -> Session:
    return Session(target)
