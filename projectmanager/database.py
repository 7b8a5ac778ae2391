import logging
import os
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from projectmanager.config import settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:  # pragma: no cover - SQLAlchemy callback
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _ensure_sqlite_directory(bind: Engine) -> None:
    """File-backed SQLite needs its directory before the first connect."""
    url = bind.url
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        os.makedirs(os.path.dirname(os.path.abspath(url.database)), exist_ok=True)


def build_engine(database_url: Optional[str] = None, **kwargs) -> Engine:
    """Create the SQLAlchemy engine, preferring the configured DATABASE_URL."""
    url = make_url(database_url or settings.database_url)

    if url.get_backend_name() == "sqlite":
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        engine = create_engine(url, connect_args=connect_args, echo=settings.DATABASE_ECHO, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = create_engine(url, pool_pre_ping=True, echo=settings.DATABASE_ECHO, **kwargs)

    logger.debug("Database engine created for %s", url.render_as_string(hide_password=True))
    return engine


engine = build_engine()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for the ORM models
Base = declarative_base()


def init_db(bind: Optional[Engine] = None) -> None:
    """Create the users, projects and project_members tables if they are missing."""
    import projectmanager.models  # noqa: F401

    bind = bind or engine
    _ensure_sqlite_directory(bind)
    Base.metadata.create_all(bind=bind)
    logger.info("Database initialized successfully.")


@contextmanager
def session_scope(factory: sessionmaker = SessionLocal) -> Iterator[Session]:
    """Acquire a session, hand it to the caller and always release it."""
    db = factory()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

