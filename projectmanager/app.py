"""Entry point the desktop front-end builds once at startup."""
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from projectmanager.database import SessionLocal, engine, init_db, session_scope
from projectmanager.logging_config import configure_logging
from projectmanager.services import AuthService, ProjectService
from projectmanager.session import AuthContext, SelectedProject, UserSession

logger = logging.getLogger(__name__)


class Application:
    """Holds the per-process UI state and hands out services bound to a fresh store session."""

    def __init__(self, bind: Optional[Engine] = None, session_factory: Optional[sessionmaker] = None):
        configure_logging()
        self.engine = bind or engine
        self.session_factory = session_factory or (
            sessionmaker(autocommit=False, autoflush=False, bind=bind) if bind is not None else SessionLocal
        )
        init_db(self.engine)
        self.user_session = UserSession()
        self.selected = SelectedProject()

    def context(self) -> AuthContext:
        return self.user_session.context()

    @contextmanager
    def auth(self) -> Iterator[AuthService]:
        with session_scope(self.session_factory) as db:
            yield AuthService(db, self.user_session, self.selected)

    @contextmanager
    def projects(self) -> Iterator[ProjectService]:
        with session_scope(self.session_factory) as db:
            yield ProjectService(db, self.selected)

    def shutdown(self) -> None:
        self.user_session.end()
        self.selected.clear()
        self.engine.dispose()
        logger.info("Database connection closed.")
