"""Who is logged in, and which project the UI is currently showing.

A running UI process owns one ``UserSession`` and one ``SelectedProject``. Neither is
synchronised; they assume the single interaction thread of a desktop front-end.
Services never read them directly: the UI passes ``UserSession.context()`` into each
call.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from projectmanager.schemas import ProjectOut, UserOut

logger = logging.getLogger(__name__)

NO_USER_ID = -1


@dataclass(frozen=True)
class AuthContext:
    """Identity of the caller for a single service call."""

    user_id: Optional[int] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @classmethod
    def anonymous(cls) -> "AuthContext":
        return cls()


class UserSession:
    def __init__(self):
        self._user: Optional[UserOut] = None

    def start(self, user: UserOut) -> None:
        if user is None:
            raise ValueError("A session can only be started for a user; use end() to log out")
        self._user = user
        logger.info("Session started for user: %s", user.username)

    def current(self) -> Optional[UserOut]:
        return self._user

    def is_authenticated(self) -> bool:
        return self._user is not None

    def current_user_id(self) -> int:
        return self._user.id if self._user is not None else NO_USER_ID

    def current_username(self) -> Optional[str]:
        return self._user.username if self._user is not None else None

    def current_email(self) -> Optional[str]:
        return self._user.email if self._user is not None else None

    def is_current_user(self, user_id: int) -> bool:
        return self._user is not None and self._user.id == user_id

    def refresh(self, updated_user: UserOut) -> None:
        """Replace the stored user, but only with a newer copy of the same account."""
        if self._user is not None and updated_user is not None and self._user.id == updated_user.id:
            self._user = updated_user
            logger.info("Session updated for user: %s", updated_user.username)

    def end(self) -> None:
        if self._user is not None:
            logger.info("Session ended for user: %s", self._user.username)
        self._user = None

    def context(self) -> AuthContext:
        return AuthContext(user_id=self._user.id if self._user is not None else None)


class SelectedProject:
    def __init__(self):
        self._project: Optional[ProjectOut] = None

    def set(self, project: Optional[ProjectOut]) -> None:
        self._project = project

    def get(self) -> Optional[ProjectOut]:
        return self._project

    def clear(self) -> None:
        self._project = None

    def matches(self, project_id: int) -> bool:
        return self._project is not None and self._project.id == project_id
