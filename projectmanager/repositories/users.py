"""User repository"""
import logging
from typing import List, Optional

from projectmanager.models import User
from projectmanager.repositories.base import BaseRepository, WriteResult
from projectmanager.schemas import UserCreate, UserOut

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository):
    def insert(self, user: UserCreate) -> WriteResult:
        """Insert a user; a taken username or email comes back as a conflict."""

        def action() -> WriteResult:
            row = User(username=user.username, email=user.email, password_hash=user.password_hash)
            self.db.add(row)
            self.db.flush()
            logger.info("User inserted with ID: %s", row.id)
            return WriteResult(id=row.id, affected=1)

        return self._write("insert user", action)

    def find_by_id(self, user_id: int) -> Optional[UserOut]:
        row = self._read("find user by id", lambda: self.db.query(User).filter(User.id == user_id).first())
        return UserOut.model_validate(row) if row else None

    def find_by_username(self, username: str) -> Optional[UserOut]:
        row = self._read(
            "find user by username",
            lambda: self.db.query(User).filter(User.username == username).first(),
        )
        return UserOut.model_validate(row) if row else None

    def find_by_email(self, email: str) -> Optional[UserOut]:
        row = self._read("find user by email", lambda: self.db.query(User).filter(User.email == email).first())
        return UserOut.model_validate(row) if row else None

    def find_all(self) -> List[UserOut]:
        rows = self._read(
            "list users",
            lambda: self.db.query(User).order_by(User.created_at.desc(), User.id.desc()).all(),
        )
        return [UserOut.model_validate(row) for row in rows]

    def exists_by_username(self, username: str) -> bool:
        return self.find_by_username(username) is not None

    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def update(self, user: UserOut) -> WriteResult:
        def action() -> WriteResult:
            affected = (
                self.db.query(User)
                .filter(User.id == user.id)
                .update(
                    {
                        User.username: user.username,
                        User.email: user.email,
                        User.password_hash: user.password_hash,
                    }
                )
            )
            return WriteResult(id=user.id, affected=affected)

        return self._write("update user", action)

    def delete(self, user_id: int) -> bool:
        def action() -> WriteResult:
            affected = self.db.query(User).filter(User.id == user_id).delete()
            return WriteResult(id=user_id, affected=affected)

        result = self._write("delete user", action)
        return result.ok and result.affected > 0
