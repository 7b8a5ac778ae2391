"""Shared plumbing for the repositories: write outcomes and failure translation."""
import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from projectmanager.exceptions import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FailureKind(str, enum.Enum):
    CONFLICT = "conflict"
    STORAGE = "storage"


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a repository write.

    ``failure`` is ``None`` on success. ``id`` carries the generated key of an
    insert and ``affected`` the number of rows touched by an update or delete.
    """

    id: Optional[int] = None
    affected: int = 0
    failure: Optional[FailureKind] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def is_conflict(self) -> bool:
        return self.failure is FailureKind.CONFLICT

    @property
    def is_storage_failure(self) -> bool:
        return self.failure is FailureKind.STORAGE


class BaseRepository:
    """Repository bound to one SQLAlchemy session.

    With ``autocommit`` each write commits on its own. Without it writes are only
    flushed, and the caller commits (or rolls back) the surrounding transaction.
    """

    def __init__(self, db: Session, autocommit: bool = True):
        self.db = db
        self.autocommit = autocommit

    def _write(self, operation: str, action: Callable[[], WriteResult]) -> WriteResult:
        try:
            result = action()
            if self.autocommit:
                self.db.commit()
            else:
                self.db.flush()
        except IntegrityError as exc:
            self.db.rollback()
            logger.info("%s rejected by a store constraint: %s", operation, exc.orig)
            return WriteResult(failure=FailureKind.CONFLICT, detail=str(exc.orig))
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("%s failed", operation)
            return WriteResult(failure=FailureKind.STORAGE, detail=str(exc))
        return result

    def _read(self, operation: str, query: Callable[[], T]) -> T:
        try:
            return query()
        except SQLAlchemyError as exc:
            logger.exception("%s failed", operation)
            raise StorageError(operation, exc) from exc
