"""Outcome type shared by the application services."""
import enum
import functools
import logging
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from projectmanager.exceptions import StorageError
from projectmanager.repositories import WriteResult
from projectmanager.session import AuthContext

logger = logging.getLogger(__name__)

T = TypeVar("T")

LOGIN_REQUIRED = "Please log in to continue"


class OutcomeKind(str, enum.Enum):
    SUCCESS = "success"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    UNAUTHENTICATED = "unauthenticated"
    STORAGE = "storage"


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Pass/fail outcome of a service call with a message the UI can show as-is."""

    ok: bool
    message: str
    kind: OutcomeKind = OutcomeKind.SUCCESS
    value: Optional[T] = None

    @classmethod
    def success(cls, message: str, value: Optional[T] = None) -> "ServiceResult[T]":
        return cls(ok=True, message=message, kind=OutcomeKind.SUCCESS, value=value)

    @classmethod
    def failure(cls, kind: OutcomeKind, message: str) -> "ServiceResult[T]":
        return cls(ok=False, message=message, kind=kind)

    @classmethod
    def from_write(cls, result: WriteResult, failure_message: str, conflict_message: Optional[str] = None):
        """Failure outcome for a write that did not succeed."""
        if result.is_conflict:
            return cls.failure(OutcomeKind.CONFLICT, conflict_message or failure_message)
        return cls.failure(OutcomeKind.STORAGE, failure_message)

    def __bool__(self) -> bool:
        return self.ok


def storage_guard(failure_message: str):
    """Turn a ``StorageError`` escaping a service call into a generic failure outcome."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except StorageError as exc:
                logger.error("%s: %s", func.__name__, exc)
                return ServiceResult.failure(OutcomeKind.STORAGE, failure_message)

        return wrapper

    return decorator


def require_login(ctx: Optional[AuthContext]) -> Optional[ServiceResult]:
    if ctx is None or not ctx.is_authenticated:
        return ServiceResult.failure(OutcomeKind.UNAUTHENTICATED, LOGIN_REQUIRED)
    return None
