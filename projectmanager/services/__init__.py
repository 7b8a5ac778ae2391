"""Application services: the operations the UI screens invoke"""
from projectmanager.services.base import OutcomeKind, ServiceResult
from projectmanager.services.auth import AuthService
from projectmanager.services.projects import ALL_STATUSES, ProjectService

__all__ = [
    "OutcomeKind",
    "ServiceResult",
    "AuthService",
    "ALL_STATUSES",
    "ProjectService",
]
