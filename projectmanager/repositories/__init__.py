"""Repositories over the users, projects and project_members tables"""
from projectmanager.repositories.base import BaseRepository, FailureKind, WriteResult
from projectmanager.repositories.users import UserRepository
from projectmanager.repositories.projects import ProjectRepository, clamp_progress
from projectmanager.repositories.memberships import MembershipRepository

__all__ = [
    "BaseRepository",
    "FailureKind",
    "WriteResult",
    "UserRepository",
    "ProjectRepository",
    "clamp_progress",
    "MembershipRepository",
]
