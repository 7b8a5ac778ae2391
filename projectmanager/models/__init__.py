"""Project Manager Database Models"""
from projectmanager.models.user import User
from projectmanager.models.project import PROJECT_STATUSES, Project
from projectmanager.models.project_member import ProjectMember

__all__ = [
    "User",
    "Project",
    "ProjectMember",
    "PROJECT_STATUSES",
]
