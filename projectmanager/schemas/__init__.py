"""
Pydantic schemas used to validate entities read from and written to the store
"""
from projectmanager.schemas.user import UserCreate, UserOut, UserSummary
from projectmanager.schemas.project import (
    ALLOWED_STATUSES,
    ProjectCreate,
    ProjectOut,
    ProjectStatus,
    ProjectUpdate,
    normalize_status,
)
from projectmanager.schemas.project_member import (
    ALLOWED_ROLES,
    MemberDetail,
    MemberRole,
    ProjectMemberCreate,
    ProjectMemberOut,
    validate_role,
)
from projectmanager.schemas.dashboard import DashboardSummary, ProjectDetails

__all__ = [
    "UserCreate",
    "UserOut",
    "UserSummary",
    "ALLOWED_STATUSES",
    "ProjectCreate",
    "ProjectOut",
    "ProjectStatus",
    "ProjectUpdate",
    "normalize_status",
    "ALLOWED_ROLES",
    "MemberDetail",
    "MemberRole",
    "ProjectMemberCreate",
    "ProjectMemberOut",
    "validate_role",
    "DashboardSummary",
    "ProjectDetails",
]
