"""Schemas for project members"""
import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class MemberRole(str, enum.Enum):
    OWNER = "Owner"
    ADMIN = "Admin"
    MEMBER = "Member"


ALLOWED_ROLES = tuple(role.value for role in MemberRole)


def validate_role(value) -> str:
    """Roles are case-sensitive: only ``Owner``, ``Admin`` and ``Member`` are accepted."""
    if isinstance(value, MemberRole):
        return value.value
    if value not in ALLOWED_ROLES:
        raise ValueError(f"Invalid role. Allowed values: {list(ALLOWED_ROLES)}. Provided: {value!r}")
    return value


class ProjectMemberCreate(BaseModel):
    project_id: int
    user_id: int
    role: str

    @field_validator("role", mode="before")
    @classmethod
    def _validate_role(cls, value):
        return validate_role(value)


class ProjectMemberOut(ProjectMemberCreate):
    id: int
    joined_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @property
    def is_owner(self) -> bool:
        return self.role == MemberRole.OWNER.value

    @property
    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN.value

    @property
    def has_admin_privileges(self) -> bool:
        return self.is_owner or self.is_admin

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProjectMemberOut):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class MemberDetail(BaseModel):
    """A membership row joined with the member's account details."""

    member: ProjectMemberOut
    username: str
    email: str
