"""Schemas for projects"""
import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ProjectStatus(str, enum.Enum):
    NOT_STARTED = "not started"
    IN_PROGRESS = "in progress"
    COMPLETED = "completed"
    PUBLISHED = "published"
    CANCELED = "canceled"


ALLOWED_STATUSES = tuple(status.value for status in ProjectStatus)


def normalize_status(value) -> str:
    """Return ``value`` as one of the allowed lowercase statuses.

    Matching is case-insensitive, so ``"In Progress"`` becomes ``"in progress"``.
    Raises ``ValueError`` for anything outside the allowed set.
    """
    if isinstance(value, ProjectStatus):
        return value.value
    if not isinstance(value, str) or value.strip().lower() not in ALLOWED_STATUSES:
        raise ValueError(f"Invalid status. Allowed values: {list(ALLOWED_STATUSES)}. Provided: {value!r}")
    return value.strip().lower()


class ProjectBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    progress: int = Field(default=0, ge=0, le=100)
    status: str = ProjectStatus.NOT_STARTED.value

    @field_validator("status", mode="before")
    @classmethod
    def _validate_status(cls, value):
        return normalize_status(value)


class ProjectCreate(ProjectBase):
    created_by: int


class ProjectUpdate(ProjectBase):
    id: int


class ProjectOut(ProjectBase):
    id: int
    created_by: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        validate_assignment = True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProjectOut):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
