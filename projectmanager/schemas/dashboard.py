"""Schemas for the dashboard and project details screens"""
from typing import List, Optional

from pydantic import BaseModel, Field

from projectmanager.schemas.project import ProjectOut
from projectmanager.schemas.project_member import MemberDetail
from projectmanager.schemas.user import UserSummary


class DashboardSummary(BaseModel):
    member_of_count: int
    created_count: int
    available_count: int
    my_projects: List[ProjectOut] = Field(default_factory=list)


class ProjectDetails(BaseModel):
    project: ProjectOut
    creator: Optional[UserSummary] = None
    viewer_role: Optional[str] = None
    member_count: int = 0
    members: List[MemberDetail] = Field(default_factory=list)
