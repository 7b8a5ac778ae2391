"""Project membership repository"""
import logging
from typing import List, Optional

from sqlalchemy import func

from projectmanager.models import ProjectMember, User
from projectmanager.repositories.base import BaseRepository, WriteResult
from projectmanager.schemas import MemberDetail, ProjectMemberCreate, ProjectMemberOut, validate_role

logger = logging.getLogger(__name__)


class MembershipRepository(BaseRepository):
    def _membership(self, project_id: int, user_id: int):
        return self.db.query(ProjectMember).filter(
            ProjectMember.project_id == project_id,
            ProjectMember.user_id == user_id,
        )

    def add(self, member: ProjectMemberCreate) -> WriteResult:
        """Add a membership; a second row for the same (project, user) pair is a conflict."""

        def action() -> WriteResult:
            row = ProjectMember(project_id=member.project_id, user_id=member.user_id, role=member.role)
            self.db.add(row)
            self.db.flush()
            logger.info(
                "User %s added to project %s as %s", member.user_id, member.project_id, member.role
            )
            return WriteResult(id=row.id, affected=1)

        return self._write("add project member", action)

    def find_by_project(self, project_id: int) -> List[ProjectMemberOut]:
        rows = self._read(
            "list members of project",
            lambda: self.db.query(ProjectMember)
            .filter(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.joined_at.asc(), ProjectMember.id.asc())
            .all(),
        )
        return [ProjectMemberOut.model_validate(row) for row in rows]

    def find_by_user(self, user_id: int) -> List[ProjectMemberOut]:
        rows = self._read(
            "list memberships of user",
            lambda: self.db.query(ProjectMember)
            .filter(ProjectMember.user_id == user_id)
            .order_by(ProjectMember.joined_at.desc(), ProjectMember.id.desc())
            .all(),
        )
        return [ProjectMemberOut.model_validate(row) for row in rows]

    def find_details_by_project(self, project_id: int) -> List[MemberDetail]:
        """Members of a project with their usernames, in join order."""
        rows = self._read(
            "list member details of project",
            lambda: self.db.query(ProjectMember, User.username, User.email)
            .join(User, User.id == ProjectMember.user_id)
            .filter(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.joined_at.asc(), ProjectMember.id.asc())
            .all(),
        )
        return [
            MemberDetail(member=ProjectMemberOut.model_validate(member), username=username, email=email)
            for member, username, email in rows
        ]

    def role_of(self, project_id: int, user_id: int) -> Optional[str]:
        row = self._read("look up member role", lambda: self._membership(project_id, user_id).first())
        return row.role if row else None

    def is_member(self, project_id: int, user_id: int) -> bool:
        return self.role_of(project_id, user_id) is not None

    def update_role(self, project_id: int, user_id: int, role: str) -> WriteResult:
        """Change a member's role. Raises ``ValueError`` for an unknown role."""
        new_role = validate_role(role)

        def action() -> WriteResult:
            affected = self._membership(project_id, user_id).update({ProjectMember.role: new_role})
            return WriteResult(affected=affected)

        return self._write("update member role", action)

    def remove(self, project_id: int, user_id: int) -> bool:
        def action() -> WriteResult:
            affected = self._membership(project_id, user_id).delete()
            return WriteResult(affected=affected)

        result = self._write("remove project member", action)
        return result.ok and result.affected > 0

    def remove_all_for_project(self, project_id: int) -> int:
        def action() -> WriteResult:
            affected = self.db.query(ProjectMember).filter(ProjectMember.project_id == project_id).delete()
            return WriteResult(affected=affected)

        result = self._write("remove all project members", action)
        return result.affected if result.ok else 0

    def count_for_project(self, project_id: int) -> int:
        return self._read(
            "count project members",
            lambda: self.db.query(func.count(ProjectMember.id))
            .filter(ProjectMember.project_id == project_id)
            .scalar(),
        ) or 0
