"""Project operations driven by the dashboard, browse, create and details screens"""
import logging
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from projectmanager.config import settings
from projectmanager.repositories import MembershipRepository, ProjectRepository, UserRepository
from projectmanager.schemas import (
    DashboardSummary,
    MemberRole,
    ProjectCreate,
    ProjectDetails,
    ProjectMemberCreate,
    ProjectOut,
    UserSummary,
    normalize_status,
    validate_role,
)
from projectmanager.services.base import OutcomeKind, ServiceResult, require_login, storage_guard
from projectmanager.session import AuthContext, SelectedProject

logger = logging.getLogger(__name__)

ALL_STATUSES = "All"
EDITOR_ROLES = (MemberRole.OWNER.value, MemberRole.ADMIN.value)
PROJECT_NOT_FOUND = "Project not found"


class ProjectService:
    def __init__(self, db: Session, selected: Optional[SelectedProject] = None):
        self.db = db
        self.selected = selected
        self.users = UserRepository(db)
        self.projects = ProjectRepository(db)
        self.members = MembershipRepository(db)

    def _require_role(self, ctx: AuthContext, project_id: int, roles, message: str) -> Optional[ServiceResult]:
        role = self.members.role_of(project_id, ctx.user_id)
        if role not in roles:
            logger.warning("User %s (role %s) denied on project %s", ctx.user_id, role, project_id)
            return ServiceResult.failure(OutcomeKind.FORBIDDEN, message)
        return None

    def _track(self, project: ProjectOut) -> None:
        if self.selected is not None and self.selected.matches(project.id):
            self.selected.set(project)

    @storage_guard("Failed to create project. Please try again.")
    def create_project(
        self,
        ctx: AuthContext,
        name: str,
        description: Optional[str] = None,
        status: Optional[str] = "not started",
        progress: int = 0,
    ) -> ServiceResult[ProjectOut]:
        """Create a project and make the caller its Owner.

        The project row and the Owner membership are written in one transaction, so a
        failure on either leaves nothing behind.
        """
        denied = require_login(ctx)
        if denied:
            return denied

        name = (name or "").strip()
        if not name:
            return ServiceResult.failure(OutcomeKind.VALIDATION, "Project name is required")
        if len(name) < settings.PROJECT_NAME_MIN_LENGTH:
            return ServiceResult.failure(
                OutcomeKind.VALIDATION,
                f"Project name must be at least {settings.PROJECT_NAME_MIN_LENGTH} characters",
            )
        if not status or not str(status).strip():
            return ServiceResult.failure(OutcomeKind.VALIDATION, "Please select a status")

        try:
            project = ProjectCreate(
                name=name,
                description=(description or "").strip() or None,
                progress=progress,
                status=status,
                created_by=ctx.user_id,
            )
        except ValidationError as exc:
            logger.debug("Rejected project input: %s", exc)
            return ServiceResult.failure(
                OutcomeKind.VALIDATION, "Please select a valid status and a progress between 0 and 100"
            )

        projects = ProjectRepository(self.db, autocommit=False)
        members = MembershipRepository(self.db, autocommit=False)

        inserted = projects.insert(project)
        if not inserted.ok:
            return ServiceResult.from_write(inserted, "Failed to create project. Please try again.")

        owner = members.add(
            ProjectMemberCreate(project_id=inserted.id, user_id=ctx.user_id, role=MemberRole.OWNER)
        )
        if not owner.ok:
            return ServiceResult.from_write(owner, "Failed to create project. Please try again.")

        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Commit of new project %r failed", name)
            return ServiceResult.failure(OutcomeKind.STORAGE, "Failed to create project. Please try again.")

        created = self.projects.find_by_id(inserted.id)
        return ServiceResult.success(f"Project '{name}' created successfully!", created)

    @storage_guard("Failed to load projects. Please try again.")
    def browse(self, search_term: Optional[str] = "", status_filter: Optional[str] = ALL_STATUSES) -> ServiceResult[List[ProjectOut]]:
        """Search by name when a term is given, otherwise list everything; then narrow by status."""
        term = (search_term or "").strip()
        projects = self.projects.search_by_name(term) if term else self.projects.find_all()

        if status_filter and status_filter != ALL_STATUSES:
            wanted = status_filter.strip().lower()
            projects = [project for project in projects if project.status == wanted]

        return ServiceResult.success(f"{len(projects)} projects found", projects)

    @storage_guard("Failed to join project. Please try again.")
    def join_project(self, ctx: AuthContext, project_id: int) -> ServiceResult[ProjectOut]:
        denied = require_login(ctx)
        if denied:
            return denied

        project = self.projects.find_by_id(project_id)
        if project is None:
            return ServiceResult.failure(OutcomeKind.NOT_FOUND, PROJECT_NOT_FOUND)

        already_joined = "You are already a member of this project!"
        # Checked again here in case the join button was pressed twice
        if self.members.is_member(project_id, ctx.user_id):
            return ServiceResult.failure(OutcomeKind.CONFLICT, already_joined)

        result = self.members.add(
            ProjectMemberCreate(project_id=project_id, user_id=ctx.user_id, role=MemberRole.MEMBER)
        )
        if not result.ok:
            return ServiceResult.from_write(
                result, "Failed to join project. Please try again.", conflict_message=already_joined
            )
        return ServiceResult.success(f"You have successfully joined: {project.name}", project)

    @storage_guard("Failed to update progress.")
    def update_progress(self, ctx: AuthContext, project_id: int, value: int) -> ServiceResult[ProjectOut]:
        denied = require_login(ctx)
        if denied:
            return denied

        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 100:
            return ServiceResult.failure(OutcomeKind.VALIDATION, "Progress must be between 0 and 100")
        if self.projects.find_by_id(project_id) is None:
            return ServiceResult.failure(OutcomeKind.NOT_FOUND, PROJECT_NOT_FOUND)

        denied = self._require_role(
            ctx, project_id, EDITOR_ROLES, "Only the project owner or an admin can update progress"
        )
        if denied:
            return denied

        result = self.projects.update_progress(project_id, value)
        if not result.ok or result.affected == 0:
            return ServiceResult.from_write(result, "Failed to update progress.")

        project = self.projects.find_by_id(project_id)
        self._track(project)
        return ServiceResult.success(f"Progress updated to {value}%", project)

    @storage_guard("Failed to update status.")
    def update_status(self, ctx: AuthContext, project_id: int, status: str) -> ServiceResult[ProjectOut]:
        denied = require_login(ctx)
        if denied:
            return denied

        try:
            new_status = normalize_status(status)
        except ValueError:
            return ServiceResult.failure(OutcomeKind.VALIDATION, "Please select a valid status")
        if self.projects.find_by_id(project_id) is None:
            return ServiceResult.failure(OutcomeKind.NOT_FOUND, PROJECT_NOT_FOUND)

        denied = self._require_role(
            ctx, project_id, EDITOR_ROLES, "Only the project owner or an admin can update the status"
        )
        if denied:
            return denied

        result = self.projects.update_status(project_id, new_status)
        if not result.ok or result.affected == 0:
            return ServiceResult.from_write(result, "Failed to update status.")

        project = self.projects.find_by_id(project_id)
        self._track(project)
        return ServiceResult.success(f"Status updated to '{new_status}'", project)

    @storage_guard("Failed to leave project.")
    def leave_project(self, ctx: AuthContext, project_id: int) -> ServiceResult[None]:
        """Remove the caller's own membership. The Owner has to delete the project instead."""
        denied = require_login(ctx)
        if denied:
            return denied

        role = self.members.role_of(project_id, ctx.user_id)
        if role is None:
            return ServiceResult.failure(OutcomeKind.NOT_FOUND, "You are not a member of this project")
        if role == MemberRole.OWNER.value:
            return ServiceResult.failure(OutcomeKind.FORBIDDEN, "The project owner cannot leave the project")

        if not self.members.remove(project_id, ctx.user_id):
            return ServiceResult.failure(OutcomeKind.STORAGE, "Failed to leave project.")

        if self.selected is not None:
            self.selected.clear()
        return ServiceResult.success("You have left the project.")

    @storage_guard("Failed to remove member.")
    def remove_member(self, ctx: AuthContext, project_id: int, user_id: int) -> ServiceResult[None]:
        denied = require_login(ctx)
        if denied:
            return denied
        if user_id == ctx.user_id:
            return self.leave_project(ctx, project_id)

        caller_role = self.members.role_of(project_id, ctx.user_id)
        target_role = self.members.role_of(project_id, user_id)
        if caller_role not in EDITOR_ROLES:
            return ServiceResult.failure(
                OutcomeKind.FORBIDDEN, "Only the project owner or an admin can remove members"
            )
        if target_role is None:
            return ServiceResult.failure(OutcomeKind.NOT_FOUND, "User is not a member of this project")
        if target_role == MemberRole.OWNER.value or (
            target_role == MemberRole.ADMIN.value and caller_role != MemberRole.OWNER.value
        ):
            return ServiceResult.failure(OutcomeKind.FORBIDDEN, f"You cannot remove the project {target_role.lower()}")

        if not self.members.remove(project_id, user_id):
            return ServiceResult.failure(OutcomeKind.STORAGE, "Failed to remove member.")
        return ServiceResult.success("Member removed from the project.")

    @storage_guard("Failed to change role.")
    def change_role(self, ctx: AuthContext, project_id: int, user_id: int, role: str) -> ServiceResult[None]:
        """Promote or demote a member between Admin and Member. Only the Owner may do this."""
        denied = require_login(ctx)
        if denied:
            return denied

        try:
            new_role = validate_role(role)
        except ValueError:
            return ServiceResult.failure(OutcomeKind.VALIDATION, "Please select a valid role")
        if new_role == MemberRole.OWNER.value:
            return ServiceResult.failure(OutcomeKind.VALIDATION, "A project can only have one owner")

        denied = self._require_role(
            ctx, project_id, (MemberRole.OWNER.value,), "Only the project owner can change roles"
        )
        if denied:
            return denied

        target_role = self.members.role_of(project_id, user_id)
        if target_role is None:
            return ServiceResult.failure(OutcomeKind.NOT_FOUND, "User is not a member of this project")
        if target_role == MemberRole.OWNER.value:
            return ServiceResult.failure(OutcomeKind.FORBIDDEN, "The owner's role cannot be changed")

        result = self.members.update_role(project_id, user_id, new_role)
        if not result.ok or result.affected == 0:
            return ServiceResult.from_write(result, "Failed to change role.")
        return ServiceResult.success(f"Role changed to {new_role}")

    @storage_guard("Failed to delete project.")
    def delete_project(self, ctx: AuthContext, project_id: int) -> ServiceResult[None]:
        denied = require_login(ctx)
        if denied:
            return denied

        project = self.projects.find_by_id(project_id)
        if project is None:
            return ServiceResult.failure(OutcomeKind.NOT_FOUND, PROJECT_NOT_FOUND)

        denied = self._require_role(
            ctx, project_id, (MemberRole.OWNER.value,), "Only the project owner can delete the project"
        )
        if denied:
            return denied

        if not self.projects.delete(project_id):
            return ServiceResult.failure(OutcomeKind.STORAGE, "Failed to delete project.")

        if self.selected is not None and self.selected.matches(project_id):
            self.selected.clear()
        return ServiceResult.success(f"Project '{project.name}' deleted")

    @storage_guard("Failed to load projects. Please try again.")
    def my_projects(self, ctx: AuthContext) -> ServiceResult[List[ProjectOut]]:
        denied = require_login(ctx)
        if denied:
            return denied
        projects = self.projects.find_by_member(ctx.user_id)
        return ServiceResult.success(f"{len(projects)} projects", projects)

    @storage_guard("Failed to load the dashboard. Please try again.")
    def dashboard(self, ctx: AuthContext) -> ServiceResult[DashboardSummary]:
        denied = require_login(ctx)
        if denied:
            return denied

        mine = self.projects.find_by_member(ctx.user_id)
        summary = DashboardSummary(
            member_of_count=len(mine),
            created_count=len(self.projects.find_created_by(ctx.user_id)),
            available_count=len(self.projects.find_all()),
            my_projects=mine,
        )
        return ServiceResult.success("Dashboard loaded", summary)

    @storage_guard("Failed to load project details. Please try again.")
    def project_details(self, ctx: AuthContext, project_id: int) -> ServiceResult[ProjectDetails]:
        denied = require_login(ctx)
        if denied:
            return denied

        project = self.projects.find_by_id(project_id)
        if project is None:
            return ServiceResult.failure(OutcomeKind.NOT_FOUND, PROJECT_NOT_FOUND)

        creator = self.users.find_by_id(project.created_by)
        members = self.members.find_details_by_project(project_id)
        details = ProjectDetails(
            project=project,
            creator=UserSummary.model_validate(creator.model_dump()) if creator else None,
            viewer_role=self.members.role_of(project_id, ctx.user_id),
            member_count=len(members),
            members=members,
        )
        return ServiceResult.success(project.name, details)
