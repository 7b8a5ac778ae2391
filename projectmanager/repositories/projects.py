"""Project repository"""
import logging
from typing import List, Optional

from projectmanager.models import Project, ProjectMember
from projectmanager.repositories.base import BaseRepository, WriteResult
from projectmanager.schemas import ProjectCreate, ProjectOut, ProjectUpdate, normalize_status

logger = logging.getLogger(__name__)

MIN_PROGRESS = 0
MAX_PROGRESS = 100


def clamp_progress(value: int) -> int:
    return max(MIN_PROGRESS, min(MAX_PROGRESS, int(value)))


class ProjectRepository(BaseRepository):
    def _newest_first(self, query):
        return query.order_by(Project.created_at.desc(), Project.id.desc())

    def _to_entities(self, rows) -> List[ProjectOut]:
        return [ProjectOut.model_validate(row) for row in rows]

    def insert(self, project: ProjectCreate) -> WriteResult:
        def action() -> WriteResult:
            row = Project(
                name=project.name,
                description=project.description,
                progress=project.progress,
                created_by=project.created_by,
                status=project.status,
            )
            self.db.add(row)
            self.db.flush()
            logger.info("Project inserted with ID: %s", row.id)
            return WriteResult(id=row.id, affected=1)

        return self._write("insert project", action)

    def find_by_id(self, project_id: int) -> Optional[ProjectOut]:
        row = self._read(
            "find project by id",
            lambda: self.db.query(Project).filter(Project.id == project_id).first(),
        )
        return ProjectOut.model_validate(row) if row else None

    def find_all(self) -> List[ProjectOut]:
        rows = self._read("list projects", lambda: self._newest_first(self.db.query(Project)).all())
        return self._to_entities(rows)

    def find_created_by(self, user_id: int) -> List[ProjectOut]:
        rows = self._read(
            "list projects created by user",
            lambda: self._newest_first(self.db.query(Project).filter(Project.created_by == user_id)).all(),
        )
        return self._to_entities(rows)

    def find_by_member(self, user_id: int) -> List[ProjectOut]:
        """Projects the user belongs to through a membership, creator's own included."""
        rows = self._read(
            "list projects for member",
            lambda: self._newest_first(
                self.db.query(Project)
                .join(ProjectMember, ProjectMember.project_id == Project.id)
                .filter(ProjectMember.user_id == user_id)
                .distinct()
            ).all(),
        )
        logger.debug("Retrieved %d projects for user %s", len(rows), user_id)
        return self._to_entities(rows)

    def search_by_name(self, term: str) -> List[ProjectOut]:
        pattern = f"%{term}%"
        rows = self._read(
            "search projects by name",
            lambda: self._newest_first(self.db.query(Project).filter(Project.name.ilike(pattern))).all(),
        )
        return self._to_entities(rows)

    def find_by_status(self, status: str) -> List[ProjectOut]:
        wanted = (status or "").strip().lower()
        rows = self._read(
            "list projects by status",
            lambda: self._newest_first(self.db.query(Project).filter(Project.status == wanted)).all(),
        )
        return self._to_entities(rows)

    def update_full(self, project: ProjectUpdate) -> WriteResult:
        def action() -> WriteResult:
            affected = (
                self.db.query(Project)
                .filter(Project.id == project.id)
                .update(
                    {
                        Project.name: project.name,
                        Project.description: project.description,
                        Project.progress: project.progress,
                        Project.status: project.status,
                    }
                )
            )
            return WriteResult(id=project.id, affected=affected)

        return self._write("update project", action)

    def update_progress(self, project_id: int, value: int) -> WriteResult:
        """Persist a new progress value, clamped into 0..100 rather than rejected."""
        progress = clamp_progress(value)
        if progress != value:
            logger.debug("Progress %s for project %s clamped to %s", value, project_id, progress)

        def action() -> WriteResult:
            affected = self.db.query(Project).filter(Project.id == project_id).update({Project.progress: progress})
            return WriteResult(id=project_id, affected=affected)

        return self._write("update project progress", action)

    def update_status(self, project_id: int, status: str) -> WriteResult:
        """Persist a new status. Raises ``ValueError`` for a status outside the allowed set."""
        normalized = normalize_status(status)

        def action() -> WriteResult:
            affected = self.db.query(Project).filter(Project.id == project_id).update({Project.status: normalized})
            return WriteResult(id=project_id, affected=affected)

        return self._write("update project status", action)

    def delete(self, project_id: int) -> bool:
        """Delete a project together with all of its memberships."""

        def action() -> WriteResult:
            removed_members = (
                self.db.query(ProjectMember).filter(ProjectMember.project_id == project_id).delete()
            )
            affected = self.db.query(Project).filter(Project.id == project_id).delete()
            logger.info("Project %s deleted with %d memberships", project_id, removed_members)
            return WriteResult(id=project_id, affected=affected)

        result = self._write("delete project", action)
        return result.ok and result.affected > 0
