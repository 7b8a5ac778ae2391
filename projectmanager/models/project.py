"""
Project Model
"""
from sqlalchemy import CheckConstraint, Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from projectmanager.database import Base

PROJECT_STATUSES = ("not started", "in progress", "completed", "published", "canceled")


class Project(Base):
    __tablename__ = "projects"

    id = Column("project_id", Integer, primary_key=True, autoincrement=True)
    name = Column("project_name", Text, nullable=False)
    description = Column("project_description", Text, nullable=True)
    progress = Column("project_progress", Integer, server_default="0", default=0)
    created_by = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    created_at = Column(DateTime, server_default=func.current_timestamp())
    status = Column(Text, server_default="not started", default="not started")

    # Relationships
    creator = relationship("User", back_populates="created_projects", foreign_keys=[created_by])
    members = relationship("ProjectMember", back_populates="project")

    __table_args__ = (
        CheckConstraint(
            "status IN (" + ", ".join(f"'{status}'" for status in PROJECT_STATUSES) + ")",
            name="ck_projects_status",
        ),
        {"sqlite_autoincrement": True},
    )
