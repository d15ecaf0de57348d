"""Project and project assignee tables."""

from datetime import date

from sqlalchemy import Date, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from staffboard.db.base import Base, TimestampMixin


class ProjectRow(Base, TimestampMixin):
    __tablename__ = "projects"

    project_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="low")
    # primary manager
    manager_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    director_id: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="pending_approval")
    approval_comments: Mapped[str | None] = mapped_column(Text, nullable=True)


class ProjectAssigneeRow(Base, TimestampMixin):
    __tablename__ = "project_assignees"

    project_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("projects.project_id"), primary_key=True
    )
    manager_id: Mapped[str] = mapped_column(String(128), primary_key=True)
