"""Progress report and daily progress tables."""

from datetime import date, datetime

from sqlalchemy import JSON, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from staffboard.db.base import Base, TimestampMixin


class ProgressReportRow(Base, TimestampMixin):
    __tablename__ = "progress_reports"

    report_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    report_date: Mapped[date] = mapped_column(Date, nullable=False)
    accomplishments: Mapped[str] = mapped_column(Text, nullable=False)
    challenges: Mapped[str | None] = mapped_column(Text, nullable=True)
    tomorrow_plan: Mapped[str | None] = mapped_column(Text, nullable=True)
    task_completed: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    progress_percent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    approved_by: Mapped[str | None] = mapped_column(String(128), nullable=True)
    approved_by_role: Mapped[str | None] = mapped_column(String(20), nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    manager_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)


class DailyProgressRow(Base, TimestampMixin):
    __tablename__ = "daily_progress"

    daily_progress_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    progress_date: Mapped[date] = mapped_column("date", Date, nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="submitted")
