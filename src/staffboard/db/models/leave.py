"""Leave request table."""

from datetime import date

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from staffboard.db.base import Base, TimestampMixin


class LeaveRow(Base, TimestampMixin):
    __tablename__ = "leaves"

    leave_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    # applicant; an employee or a manager
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    leave_type: Mapped[str] = mapped_column(String(50), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    manager_approval: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    director_approval: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
