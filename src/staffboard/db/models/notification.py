"""Notification storage table.

One physical row can address up to three recipients, one per role slot. Each
slot has its own action and read timestamp so that one role's read/delete never
touches another role's state.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from staffboard.db.base import Base, TimestampMixin


class NotificationRow(Base, TimestampMixin):
    __tablename__ = "notifications"

    notification_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    source_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_by: Mapped[str | None] = mapped_column(String(128), nullable=True)

    employee_id: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    employee_action: Mapped[str | None] = mapped_column(String(16), nullable=True)
    employee_read_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    manager_id: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    manager_action: Mapped[str | None] = mapped_column(String(16), nullable=True)
    manager_read_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    director_id: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    director_action: Mapped[str | None] = mapped_column(String(16), nullable=True)
    director_read_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # NULL recipients never collide, so each constraint only binds populated slots
    __table_args__ = (
        UniqueConstraint("type", "source_id", "employee_id", name="uq_notification_employee_slot"),
        UniqueConstraint("type", "source_id", "manager_id", name="uq_notification_manager_slot"),
        UniqueConstraint("type", "source_id", "director_id", name="uq_notification_director_slot"),
    )


def slot_fields(role: str) -> tuple[str, str, str]:
    """Return the (id, action, read_at) attribute names of a role slot."""
    return f"{role}_id", f"{role}_action", f"{role}_read_at"
