"""Notification repository.

All reads and writes address a single role slot; the other two slots of a row
are never read for filtering nor written.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.db.models.notification import NotificationRow, slot_fields
from staffboard.models.enums import NotificationAction
from staffboard.repositories.base import BaseRepository
from staffboard.services.id_generator import generate_id


class NotificationRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, NotificationRow)

    async def list_for_recipient(self, role: str, user_id: str) -> list[NotificationRow]:
        """Rows addressed to ``user_id`` in the ``role`` slot, deleted ones excluded, newest first."""
        id_field, action_field, _ = slot_fields(role)
        action_col = getattr(NotificationRow, action_field)
        stmt = (
            select(NotificationRow)
            .where(
                getattr(NotificationRow, id_field) == user_id,
                or_(action_col.is_(None), action_col != NotificationAction.DELETED.value),
            )
            .order_by(NotificationRow.created_at.desc(), NotificationRow.notification_id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_for_recipient(
        self, notification_type: str, source_id: str, role: str, user_id: str
    ) -> NotificationRow | None:
        id_field, _, _ = slot_fields(role)
        stmt = select(NotificationRow).where(
            NotificationRow.type == notification_type,
            NotificationRow.source_id == source_id,
            getattr(NotificationRow, id_field) == user_id,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def find_for_slots(
        self, notification_type: str, source_id: str, slots: dict[str, str]
    ) -> list[NotificationRow]:
        """Rows for (type, source_id) holding any of the given role -> user_id slots."""
        if not slots:
            return []
        conditions = [
            getattr(NotificationRow, slot_fields(role)[0]) == user_id
            for role, user_id in slots.items()
        ]
        stmt = (
            select(NotificationRow)
            .where(
                NotificationRow.type == notification_type,
                NotificationRow.source_id == source_id,
                or_(*conditions),
            )
            .order_by(NotificationRow.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def insert_row(self, notification_type: str, source_id: str, **values: Any) -> NotificationRow:
        """Insert inside a savepoint; a unique-slot collision raises IntegrityError
        without poisoning the surrounding transaction."""
        row = NotificationRow(
            notification_id=generate_id("notif_"),
            type=notification_type,
            source_id=source_id,
            **values,
        )
        async with self.session.begin_nested():
            self.session.add(row)
        return row

    async def upsert_slot(
        self,
        notification_type: str,
        source_id: str,
        role: str,
        user_id: str,
        action: str,
        read_at: datetime | None,
        created_by: str | None,
        message: str | None = None,
    ) -> NotificationRow:
        """Set one role slot's state for (type, source_id, user_id).

        Updates the existing row holding that slot, or inserts a row addressed
        only to that role when none exists.
        """
        id_field, action_field, read_at_field = slot_fields(role)
        slot_state = {action_field: action, read_at_field: read_at, "created_by": created_by}

        row = await self.find_for_recipient(notification_type, source_id, role, user_id)
        if row is None:
            try:
                return await self.insert_row(
                    notification_type,
                    source_id,
                    message=message or "",
                    **{id_field: user_id},
                    **slot_state,
                )
            except IntegrityError:
                # lost a race with a concurrent insert of the same slot
                row = await self.find_for_recipient(notification_type, source_id, role, user_id)
                if row is None:
                    raise
        return await self.update(row, **slot_state)
