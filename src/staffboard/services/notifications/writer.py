"""Notification writer: turns one business event into notification rows.

Addressing rule:
  * recipients with pairwise distinct roles share ONE row (one slot each);
  * as soon as two recipients share a role, every recipient gets its own row.

Writing the same (type, source_id) to a slot that already exists refreshes that
slot back to unread and replaces the message; other slots on the row keep
their state.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.db.models.notification import NotificationRow, slot_fields
from staffboard.models.enums import NotificationAction, Role
from staffboard.repositories.notification_repo import NotificationRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Recipient:
    role: Role
    user_id: str


def plan_rows(recipients: list[Recipient]) -> list[dict[str, str]]:
    """Group recipients into rows as role -> user_id slot maps."""
    unique = list(dict.fromkeys(r for r in recipients if r.user_id))
    if not unique:
        return []
    roles = [r.role for r in unique]
    if len(set(roles)) == len(roles):
        return [{r.role.value: r.user_id for r in unique}]
    return [{r.role.value: r.user_id} for r in unique]


def _unread_slot(role: str) -> dict:
    _, action_field, read_at_field = slot_fields(role)
    return {action_field: NotificationAction.UNREAD.value, read_at_field: None}


class NotificationWriter:
    """Insert or refresh notification rows within the caller's session.

    The caller owns the transaction; nothing here commits.
    """

    def __init__(self, session: AsyncSession):
        self.repo = NotificationRepository(session)

    async def write(
        self,
        notification_type: str,
        source_id: str,
        message: str,
        created_by: str | None,
        recipients: list[Recipient],
    ) -> list[NotificationRow]:
        rows: list[NotificationRow] = []
        for slots in plan_rows(recipients):
            rows.extend(await self._write_row(notification_type, source_id, message, created_by, slots))
        logger.info(
            "notification_written",
            extra={"type": notification_type, "source_id": source_id, "rows": len(rows)},
        )
        return rows

    async def _write_row(
        self,
        notification_type: str,
        source_id: str,
        message: str,
        created_by: str | None,
        slots: dict[str, str],
    ) -> list[NotificationRow]:
        existing = await self.repo.find_for_slots(notification_type, source_id, slots)
        touched: list[NotificationRow] = []
        uncovered: dict[str, str] = {}

        for role, user_id in slots.items():
            id_field, _, _ = slot_fields(role)
            holder = next((row for row in existing if getattr(row, id_field) == user_id), None)
            if holder is None:
                uncovered[role] = user_id
                continue
            await self.repo.update(holder, message=message, created_by=created_by, **_unread_slot(role))
            if holder not in touched:
                touched.append(holder)

        if not uncovered:
            return touched

        # attach uncovered slots to an existing row of this event when its slots are free
        host = next(
            (
                row for row in touched
                if all(getattr(row, slot_fields(role)[0]) is None for role in uncovered)
            ),
            None,
        )
        values: dict = {}
        for role, user_id in uncovered.items():
            values[slot_fields(role)[0]] = user_id
            values.update(_unread_slot(role))

        if host is not None:
            await self.repo.update(host, **values)
            return touched

        row = await self.repo.insert_row(
            notification_type,
            source_id,
            message=message,
            created_by=created_by,
            **values,
        )
        return [*touched, row]
