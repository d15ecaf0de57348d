"""Read/delete mutations on the caller's own role slot."""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.db.models.notification import NotificationRow, slot_fields
from staffboard.errors.exceptions import ValidationError
from staffboard.models.enums import NotificationAction
from staffboard.models.notification import NotificationMutation, NotificationSlotState
from staffboard.repositories.notification_repo import NotificationRepository
from staffboard.services.notifications.projector import Viewer

logger = logging.getLogger(__name__)


def _require_key(body: NotificationMutation) -> tuple[str, str]:
    missing = [name for name, value in (("type", body.type), ("sourceId", body.source_id)) if not value]
    if missing:
        raise ValidationError(
            f"Missing required field(s): {', '.join(missing)}",
            details={"missing": missing},
        )
    return body.type, body.source_id


def slot_state(row: NotificationRow, viewer: Viewer) -> NotificationSlotState:
    id_field, action_field, read_at_field = slot_fields(viewer.role.value)
    return NotificationSlotState(
        notification_id=row.notification_id,
        type=row.type,
        source_id=row.source_id,
        user_id=getattr(row, id_field),
        role=viewer.role.value,
        action=getattr(row, action_field),
        read_at=getattr(row, read_at_field),
        created_by=row.created_by,
    )


class NotificationMutator:
    """Upsert the caller's slot for (type, sourceId); other roles' slots are never written."""

    def __init__(self, session: AsyncSession):
        self.repo = NotificationRepository(session)

    async def mark_read(self, viewer: Viewer, body: NotificationMutation) -> NotificationRow:
        """Mark read for the caller's role.

        ``read_at`` is the client-supplied date or now, and is overwritten on
        every call. ``created_by`` is stamped with the caller as the last actor.
        """
        notification_type, source_id = _require_key(body)
        read_at = body.date or datetime.now(timezone.utc)
        row = await self.repo.upsert_slot(
            notification_type,
            source_id,
            viewer.role.value,
            viewer.user_id,
            action=NotificationAction.READ.value,
            read_at=read_at,
            created_by=viewer.user_id,
            message=body.message,
        )
        logger.info(
            "notification_marked_read",
            extra={"type": notification_type, "source_id": source_id, "role": viewer.role.value},
        )
        return row

    async def mark_deleted(self, viewer: Viewer, body: NotificationMutation) -> NotificationRow:
        """Hide the notification from the caller's future listings; the row stays stored."""
        notification_type, source_id = _require_key(body)
        existing = await self.repo.find_for_recipient(
            notification_type, source_id, viewer.role.value, viewer.user_id
        )
        read_at = None
        created_by = viewer.user_id
        if existing is not None:
            read_at = getattr(existing, slot_fields(viewer.role.value)[2])
            created_by = existing.created_by
        row = await self.repo.upsert_slot(
            notification_type,
            source_id,
            viewer.role.value,
            viewer.user_id,
            action=NotificationAction.DELETED.value,
            read_at=read_at,
            created_by=created_by,
            message=body.message,
        )
        logger.info(
            "notification_deleted",
            extra={"type": notification_type, "source_id": source_id, "role": viewer.role.value},
        )
        return row
