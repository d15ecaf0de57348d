"""Notification feed and read/delete endpoints.

Clients poll ``GET /notifications``; every call re-projects the stored rows
against the current state of their source entities.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.dependencies import CurrentUser, get_db
from staffboard.models.notification import (
    NotificationListResponse,
    NotificationMutation,
    NotificationMutationResponse,
)
from staffboard.services.notifications import NotificationMutator, NotificationReader
from staffboard.services.notifications.mutator import slot_state

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/notifications")
async def list_notifications(
    viewer: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> dict:
    views = await NotificationReader(db).list_for(viewer)
    return NotificationListResponse(notifications=views).model_dump(by_alias=True, mode="json")


@router.put("/notifications/read")
async def mark_notification_read(
    body: NotificationMutation,
    viewer: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> dict:
    row = await NotificationMutator(db).mark_read(viewer, body)
    await db.commit()
    response = NotificationMutationResponse(
        message="Notification marked as read",
        notification=slot_state(row, viewer),
    )
    return response.model_dump(by_alias=True, mode="json")


@router.put("/notifications/delete")
async def delete_notification(
    body: NotificationMutation,
    viewer: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> dict:
    row = await NotificationMutator(db).mark_deleted(viewer, body)
    await db.commit()
    response = NotificationMutationResponse(
        message="Notification deleted",
        notification=slot_state(row, viewer),
    )
    return response.model_dump(by_alias=True, mode="json")
