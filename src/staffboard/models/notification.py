"""Pydantic models for the notification feed and its read/delete mutations."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NotificationView(BaseModel):
    """One projected notification as returned to a client."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    source_id: str = Field(..., alias="sourceId")
    user_id: str = Field(..., alias="userId")
    created_by: str | None = Field(None, alias="createdBy")
    message: str
    type: str
    action: str
    read: bool
    read_at: datetime | None = Field(None, alias="readAt")
    created_at: datetime | None = Field(None, alias="createdAt")
    action_url: str | None = Field(None, alias="actionUrl")


class NotificationListResponse(BaseModel):
    notifications: list[NotificationView]


class NotificationMutation(BaseModel):
    """Body of PUT /notifications/read and PUT /notifications/delete.

    ``type`` and ``sourceId`` are required; the other fields are context the
    client echoes back from the feed.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str | None = None
    source_id: str | None = Field(None, alias="sourceId")
    message: str | None = None
    created_by: str | None = Field(None, alias="createdBy")
    date: datetime | None = None


class NotificationSlotState(BaseModel):
    """The caller's slot on the mutated row."""

    model_config = ConfigDict(populate_by_name=True)

    notification_id: str = Field(..., alias="notificationId")
    type: str
    source_id: str = Field(..., alias="sourceId")
    user_id: str = Field(..., alias="userId")
    role: str
    action: str
    read_at: datetime | None = Field(None, alias="readAt")
    created_by: str | None = Field(None, alias="createdBy")


class NotificationMutationResponse(BaseModel):
    message: str
    notification: NotificationSlotState
