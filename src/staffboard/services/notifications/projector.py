"""Read-time projection of a stored notification row for one viewer.

``project_notification`` is a pure function: given the row, who is looking and
the live source entity (if the type has one), it returns the view to send or
``None`` when the row must be suppressed for this viewer.
"""

from dataclasses import dataclass
from typing import Any

from staffboard.db.models.notification import NotificationRow, slot_fields
from staffboard.models.enums import ApprovalStatus, NotificationAction, NotificationType, Role
from staffboard.models.notification import NotificationView

# Types whose message depends on the live state of their source entity
ENRICHED_TYPES = frozenset({
    NotificationType.LEAVE.value,
    NotificationType.TASK.value,
    NotificationType.PROGRESS_UPDATE.value,
    NotificationType.PROGRESS_REPORT.value,
    NotificationType.PROJECT.value,
})

ACTION_URL_TEMPLATES = {
    NotificationType.LEAVE.value: "/leaves/{source_id}",
    NotificationType.LEAVE_APPROVAL.value: "/leaves/{source_id}",
    NotificationType.TASK.value: "/tasks/{source_id}",
    NotificationType.TASK_PROGRESS.value: "/tasks/{source_id}",
    NotificationType.PROGRESS_UPDATE.value: "/tasks/{source_id}",
    NotificationType.PROGRESS_REPORT.value: "/reports/{source_id}",
    NotificationType.PROGRESS_REPORT_REVIEW.value: "/reports/{source_id}",
    NotificationType.PROJECT.value: "/projects/{source_id}",
    NotificationType.PROJECT_ASSIGNED.value: "/projects/{source_id}",
    NotificationType.DAILY_PROGRESS.value: "/daily-progress/{source_id}",
}

LEAVE_APPROVED_MESSAGE = "Your leave request has been approved ✅"
LEAVE_REJECTED_MESSAGE = "Your leave request has been rejected ❌"
REPORT_APPROVED_MESSAGE = "Your progress report has been approved ✅"
REPORT_REJECTED_MESSAGE = "Your progress report has been rejected ❌"
REPORT_SUBMITTED_MESSAGE = "New progress report submitted 📄"
TASK_ASSIGNED_PREFIX = "New task assigned to you: "


@dataclass(frozen=True)
class Viewer:
    user_id: str
    role: Role


def action_url_for(notification_type: str, source_id: str) -> str | None:
    template = ACTION_URL_TEMPLATES.get(notification_type)
    if template is None:
        return None
    return template.format(source_id=source_id)


def _is_owner(entity: Any, viewer: Viewer) -> bool:
    return getattr(entity, "user_id", None) == viewer.user_id


def _decision_message(status: str, approved: str, rejected: str) -> str | None:
    if status == ApprovalStatus.APPROVED:
        return approved
    if status == ApprovalStatus.REJECTED:
        return rejected
    return None


def derive_message(row: NotificationRow, viewer: Viewer, entity: Any) -> str | None:
    """Return the message to show, or None to suppress the row."""
    notification_type = row.type
    stored = row.message or ""

    if notification_type not in ENRICHED_TYPES:
        return stored
    if entity is None:
        return None

    if notification_type == NotificationType.LEAVE:
        if _is_owner(entity, viewer):
            return _decision_message(entity.status, LEAVE_APPROVED_MESSAGE, LEAVE_REJECTED_MESSAGE)
        return stored

    if notification_type == NotificationType.TASK:
        if viewer.role == Role.EMPLOYEE:
            return f"{TASK_ASSIGNED_PREFIX}{stored}"
        return stored

    if notification_type == NotificationType.PROGRESS_UPDATE:
        if viewer.role in (Role.MANAGER, Role.DIRECTOR):
            status = (entity.status or "").replace("_", " ")
            return f"Task '{entity.title}' is {status} ({entity.progress}% complete)"
        return stored

    if notification_type == NotificationType.PROGRESS_REPORT:
        if _is_owner(entity, viewer):
            return _decision_message(entity.status, REPORT_APPROVED_MESSAGE, REPORT_REJECTED_MESSAGE)
        if viewer.role in (Role.MANAGER, Role.DIRECTOR):
            return REPORT_SUBMITTED_MESSAGE
        return stored

    # project
    if viewer.role == Role.MANAGER:
        decided = _decision_message(
            entity.status,
            f"Project '{entity.title}' has been approved ✅",
            f"Project '{entity.title}' has been rejected ❌",
        )
        return decided or f"Project '{entity.title}' is {entity.status.replace('_', ' ')}"
    if viewer.role == Role.DIRECTOR:
        return f"Project '{entity.title}' needs your attention 📁"
    return stored


def project_notification(row: NotificationRow, viewer: Viewer, entity: Any = None) -> NotificationView | None:
    """Build the viewer's NotificationView for ``row``; None means suppressed."""
    id_field, action_field, read_at_field = slot_fields(viewer.role.value)
    recipient_id = getattr(row, id_field)
    if recipient_id != viewer.user_id:
        return None

    action = getattr(row, action_field) or NotificationAction.UNREAD.value
    if action == NotificationAction.DELETED:
        return None

    message = derive_message(row, viewer, entity)
    if message is None:
        return None

    read_at = getattr(row, read_at_field)
    return NotificationView(
        id=f"{row.source_id}-{row.type}-{recipient_id}",
        source_id=row.source_id,
        user_id=recipient_id,
        created_by=row.created_by,
        message=message,
        type=row.type,
        action=action,
        read=action == NotificationAction.READ or read_at is not None,
        read_at=read_at,
        created_at=row.created_at,
        action_url=action_url_for(row.type, row.source_id),
    )
