"""Domain events raised after a business operation has committed.

Publishing is synchronous and in-process. The notification consumer turns each
event into notification rows in its own unit of work; if that fails the error is
logged and swallowed so the already-committed business operation stands.
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.errors.exceptions import NotificationWriteError

logger = logging.getLogger(__name__)

# Event type constants
EMPLOYEE_ONBOARDED = "employee.onboarded"
LEAVE_APPLIED = "leave.applied"
LEAVE_DECIDED = "leave.decided"
TASK_ASSIGNED = "task.assigned"
TASK_PROGRESS_UPDATED = "task.progress_updated"
DAILY_PROGRESS_SUBMITTED = "daily_progress.submitted"
PROGRESS_REPORT_SUBMITTED = "progress_report.submitted"
PROGRESS_REPORT_REVIEWED = "progress_report.reviewed"
PROJECT_SUBMITTED = "project.submitted"
PROJECT_ASSIGNED = "project.assigned"
PROJECT_DECIDED = "project.decided"


@dataclass(frozen=True)
class DomainEvent:
    event_type: str
    source_id: str
    actor_id: str
    payload: dict = field(default_factory=dict)


async def publish_event(event: DomainEvent, db_session: AsyncSession) -> int:
    """Deliver ``event`` to the notification consumer and commit its rows.

    Returns the number of notification rows written, 0 when the write failed.
    """
    from staffboard.events.notification_consumer import handle_event

    try:
        rows = await handle_event(event, db_session)
        await db_session.commit()
    except Exception as exc:
        await db_session.rollback()
        failure = NotificationWriteError(event.event_type, event.source_id)
        logger.warning(
            "notification_write_failed: %s: %s",
            failure.message,
            exc,
            extra={"event_type": event.event_type, "source_id": event.source_id},
        )
        return 0
    return len(rows)
