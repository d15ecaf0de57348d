"""Notification reader: the feed a (user, role) sees right now."""

import logging
from collections import defaultdict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.errors.exceptions import EnrichmentLookupError
from staffboard.models.enums import NotificationType
from staffboard.models.notification import NotificationView
from staffboard.repositories.leave_repo import LeaveRepository
from staffboard.repositories.notification_repo import NotificationRepository
from staffboard.repositories.progress_report_repo import ProgressReportRepository
from staffboard.repositories.project_repo import ProjectRepository
from staffboard.repositories.task_repo import TaskRepository
from staffboard.services.notifications.projector import ENRICHED_TYPES, Viewer, project_notification

logger = logging.getLogger(__name__)

# notification type -> (repository, primary key attribute of the source row)
SOURCE_LOOKUPS = {
    NotificationType.LEAVE.value: (LeaveRepository, "leave_id"),
    NotificationType.TASK.value: (TaskRepository, "task_id"),
    NotificationType.PROGRESS_UPDATE.value: (TaskRepository, "task_id"),
    NotificationType.PROGRESS_REPORT.value: (ProgressReportRepository, "report_id"),
    NotificationType.PROJECT.value: (ProjectRepository, "project_id"),
}


class NotificationReader:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = NotificationRepository(session)

    async def list_for(self, viewer: Viewer) -> list[NotificationView]:
        """Project every visible row for ``viewer``, newest first.

        Raises:
            EnrichmentLookupError: a source-entity batch query failed; no partial
                list is returned.
        """
        rows = await self.repo.list_for_recipient(viewer.role.value, viewer.user_id)

        wanted: dict[str, set[str]] = defaultdict(set)
        for row in rows:
            if row.type in ENRICHED_TYPES:
                wanted[row.type].add(row.source_id)

        entities = {}
        for notification_type, source_ids in wanted.items():
            entities[notification_type] = await self._fetch_sources(notification_type, source_ids)

        views = []
        suppressed = 0
        for row in rows:
            entity = entities.get(row.type, {}).get(row.source_id)
            view = project_notification(row, viewer, entity)
            if view is None:
                suppressed += 1
                continue
            views.append(view)

        logger.debug(
            "notifications_projected",
            extra={"visible": len(views), "suppressed": suppressed, "role": viewer.role.value},
        )
        return views

    async def _fetch_sources(self, notification_type: str, source_ids: set[str]) -> dict:
        repo_class, key_field = SOURCE_LOOKUPS[notification_type]
        try:
            found = await repo_class(self.session).list_by_ids(source_ids)
        except SQLAlchemyError as exc:
            raise EnrichmentLookupError(
                notification_type,
                {"source_type": notification_type, "reason": exc.__class__.__name__},
            ) from exc
        return {getattr(entity, key_field): entity for entity in found}
