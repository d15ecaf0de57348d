"""Turns domain events into notification rows.

Each handler resolves who must hear about the event from the reporting chain
and hands the message and recipients to the NotificationWriter.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.db.models.notification import NotificationRow
from staffboard.events import domain_events as ev
from staffboard.models.enums import NotificationType, Role
from staffboard.repositories.people_repo import DirectorRepository, EmployeeRepository, ManagerRepository
from staffboard.repositories.progress_report_repo import ProgressReportRepository
from staffboard.repositories.project_repo import ProjectRepository
from staffboard.repositories.task_repo import TaskRepository
from staffboard.services.notifications.writer import NotificationWriter, Recipient

logger = logging.getLogger(__name__)


class ReportingChain:
    """Looks up people and their manager/director."""

    def __init__(self, session: AsyncSession):
        self.employees = EmployeeRepository(session)
        self.managers = ManagerRepository(session)
        self.directors = DirectorRepository(session)

    async def name_of(self, user_id: str | None) -> str:
        if not user_id:
            return "Someone"
        for repo in (self.employees, self.managers, self.directors):
            person = await repo.get(user_id)
            if person is not None:
                return person.name
        return "Someone"

    async def chain_of(self, user_id: str) -> list[Recipient]:
        """The user in their own slot plus their manager and director.

        Managers have no manager slot above them, only their director.
        """
        employee = await self.employees.get(user_id)
        if employee is not None:
            recipients = [Recipient(Role.EMPLOYEE, employee.employee_id)]
            director_id = employee.director_id
            if employee.manager_id:
                recipients.append(Recipient(Role.MANAGER, employee.manager_id))
                if director_id is None:
                    manager = await self.managers.get(employee.manager_id)
                    director_id = manager.director_id if manager else None
            if director_id:
                recipients.append(Recipient(Role.DIRECTOR, director_id))
            return recipients

        manager = await self.managers.get(user_id)
        if manager is not None:
            recipients = [Recipient(Role.MANAGER, manager.manager_id)]
            if manager.director_id:
                recipients.append(Recipient(Role.DIRECTOR, manager.director_id))
            return recipients
        return []

    async def director_above(self, user_id: str) -> str | None:
        for recipient in await self.chain_of(user_id):
            if recipient.role == Role.DIRECTOR:
                return recipient.user_id
        return None


async def _employee_onboarded(event, session, writer, chain) -> list[NotificationRow]:
    name = event.payload.get("name") or await chain.name_of(event.source_id)
    return await writer.write(
        NotificationType.WELCOME.value,
        event.source_id,
        f"Welcome to the team, {name}! 👋",
        event.actor_id,
        [Recipient(Role.EMPLOYEE, event.source_id)],
    )


async def _leave_applied(event, session, writer, chain) -> list[NotificationRow]:
    name = await chain.name_of(event.actor_id)
    return await writer.write(
        NotificationType.LEAVE.value,
        event.source_id,
        f"Leave request submitted by {name} 🗓️",
        event.actor_id,
        await chain.chain_of(event.actor_id),
    )


async def _leave_decided(event, session, writer, chain) -> list[NotificationRow]:
    # the applicant follows the leave row itself; the director hears about manager decisions
    if event.payload.get("decider_role") != Role.MANAGER:
        return []
    applicant_id = event.payload["applicant_id"]
    director_id = await chain.director_above(applicant_id)
    if director_id is None:
        return []
    manager_name = await chain.name_of(event.actor_id)
    applicant_name = await chain.name_of(applicant_id)
    return await writer.write(
        NotificationType.LEAVE_APPROVAL.value,
        event.source_id,
        f"{manager_name} {event.payload['status']} the leave request of {applicant_name}",
        event.actor_id,
        [Recipient(Role.DIRECTOR, director_id)],
    )


async def _task_assigned(event, session, writer, chain) -> list[NotificationRow]:
    task = await TaskRepository(session).get(event.source_id)
    if task is None or not task.user_id:
        return []
    return await writer.write(
        NotificationType.TASK.value,
        task.task_id,
        task.title,
        event.actor_id,
        [Recipient(Role.EMPLOYEE, task.user_id)],
    )


async def _task_progress_updated(event, session, writer, chain) -> list[NotificationRow]:
    task = await TaskRepository(session).get(event.source_id)
    if task is None or not task.manager_id:
        return []
    name = await chain.name_of(event.actor_id)
    return await writer.write(
        NotificationType.PROGRESS_UPDATE.value,
        task.task_id,
        f"Task progress updated by {name} 📋",
        event.actor_id,
        [Recipient(Role.MANAGER, task.manager_id)],
    )


async def _daily_progress_submitted(event, session, writer, chain) -> list[NotificationRow]:
    managers = [r for r in await chain.chain_of(event.actor_id) if r.role == Role.MANAGER]
    if not managers:
        return []
    name = await chain.name_of(event.actor_id)
    return await writer.write(
        NotificationType.DAILY_PROGRESS.value,
        event.source_id,
        f"Daily progress submitted by {name} 📝",
        event.actor_id,
        managers,
    )


async def _progress_report_submitted(event, session, writer, chain) -> list[NotificationRow]:
    name = await chain.name_of(event.actor_id)
    return await writer.write(
        NotificationType.PROGRESS_REPORT.value,
        event.source_id,
        f"Progress report submitted by {name} 📄",
        event.actor_id,
        await chain.chain_of(event.actor_id),
    )


async def _progress_report_reviewed(event, session, writer, chain) -> list[NotificationRow]:
    if event.payload.get("reviewer_role") != Role.MANAGER:
        return []
    report = await ProgressReportRepository(session).get(event.source_id)
    if report is None:
        return []
    director_id = await chain.director_above(report.user_id)
    if director_id is None:
        return []
    reviewer = await chain.name_of(event.actor_id)
    author = await chain.name_of(report.user_id)
    return await writer.write(
        NotificationType.PROGRESS_REPORT_REVIEW.value,
        report.report_id,
        f"{reviewer} {report.status} the progress report of {author}",
        event.actor_id,
        [Recipient(Role.DIRECTOR, director_id)],
    )


async def _project_submitted(event, session, writer, chain) -> list[NotificationRow]:
    project = await ProjectRepository(session).get(event.source_id)
    if project is None:
        return []
    recipients = [Recipient(Role.MANAGER, project.manager_id)]
    if project.director_id:
        recipients.append(Recipient(Role.DIRECTOR, project.director_id))
    name = await chain.name_of(project.manager_id)
    return await writer.write(
        NotificationType.PROJECT.value,
        project.project_id,
        f"New project '{project.title}' submitted by {name} for approval",
        event.actor_id,
        recipients,
    )


async def _project_managers(session, project_id: str):
    repo = ProjectRepository(session)
    project = await repo.get(project_id)
    if project is None:
        return None, []
    manager_ids = await repo.list_manager_ids(project)
    return project, [Recipient(Role.MANAGER, mid) for mid in manager_ids]


async def _project_assigned(event, session, writer, chain) -> list[NotificationRow]:
    project, recipients = await _project_managers(session, event.source_id)
    if project is None:
        return []
    return await writer.write(
        NotificationType.PROJECT_ASSIGNED.value,
        project.project_id,
        f"You have been assigned to project '{project.title}'",
        event.actor_id,
        recipients,
    )


async def _project_decided(event, session, writer, chain) -> list[NotificationRow]:
    project, recipients = await _project_managers(session, event.source_id)
    if project is None:
        return []
    director = await chain.name_of(event.actor_id)
    return await writer.write(
        NotificationType.PROJECT.value,
        project.project_id,
        f"Project '{project.title}' was {project.status} by {director}",
        event.actor_id,
        recipients,
    )


HANDLERS = {
    ev.EMPLOYEE_ONBOARDED: _employee_onboarded,
    ev.LEAVE_APPLIED: _leave_applied,
    ev.LEAVE_DECIDED: _leave_decided,
    ev.TASK_ASSIGNED: _task_assigned,
    ev.TASK_PROGRESS_UPDATED: _task_progress_updated,
    ev.DAILY_PROGRESS_SUBMITTED: _daily_progress_submitted,
    ev.PROGRESS_REPORT_SUBMITTED: _progress_report_submitted,
    ev.PROGRESS_REPORT_REVIEWED: _progress_report_reviewed,
    ev.PROJECT_SUBMITTED: _project_submitted,
    ev.PROJECT_ASSIGNED: _project_assigned,
    ev.PROJECT_DECIDED: _project_decided,
}


async def handle_event(event: ev.DomainEvent, session: AsyncSession) -> list[NotificationRow]:
    handler = HANDLERS.get(event.event_type)
    if handler is None:
        logger.debug("No notification handler for %s", event.event_type)
        return []
    writer = NotificationWriter(session)
    return await handler(event, session, writer, ReportingChain(session))
