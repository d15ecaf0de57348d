"""Project creation and director approval."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.dependencies import RequireApprover, RequireDirector, get_db
from staffboard.errors.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from staffboard.events.domain_events import (
    PROJECT_ASSIGNED,
    PROJECT_DECIDED,
    PROJECT_SUBMITTED,
    DomainEvent,
    publish_event,
)
from staffboard.models.enums import DecisionStatus, Priority, ProjectStatus, Role
from staffboard.models.workflow import ProjectCreate, ProjectDecision
from staffboard.repositories.people_repo import ManagerRepository
from staffboard.repositories.project_repo import ProjectRepository
from staffboard.services.id_generator import generate_id
from staffboard.services.notifications.projector import Viewer

logger = logging.getLogger(__name__)

router = APIRouter()


def _project_dict(project, manager_ids: list[str]) -> dict:
    return {
        "project_id": project.project_id,
        "title": project.title,
        "description": project.description,
        "start_date": project.start_date.isoformat(),
        "end_date": project.end_date.isoformat() if project.end_date else None,
        "priority": project.priority,
        "manager_id": project.manager_id,
        "director_id": project.director_id,
        "assigned_managers": manager_ids,
        "status": project.status,
        "approval_comments": project.approval_comments,
    }


@router.post("/projects", status_code=201)
async def create_project(
    body: ProjectCreate,
    viewer: Viewer = RequireApprover,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Managers submit projects for approval; directors create them approved."""
    managers = ManagerRepository(db)
    if viewer.role == Role.MANAGER:
        manager = await managers.get(viewer.user_id)
        if manager is None:
            raise NotFoundError("Manager", viewer.user_id)
        values = {
            "manager_id": manager.manager_id,
            "director_id": manager.director_id,
            "status": ProjectStatus.PENDING_APPROVAL.value,
        }
        extra_managers: list[str] = []
        event_type = PROJECT_SUBMITTED
    else:
        if not body.manager_id or not body.assigned_managers:
            raise ValidationError(
                "manager_id and assigned_managers are required when a director creates a project"
            )
        wanted = list(dict.fromkeys([body.manager_id, *body.assigned_managers]))
        found = {m.manager_id for m in await managers.list_by_ids(wanted)}
        for manager_id in wanted:
            if manager_id not in found:
                raise NotFoundError("Manager", manager_id)
        values = {
            "manager_id": body.manager_id,
            "director_id": viewer.user_id,
            "status": ProjectStatus.APPROVED.value,
        }
        extra_managers = [m for m in wanted if m != body.manager_id]
        event_type = PROJECT_ASSIGNED

    repo = ProjectRepository(db)
    project = await repo.create(
        project_id=generate_id("proj_"),
        title=body.title,
        description=body.description,
        start_date=body.start_date,
        end_date=body.end_date,
        priority=(body.priority or Priority.LOW).value,
        **values,
    )
    if extra_managers:
        await repo.add_assignees(project.project_id, extra_managers)
    await db.commit()
    result = _project_dict(project, await repo.list_manager_ids(project))

    await publish_event(DomainEvent(event_type, result["project_id"], viewer.user_id), db)
    return result


@router.post("/projects/{project_id}/decision")
async def decide_project(
    project_id: str,
    body: ProjectDecision,
    viewer: Viewer = RequireDirector,
    db: AsyncSession = Depends(get_db),
) -> dict:
    repo = ProjectRepository(db)
    project = await repo.get(project_id)
    if project is None:
        raise NotFoundError("Project", project_id)
    if project.director_id != viewer.user_id:
        raise AuthorizationError("Only the project's director can decide it")
    if project.status != ProjectStatus.PENDING_APPROVAL:
        raise ConflictError(f"Project is already '{project.status}'")
    if body.status == DecisionStatus.APPROVED and body.priority is None:
        raise ValidationError("priority is required when approving a project")

    if body.assigned_managers and body.status != DecisionStatus.APPROVED:
        raise ValidationError("assigned_managers can only be given when approving")

    current = await repo.list_manager_ids(project)
    extra_managers = [m for m in dict.fromkeys(body.assigned_managers) if m not in current]
    if extra_managers:
        found = {m.manager_id for m in await ManagerRepository(db).list_by_ids(extra_managers)}
        for manager_id in extra_managers:
            if manager_id not in found:
                raise NotFoundError("Manager", manager_id)
        await repo.add_assignees(project_id, extra_managers)

    changes: dict = {"status": body.status.value, "approval_comments": body.approval_comments}
    if body.priority is not None:
        changes["priority"] = body.priority.value
    await repo.update(project, **changes)
    await db.commit()
    logger.info("Project %s %s", project_id, body.status.value)
    result = _project_dict(project, await repo.list_manager_ids(project))

    await publish_event(DomainEvent(PROJECT_DECIDED, project_id, viewer.user_id), db)
    return result
