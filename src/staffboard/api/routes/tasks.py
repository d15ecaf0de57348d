"""Task assignment and progress updates."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.dependencies import RequireEmployee, RequireManager, get_db
from staffboard.errors.exceptions import AuthorizationError, ConflictError, NotFoundError
from staffboard.events.domain_events import TASK_ASSIGNED, TASK_PROGRESS_UPDATED, DomainEvent, publish_event
from staffboard.models.enums import ProjectStatus, TaskStatus
from staffboard.models.workflow import TaskAssign, TaskProgressUpdate
from staffboard.repositories.people_repo import EmployeeRepository
from staffboard.repositories.project_repo import ProjectRepository
from staffboard.repositories.task_repo import TaskRepository
from staffboard.services.id_generator import generate_id
from staffboard.services.notifications.projector import Viewer

logger = logging.getLogger(__name__)

router = APIRouter()

_ASSIGNABLE_PROJECT_STATUSES = (ProjectStatus.APPROVED, ProjectStatus.ACTIVE)


def _task_dict(task) -> dict:
    return {
        "task_id": task.task_id,
        "project_id": task.project_id,
        "user_id": task.user_id,
        "manager_id": task.manager_id,
        "title": task.title,
        "description": task.description,
        "priority": task.priority,
        "due_date": task.due_date.isoformat() if task.due_date else None,
        "status": task.status,
        "progress": task.progress,
    }


@router.post("/tasks/assign", status_code=201)
async def assign_tasks(
    body: TaskAssign,
    viewer: Viewer = RequireManager,
    db: AsyncSession = Depends(get_db),
) -> dict:
    projects = ProjectRepository(db)
    project = await projects.get(body.project_id)
    if project is None:
        raise NotFoundError("Project", body.project_id)
    if viewer.user_id not in await projects.list_manager_ids(project):
        raise AuthorizationError("You are not a manager of this project")
    if project.status not in _ASSIGNABLE_PROJECT_STATUSES:
        raise ConflictError(f"Project is '{project.status}'; tasks can only be assigned on approved projects")

    employees = EmployeeRepository(db)
    found = {e.employee_id: e for e in await employees.list_by_ids(body.employee_ids)}
    for employee_id in dict.fromkeys(body.employee_ids):
        if employee_id not in found:
            raise NotFoundError("Employee", employee_id)

    repo = TaskRepository(db)
    tasks = []
    for employee_id in dict.fromkeys(body.employee_ids):
        tasks.append(
            await repo.create(
                task_id=generate_id("task_"),
                project_id=project.project_id,
                user_id=employee_id,
                manager_id=viewer.user_id,
                title=body.title or project.title,
                description=body.description or project.description,
                priority=project.priority,
                due_date=body.due_date or project.end_date,
                status=TaskStatus.ASSIGNED.value,
                progress=0,
            )
        )
    await db.commit()
    logger.info("Assigned %d task(s) on project %s", len(tasks), body.project_id)
    result = [_task_dict(t) for t in tasks]

    for task in result:
        await publish_event(DomainEvent(TASK_ASSIGNED, task["task_id"], viewer.user_id), db)
    return {"tasks": result}


@router.put("/tasks/{task_id}/progress")
async def update_task_progress(
    task_id: str,
    body: TaskProgressUpdate,
    viewer: Viewer = RequireEmployee,
    db: AsyncSession = Depends(get_db),
) -> dict:
    repo = TaskRepository(db)
    task = await repo.get(task_id)
    if task is None:
        raise NotFoundError("Task", task_id)
    if task.user_id != viewer.user_id:
        raise AuthorizationError("Only the assignee can update task progress")

    status = TaskStatus.COMPLETED if body.progress == 100 else TaskStatus.IN_PROGRESS
    await repo.update(task, progress=body.progress, status=status.value)
    await db.commit()
    result = _task_dict(task)

    await publish_event(DomainEvent(TASK_PROGRESS_UPDATED, task_id, viewer.user_id), db)
    return result
