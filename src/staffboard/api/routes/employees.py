"""Employee onboarding."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.dependencies import RequireApprover, get_db
from staffboard.errors.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from staffboard.events.domain_events import EMPLOYEE_ONBOARDED, DomainEvent, publish_event
from staffboard.models.enums import Role
from staffboard.models.workflow import EmployeeOnboard
from staffboard.repositories.people_repo import EmployeeRepository, ManagerRepository
from staffboard.services.id_generator import generate_id
from staffboard.services.notifications.projector import Viewer
from staffboard.services.roles import normalize_role

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/employees", status_code=201)
async def onboard_employee(
    body: EmployeeOnboard,
    viewer: Viewer = RequireApprover,
    db: AsyncSession = Depends(get_db),
) -> dict:
    try:
        role = normalize_role(body.role)
    except AuthorizationError:
        raise ValidationError(f"Unknown role '{body.role}'") from None
    if role != Role.EMPLOYEE:
        raise ValidationError("Only employee roles can be onboarded here")

    managers = ManagerRepository(db)
    if viewer.role == Role.MANAGER:
        manager = await managers.get(viewer.user_id)
        if manager is None:
            raise NotFoundError("Manager", viewer.user_id)
        manager_id, director_id = manager.manager_id, manager.director_id
    else:
        manager_id, director_id = body.manager_id, viewer.user_id
        if manager_id and await managers.get(manager_id) is None:
            raise NotFoundError("Manager", manager_id)

    employees = EmployeeRepository(db)
    if await employees.get_by_email(body.email) is not None:
        raise ConflictError(f"An employee with email '{body.email}' already exists")

    employee = await employees.create(
        employee_id=generate_id("emp_"),
        name=body.name,
        email=body.email.lower(),
        role=body.role,
        department=body.department,
        manager_id=manager_id,
        director_id=director_id,
    )
    await db.commit()
    logger.info("Onboarded employee %s under manager %s", employee.employee_id, manager_id)

    result = {
        "employee_id": employee.employee_id,
        "name": employee.name,
        "email": employee.email,
        "role": employee.role,
        "department": employee.department,
        "manager_id": employee.manager_id,
        "director_id": employee.director_id,
    }
    await publish_event(
        DomainEvent(EMPLOYEE_ONBOARDED, result["employee_id"], viewer.user_id, {"name": result["name"]}),
        db,
    )
    return result
