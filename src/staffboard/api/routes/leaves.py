"""Leave application and approval."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.dependencies import RequireApprover, get_db, require_role
from staffboard.errors.exceptions import AuthorizationError, ConflictError, NotFoundError
from staffboard.events.domain_events import LEAVE_APPLIED, LEAVE_DECIDED, DomainEvent, publish_event
from staffboard.models.enums import ApprovalStatus, DecisionStatus, Role
from staffboard.models.workflow import LeaveApply, LeaveDecision
from staffboard.repositories.leave_repo import LeaveRepository
from staffboard.repositories.people_repo import EmployeeRepository, ManagerRepository
from staffboard.services.id_generator import generate_id
from staffboard.services.notifications.projector import Viewer

logger = logging.getLogger(__name__)

router = APIRouter()


def _leave_dict(leave) -> dict:
    return {
        "leave_id": leave.leave_id,
        "user_id": leave.user_id,
        "leave_type": leave.leave_type,
        "start_date": leave.start_date.isoformat(),
        "end_date": leave.end_date.isoformat(),
        "reason": leave.reason,
        "status": leave.status,
        "manager_approval": leave.manager_approval,
        "director_approval": leave.director_approval,
        "comments": leave.comments,
    }


@router.post("/leaves", status_code=201)
async def apply_leave(
    body: LeaveApply,
    viewer: Viewer = Depends(require_role(Role.EMPLOYEE, Role.MANAGER)),
    db: AsyncSession = Depends(get_db),
) -> dict:
    leave = await LeaveRepository(db).create(
        leave_id=generate_id("leave_"),
        user_id=viewer.user_id,
        leave_type=body.leave_type,
        start_date=body.start_date,
        end_date=body.end_date,
        reason=body.reason,
        status=ApprovalStatus.PENDING.value,
        # a manager's own leave goes straight to their director
        manager_approval=(
            ApprovalStatus.APPROVED.value if viewer.role == Role.MANAGER else ApprovalStatus.PENDING.value
        ),
        director_approval=ApprovalStatus.PENDING.value,
    )
    await db.commit()
    result = _leave_dict(leave)

    await publish_event(DomainEvent(LEAVE_APPLIED, result["leave_id"], viewer.user_id), db)
    return result


async def _check_can_decide(db: AsyncSession, viewer: Viewer, applicant_id: str) -> None:
    if applicant_id == viewer.user_id:
        raise AuthorizationError("You cannot decide your own leave request")

    employee = await EmployeeRepository(db).get(applicant_id)
    if viewer.role == Role.MANAGER:
        if employee is None or employee.manager_id != viewer.user_id:
            raise AuthorizationError("Managers may only decide leaves of their direct reports")
        return

    if employee is not None:
        director_id = employee.director_id
        if director_id is None and employee.manager_id:
            manager = await ManagerRepository(db).get(employee.manager_id)
            director_id = manager.director_id if manager else None
    else:
        manager = await ManagerRepository(db).get(applicant_id)
        director_id = manager.director_id if manager else None
    if director_id != viewer.user_id:
        raise AuthorizationError("Directors may only decide leaves within their organisation")


@router.post("/leaves/{leave_id}/decision")
async def decide_leave(
    leave_id: str,
    body: LeaveDecision,
    viewer: Viewer = RequireApprover,
    db: AsyncSession = Depends(get_db),
) -> dict:
    repo = LeaveRepository(db)
    leave = await repo.get(leave_id)
    if leave is None:
        raise NotFoundError("Leave", leave_id)
    if leave.status != ApprovalStatus.PENDING:
        raise ConflictError(f"Leave request is already '{leave.status}'")

    await _check_can_decide(db, viewer, leave.user_id)

    changes: dict = {"comments": body.comments or leave.comments}
    if viewer.role == Role.MANAGER:
        changes["manager_approval"] = body.status.value
    else:
        changes["director_approval"] = body.status.value

    # either approver can reject; only the director's approval completes the request
    if body.status == DecisionStatus.REJECTED:
        changes["status"] = ApprovalStatus.REJECTED.value
    elif viewer.role == Role.DIRECTOR:
        changes["status"] = ApprovalStatus.APPROVED.value

    await repo.update(leave, **changes)
    await db.commit()
    logger.info("Leave %s %s by %s", leave_id, body.status.value, viewer.role.value)
    result = _leave_dict(leave)

    await publish_event(
        DomainEvent(
            LEAVE_DECIDED,
            leave_id,
            viewer.user_id,
            {"decider_role": viewer.role.value, "applicant_id": result["user_id"], "status": body.status.value},
        ),
        db,
    )
    return result
