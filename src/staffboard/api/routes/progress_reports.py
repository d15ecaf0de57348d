"""Daily progress entries and progress reports with their review."""

import logging
from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.dependencies import RequireApprover, RequireEmployee, get_db
from staffboard.errors.exceptions import AuthorizationError, ConflictError, NotFoundError
from staffboard.events.domain_events import (
    DAILY_PROGRESS_SUBMITTED,
    PROGRESS_REPORT_REVIEWED,
    PROGRESS_REPORT_SUBMITTED,
    DomainEvent,
    publish_event,
)
from staffboard.models.enums import ApprovalStatus, Role
from staffboard.models.workflow import DailyProgressSubmit, ProgressReportReview, ProgressReportSubmit
from staffboard.repositories.people_repo import EmployeeRepository, ManagerRepository
from staffboard.repositories.progress_report_repo import DailyProgressRepository, ProgressReportRepository
from staffboard.services.id_generator import generate_id
from staffboard.services.notifications.projector import Viewer

logger = logging.getLogger(__name__)

router = APIRouter()


def _report_dict(report) -> dict:
    return {
        "report_id": report.report_id,
        "user_id": report.user_id,
        "report_date": report.report_date.isoformat(),
        "accomplishments": report.accomplishments,
        "challenges": report.challenges,
        "tomorrow_plan": report.tomorrow_plan,
        "task_completed": report.task_completed,
        "progress_percent": report.progress_percent,
        "status": report.status,
        "approved_by": report.approved_by,
        "approved_by_role": report.approved_by_role,
        "approved_at": report.approved_at.isoformat() if report.approved_at else None,
        "manager_feedback": report.manager_feedback,
    }


@router.post("/daily-progress", status_code=201)
async def submit_daily_progress(
    body: DailyProgressSubmit,
    viewer: Viewer = RequireEmployee,
    db: AsyncSession = Depends(get_db),
) -> dict:
    entry = await DailyProgressRepository(db).create(
        daily_progress_id=generate_id("dp_"),
        user_id=viewer.user_id,
        progress_date=body.date,
        content=body.content,
        comment=body.comment,
    )
    await db.commit()

    result = {
        "daily_progress_id": entry.daily_progress_id,
        "user_id": entry.user_id,
        "date": entry.progress_date.isoformat(),
        "content": entry.content,
        "comment": entry.comment,
        "status": entry.status,
    }
    await publish_event(DomainEvent(DAILY_PROGRESS_SUBMITTED, result["daily_progress_id"], viewer.user_id), db)
    return result


@router.post("/progress-reports", status_code=201)
async def submit_progress_report(
    body: ProgressReportSubmit,
    viewer: Viewer = RequireEmployee,
    db: AsyncSession = Depends(get_db),
) -> dict:
    report = await ProgressReportRepository(db).create(
        report_id=generate_id("rpt_"),
        user_id=viewer.user_id,
        report_date=body.report_date or date.today(),
        accomplishments=body.accomplishments,
        challenges=body.challenges,
        tomorrow_plan=body.tomorrow_plan,
        task_completed=list(body.tasks),
        progress_percent=body.progress_percent,
        status=ApprovalStatus.PENDING.value,
    )
    await db.commit()
    result = _report_dict(report)

    await publish_event(DomainEvent(PROGRESS_REPORT_SUBMITTED, result["report_id"], viewer.user_id), db)
    return result


async def _check_can_review(db: AsyncSession, viewer: Viewer, author_id: str) -> None:
    if author_id == viewer.user_id:
        raise AuthorizationError("You cannot review your own progress report")

    employee = await EmployeeRepository(db).get(author_id)
    if employee is None:
        raise NotFoundError("Employee", author_id)
    if viewer.role == Role.MANAGER:
        if employee.manager_id != viewer.user_id:
            raise AuthorizationError("Managers may only review reports of their direct reports")
        return

    director_id = employee.director_id
    if director_id is None and employee.manager_id:
        manager = await ManagerRepository(db).get(employee.manager_id)
        director_id = manager.director_id if manager else None
    if director_id != viewer.user_id:
        raise AuthorizationError("Directors may only review reports within their organisation")


@router.post("/progress-reports/{report_id}/review")
async def review_progress_report(
    report_id: str,
    body: ProgressReportReview,
    viewer: Viewer = RequireApprover,
    db: AsyncSession = Depends(get_db),
) -> dict:
    repo = ProgressReportRepository(db)
    report = await repo.get(report_id)
    if report is None:
        raise NotFoundError("Progress report", report_id)
    if report.status != ApprovalStatus.PENDING:
        raise ConflictError(f"Progress report is already '{report.status}'")

    await _check_can_review(db, viewer, report.user_id)

    await repo.update(
        report,
        status=body.status.value,
        approved_by=viewer.user_id,
        approved_by_role=viewer.role.value,
        approved_at=datetime.now(timezone.utc),
        manager_feedback=body.feedback,
    )
    await db.commit()
    logger.info("Progress report %s %s by %s", report_id, body.status.value, viewer.role.value)
    result = _report_dict(report)

    await publish_event(
        DomainEvent(
            PROGRESS_REPORT_REVIEWED,
            report_id,
            viewer.user_id,
            {"reviewer_role": viewer.role.value, "status": body.status.value},
        ),
        db,
    )
    return result
