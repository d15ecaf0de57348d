"""Tests for the notification reader: selection, enrichment and suppression."""

from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from staffboard.db.models.leave import LeaveRow
from staffboard.db.models.notification import NotificationRow
from staffboard.db.models.task import TaskRow
from staffboard.errors.exceptions import EnrichmentLookupError
from staffboard.models.enums import Role
from staffboard.repositories.leave_repo import LeaveRepository
from staffboard.services.notifications import NotificationReader, NotificationWriter, Recipient, Viewer

EMPLOYEE = Viewer("emp_1", Role.EMPLOYEE)
MANAGER = Viewer("mgr_1", Role.MANAGER)


async def _seed_leave(session, status="pending"):
    session.add(
        LeaveRow(
            leave_id="leave_1",
            user_id="emp_1",
            leave_type="sick",
            start_date=date(2024, 6, 3),
            end_date=date(2024, 6, 4),
            status=status,
        )
    )
    await NotificationWriter(session).write(
        "leave",
        "leave_1",
        "Leave request submitted by Employee 1 🗓️",
        "emp_1",
        [Recipient(Role.EMPLOYEE, "emp_1"), Recipient(Role.MANAGER, "mgr_1")],
    )
    await session.commit()


@pytest.mark.asyncio
async def test_applicant_sees_leave_only_after_decision(db_session):
    await _seed_leave(db_session)
    reader = NotificationReader(db_session)

    assert await reader.list_for(EMPLOYEE) == []
    manager_views = await reader.list_for(MANAGER)
    assert [v.message for v in manager_views] == ["Leave request submitted by Employee 1 🗓️"]

    leave = await LeaveRepository(db_session).get("leave_1")
    leave.status = "approved"
    await db_session.commit()

    views = await reader.list_for(EMPLOYEE)
    assert [v.message for v in views] == ["Your leave request has been approved ✅"]


@pytest.mark.asyncio
async def test_role_isolation(db_session):
    await _seed_leave(db_session)
    reader = NotificationReader(db_session)

    # same user id under a different role sees nothing
    assert await reader.list_for(Viewer("mgr_1", Role.DIRECTOR)) == []
    assert await reader.list_for(Viewer("mgr_2", Role.MANAGER)) == []


@pytest.mark.asyncio
async def test_deleted_rows_not_selected(db_session):
    await _seed_leave(db_session)
    row = (await NotificationReader(db_session).repo.list_for_recipient("manager", "mgr_1"))[0]
    row.manager_action = "deleted"
    await db_session.commit()

    assert await NotificationReader(db_session).list_for(MANAGER) == []


@pytest.mark.asyncio
async def test_stale_task_suppressed(db_session):
    db_session.add(TaskRow(task_id="task_live", title="Live task", user_id="emp_1", manager_id="mgr_1"))
    writer = NotificationWriter(db_session)
    for task_id in ("task_live", "task_gone"):
        await writer.write("task", task_id, task_id, "mgr_1", [Recipient(Role.EMPLOYEE, "emp_1")])
    await db_session.commit()

    views = await NotificationReader(db_session).list_for(EMPLOYEE)
    assert [v.source_id for v in views] == ["task_live"]
    assert views[0].message == "New task assigned to you: task_live"


@pytest.mark.asyncio
async def test_newest_first(db_session):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for offset, source_id in enumerate(("emp_a", "emp_b", "emp_c")):
        db_session.add(
            NotificationRow(
                notification_id=f"notif_{source_id}",
                type="welcome",
                source_id=source_id,
                message=source_id,
                employee_id="emp_1",
                employee_action="unread",
                created_at=base + timedelta(days=offset),
            )
        )
    await db_session.commit()

    views = await NotificationReader(db_session).list_for(EMPLOYEE)
    assert [v.source_id for v in views] == ["emp_c", "emp_b", "emp_a"]


@pytest.mark.asyncio
async def test_enrichment_failure_aborts_whole_listing(db_session, monkeypatch):
    await _seed_leave(db_session)
    await NotificationWriter(db_session).write(
        "welcome", "emp_1", "Welcome!", "mgr_1", [Recipient(Role.MANAGER, "mgr_1")]
    )
    await db_session.commit()

    async def _broken(self, leave_ids):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(LeaveRepository, "list_by_ids", _broken)

    with pytest.raises(EnrichmentLookupError) as exc_info:
        await NotificationReader(db_session).list_for(MANAGER)
    assert exc_info.value.source_type == "leave"
