"""End-to-end tests: business operations publish events that the feed reflects."""

import pytest
from sqlalchemy import func, select

from staffboard.db.models.leave import LeaveRow
from staffboard.db.models.notification import NotificationRow

LEAVE_BODY = {"leave_type": "casual", "start_date": "2024-06-10", "end_date": "2024-06-12"}


async def _feed(client, headers, user_id, role):
    resp = await client.get("/api/v1/notifications", headers=headers(user_id, role))
    assert resp.status_code == 200
    return resp.json()["notifications"]


async def _count_rows(app, notification_type):
    async with app.state.db_session_factory() as session:
        result = await session.execute(
            select(func.count()).select_from(NotificationRow).where(NotificationRow.type == notification_type)
        )
        return result.scalar_one()


async def _create_director_project(client, headers, assigned=("mgr_2",)):
    resp = await client.post(
        "/api/v1/projects",
        json={
            "title": "Apollo",
            "start_date": "2024-07-01",
            "manager_id": "mgr_1",
            "assigned_managers": list(assigned),
        },
        headers=headers("dir_1", "director"),
    )
    assert resp.status_code == 201
    return resp.json()


@pytest.mark.asyncio
async def test_onboarding_sends_welcome(client, headers, people):
    resp = await client.post(
        "/api/v1/employees",
        json={"name": "New Hire", "email": "New.Hire@example.com", "role": "Intern"},
        headers=headers("mgr_1", "manager"),
    )
    assert resp.status_code == 201
    employee = resp.json()
    assert employee["manager_id"] == "mgr_1"
    assert employee["director_id"] == "dir_1"

    items = await _feed(client, headers, employee["employee_id"], "intern")
    assert [i["message"] for i in items] == ["Welcome to the team, New Hire! 👋"]
    assert items[0]["actionUrl"] is None


@pytest.mark.asyncio
async def test_onboarding_duplicate_email_conflicts(client, headers, people):
    resp = await client.post(
        "/api/v1/employees",
        json={"name": "Copy", "email": "emp1@example.com"},
        headers=headers("mgr_1", "manager"),
    )
    assert resp.status_code == 409


class TestLeaveFlow:
    @pytest.mark.asyncio
    async def test_manager_then_director_approval(self, app, client, headers, people):
        resp = await client.post("/api/v1/leaves", json=LEAVE_BODY, headers=headers("emp_1", "employee"))
        leave_id = resp.json()["leave_id"]
        assert await _count_rows(app, "leave") == 1

        resp = await client.post(
            f"/api/v1/leaves/{leave_id}/decision",
            json={"status": "approved"},
            headers=headers("mgr_1", "manager"),
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "pending"
        assert resp.json()["manager_approval"] == "approved"

        # still pending for the applicant
        assert await _feed(client, headers, "emp_1", "employee") == []
        director_items = await _feed(client, headers, "dir_1", "director")
        assert {i["type"] for i in director_items} == {"leave", "leave_approval"}
        approval = next(i for i in director_items if i["type"] == "leave_approval")
        assert approval["message"] == "Manager 1 approved the leave request of Employee 1"

        resp = await client.post(
            f"/api/v1/leaves/{leave_id}/decision",
            json={"status": "approved", "comments": "enjoy"},
            headers=headers("dir_1", "director"),
        )
        assert resp.json()["status"] == "approved"

        items = await _feed(client, headers, "emp_1", "employee")
        assert [i["message"] for i in items] == ["Your leave request has been approved ✅"]

    @pytest.mark.asyncio
    async def test_manager_rejection_is_final(self, client, headers, people):
        resp = await client.post("/api/v1/leaves", json=LEAVE_BODY, headers=headers("emp_2", "employee"))
        leave_id = resp.json()["leave_id"]

        resp = await client.post(
            f"/api/v1/leaves/{leave_id}/decision",
            json={"status": "rejected"},
            headers=headers("mgr_1", "manager"),
        )
        assert resp.json()["status"] == "rejected"
        items = await _feed(client, headers, "emp_2", "employee")
        assert [i["message"] for i in items] == ["Your leave request has been rejected ❌"]

        resp = await client.post(
            f"/api/v1/leaves/{leave_id}/decision",
            json={"status": "approved"},
            headers=headers("dir_1", "director"),
        )
        assert resp.status_code == 409

    @pytest.mark.asyncio
    async def test_other_manager_cannot_decide(self, client, headers, people):
        resp = await client.post("/api/v1/leaves", json=LEAVE_BODY, headers=headers("emp_1", "employee"))
        resp = await client.post(
            f"/api/v1/leaves/{resp.json()['leave_id']}/decision",
            json={"status": "approved"},
            headers=headers("mgr_2", "manager"),
        )
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_employee_cannot_decide(self, client, headers, people):
        resp = await client.post("/api/v1/leaves", json=LEAVE_BODY, headers=headers("emp_1", "employee"))
        resp = await client.post(
            f"/api/v1/leaves/{resp.json()['leave_id']}/decision",
            json={"status": "approved"},
            headers=headers("emp_2", "employee"),
        )
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_invalid_range_is_400(self, client, headers, people):
        body = {**LEAVE_BODY, "end_date": "2024-06-01"}
        resp = await client.post("/api/v1/leaves", json=body, headers=headers("emp_1", "employee"))
        assert resp.status_code == 400


class TestProjectFlow:
    @pytest.mark.asyncio
    async def test_submission_and_approval_for_three_managers(self, app, client, headers, people):
        resp = await client.post(
            "/api/v1/projects",
            json={"title": "Zephyr", "start_date": "2024-07-01"},
            headers=headers("mgr_1", "manager"),
        )
        assert resp.status_code == 201
        project = resp.json()
        assert project["status"] == "pending_approval"
        assert project["director_id"] == "dir_1"

        director_items = await _feed(client, headers, "dir_1", "director")
        assert [i["message"] for i in director_items] == ["Project 'Zephyr' needs your attention 📁"]
        manager_items = await _feed(client, headers, "mgr_1", "manager")
        assert [i["message"] for i in manager_items] == ["Project 'Zephyr' is pending approval"]

        resp = await client.post(
            f"/api/v1/projects/{project['project_id']}/decision",
            json={"status": "approved", "priority": "high", "assigned_managers": ["mgr_2", "mgr_3"]},
            headers=headers("dir_1", "director"),
        )
        assert resp.status_code == 200
        assert resp.json()["assigned_managers"] == ["mgr_1", "mgr_2", "mgr_3"]

        assert await _count_rows(app, "project") == 3
        for manager_id in ("mgr_1", "mgr_2", "mgr_3"):
            items = await _feed(client, headers, manager_id, "manager")
            assert [i["message"] for i in items] == ["Project 'Zephyr' has been approved ✅"]

        # one manager deleting does not hide it from the others
        resp = await client.put(
            "/api/v1/notifications/delete",
            json={"type": "project", "sourceId": project["project_id"]},
            headers=headers("mgr_2", "manager"),
        )
        assert resp.status_code == 200
        assert await _feed(client, headers, "mgr_2", "manager") == []
        assert len(await _feed(client, headers, "mgr_3", "manager")) == 1

    @pytest.mark.asyncio
    async def test_approval_requires_priority(self, client, headers, people):
        resp = await client.post(
            "/api/v1/projects",
            json={"title": "Zephyr", "start_date": "2024-07-01"},
            headers=headers("mgr_1", "manager"),
        )
        resp = await client.post(
            f"/api/v1/projects/{resp.json()['project_id']}/decision",
            json={"status": "approved"},
            headers=headers("dir_1", "director"),
        )
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_director_created_project_notifies_each_manager(self, client, headers, people):
        project = await _create_director_project(client, headers, assigned=("mgr_2", "mgr_3"))
        assert project["status"] == "approved"

        for manager_id in ("mgr_1", "mgr_2", "mgr_3"):
            items = await _feed(client, headers, manager_id, "manager")
            assert [i["type"] for i in items] == ["project_assigned"]
            assert items[0]["message"] == "You have been assigned to project 'Apollo'"
            assert items[0]["actionUrl"] == f"/projects/{project['project_id']}"

    @pytest.mark.asyncio
    async def test_director_create_requires_managers(self, client, headers, people):
        resp = await client.post(
            "/api/v1/projects",
            json={"title": "Apollo", "start_date": "2024-07-01"},
            headers=headers("dir_1", "director"),
        )
        assert resp.status_code == 400


class TestTaskFlow:
    @pytest.mark.asyncio
    async def test_assignment_and_progress(self, client, headers, people):
        project = await _create_director_project(client, headers)
        resp = await client.post(
            "/api/v1/tasks/assign",
            json={"project_id": project["project_id"], "employee_ids": ["emp_1", "emp_2"], "title": "Wireframes"},
            headers=headers("mgr_1", "manager"),
        )
        assert resp.status_code == 201
        tasks = resp.json()["tasks"]
        assert len(tasks) == 2

        for employee_id in ("emp_1", "emp_2"):
            items = await _feed(client, headers, employee_id, "employee")
            assert [i["message"] for i in items] == ["New task assigned to you: Wireframes"]

        task_id = next(t["task_id"] for t in tasks if t["user_id"] == "emp_1")
        resp = await client.put(
            f"/api/v1/tasks/{task_id}/progress", json={"progress": 40}, headers=headers("emp_1", "employee")
        )
        assert resp.json()["status"] == "in_progress"
        items = await _feed(client, headers, "mgr_1", "manager")
        update = next(i for i in items if i["type"] == "progress_update")
        assert update["message"] == "Task 'Wireframes' is in progress (40% complete)"

        await client.put(
            "/api/v1/notifications/read",
            json={"type": "progress_update", "sourceId": task_id},
            headers=headers("mgr_1", "manager"),
        )
        await client.put(
            f"/api/v1/tasks/{task_id}/progress", json={"progress": 100}, headers=headers("emp_1", "employee")
        )
        items = await _feed(client, headers, "mgr_1", "manager")
        updates = [i for i in items if i["type"] == "progress_update"]
        assert len(updates) == 1
        assert updates[0]["message"] == "Task 'Wireframes' is completed (100% complete)"
        assert updates[0]["read"] is False

    @pytest.mark.asyncio
    async def test_only_assignee_updates_progress(self, client, headers, people):
        project = await _create_director_project(client, headers)
        resp = await client.post(
            "/api/v1/tasks/assign",
            json={"project_id": project["project_id"], "employee_ids": ["emp_1"]},
            headers=headers("mgr_1", "manager"),
        )
        task_id = resp.json()["tasks"][0]["task_id"]
        resp = await client.put(
            f"/api/v1/tasks/{task_id}/progress", json={"progress": 10}, headers=headers("emp_2", "employee")
        )
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_assign_on_unapproved_project_conflicts(self, client, headers, people):
        resp = await client.post(
            "/api/v1/projects",
            json={"title": "Zephyr", "start_date": "2024-07-01"},
            headers=headers("mgr_1", "manager"),
        )
        resp = await client.post(
            "/api/v1/tasks/assign",
            json={"project_id": resp.json()["project_id"], "employee_ids": ["emp_1"]},
            headers=headers("mgr_1", "manager"),
        )
        assert resp.status_code == 409


class TestProgressReports:
    @pytest.mark.asyncio
    async def test_submit_and_review(self, client, headers, people):
        resp = await client.post(
            "/api/v1/progress-reports",
            json={"accomplishments": "Shipped the login page", "progress_percent": 60},
            headers=headers("emp_1", "employee"),
        )
        assert resp.status_code == 201
        report_id = resp.json()["report_id"]

        assert await _feed(client, headers, "emp_1", "employee") == []
        for user_id, role in (("mgr_1", "manager"), ("dir_1", "director")):
            items = await _feed(client, headers, user_id, role)
            assert [i["message"] for i in items] == ["New progress report submitted 📄"]
            assert items[0]["actionUrl"] == f"/reports/{report_id}"

        resp = await client.post(
            f"/api/v1/progress-reports/{report_id}/review",
            json={"status": "approved", "feedback": "great"},
            headers=headers("mgr_1", "manager"),
        )
        assert resp.status_code == 200
        assert resp.json()["approved_by_role"] == "manager"

        items = await _feed(client, headers, "emp_1", "employee")
        assert [i["message"] for i in items] == ["Your progress report has been approved ✅"]
        director_types = {i["type"] for i in await _feed(client, headers, "dir_1", "director")}
        assert director_types == {"progress_report", "progress_report_review"}

        resp = await client.post(
            f"/api/v1/progress-reports/{report_id}/review",
            json={"status": "rejected"},
            headers=headers("dir_1", "director"),
        )
        assert resp.status_code == 409

    @pytest.mark.asyncio
    async def test_daily_progress_notifies_manager(self, client, headers, people):
        resp = await client.post(
            "/api/v1/daily-progress",
            json={"date": "2024-06-05", "comment": "Fixed two bugs"},
            headers=headers("emp_3", "employee"),
        )
        assert resp.status_code == 201
        entry_id = resp.json()["daily_progress_id"]

        items = await _feed(client, headers, "mgr_2", "manager")
        assert [i["message"] for i in items] == ["Daily progress submitted by Employee 3 📝"]
        assert items[0]["actionUrl"] == f"/daily-progress/{entry_id}"
        assert await _feed(client, headers, "mgr_1", "manager") == []


@pytest.mark.asyncio
async def test_notification_failure_does_not_undo_business_write(app, client, headers, people, monkeypatch, caplog):
    import staffboard.events.notification_consumer as consumer

    async def _explode(event, session):
        raise RuntimeError("notification store unavailable")

    monkeypatch.setattr(consumer, "handle_event", _explode)

    resp = await client.post("/api/v1/leaves", json=LEAVE_BODY, headers=headers("emp_1", "employee"))
    assert resp.status_code == 201
    leave_id = resp.json()["leave_id"]

    async with app.state.db_session_factory() as session:
        assert await session.get(LeaveRow, leave_id) is not None
    assert await _count_rows(app, "leave") == 0
    assert "notification_write_failed" in caplog.text
