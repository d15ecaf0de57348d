"""SQLAlchemy ORM models - import all to register with Base.metadata."""

from staffboard.db.models.people import DirectorRow, EmployeeRow, ManagerRow
from staffboard.db.models.leave import LeaveRow
from staffboard.db.models.task import TaskRow
from staffboard.db.models.progress_report import DailyProgressRow, ProgressReportRow
from staffboard.db.models.project import ProjectAssigneeRow, ProjectRow
from staffboard.db.models.notification import NotificationRow

__all__ = [
    "DirectorRow",
    "ManagerRow",
    "EmployeeRow",
    "LeaveRow",
    "TaskRow",
    "ProgressReportRow",
    "DailyProgressRow",
    "ProjectRow",
    "ProjectAssigneeRow",
    "NotificationRow",
]
