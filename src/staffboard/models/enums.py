"""String enums shared by the API models, ORM rows and services."""

from enum import StrEnum


class Role(StrEnum):
    """Recipient roles; each maps to one slot on a notification row."""

    EMPLOYEE = "employee"
    MANAGER = "manager"
    DIRECTOR = "director"


class NotificationAction(StrEnum):
    UNREAD = "unread"
    READ = "read"
    DELETED = "deleted"


class NotificationType(StrEnum):
    """Known notification categories.

    Stored as a plain string column, so rows may carry types not listed here.
    """

    LEAVE = "leave"
    LEAVE_APPROVAL = "leave_approval"
    TASK = "task"
    TASK_PROGRESS = "task_progress"
    PROGRESS_UPDATE = "progress_update"
    PROGRESS_REPORT = "progress_report"
    PROGRESS_REPORT_REVIEW = "progress_report_review"
    PROJECT = "project"
    PROJECT_ASSIGNED = "project_assigned"
    DAILY_PROGRESS = "daily_progress"
    WELCOME = "welcome"


class ApprovalStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class DecisionStatus(StrEnum):
    """Values accepted from an approver."""

    APPROVED = "approved"
    REJECTED = "rejected"


class TaskStatus(StrEnum):
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class ProjectStatus(StrEnum):
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    REJECTED = "rejected"
    ACTIVE = "active"
    COMPLETED = "completed"


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
