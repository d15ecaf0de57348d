"""Request models for the business operations that raise notifications."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

from staffboard.models.enums import DecisionStatus, Priority


class EmployeeOnboard(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=320)
    role: str = "employee"
    department: str | None = None
    manager_id: str | None = None


class LeaveApply(BaseModel):
    model_config = ConfigDict(extra="forbid")

    leave_type: str = Field(..., min_length=1, max_length=50)
    start_date: date
    end_date: date
    reason: str | None = None

    @model_validator(mode="after")
    def _check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class LeaveDecision(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: DecisionStatus
    comments: str | None = None


class TaskAssign(BaseModel):
    model_config = ConfigDict(extra="forbid")

    project_id: str
    employee_ids: list[str] = Field(..., min_length=1)
    title: str | None = None
    description: str | None = None
    due_date: date | None = None


class TaskProgressUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    progress: int = Field(..., ge=0, le=100)


class DailyProgressSubmit(BaseModel):
    model_config = ConfigDict(extra="forbid")

    date: date
    comment: str = Field(..., min_length=1)
    content: str | None = None


class ProgressReportSubmit(BaseModel):
    model_config = ConfigDict(extra="forbid")

    accomplishments: str = Field(..., min_length=1)
    report_date: date | None = None
    challenges: str | None = None
    tomorrow_plan: str | None = None
    tasks: list[str] = Field(default_factory=list)
    progress_percent: int = Field(0, ge=0, le=100)


class ProgressReportReview(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: DecisionStatus
    feedback: str | None = None


class ProjectCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=300)
    description: str | None = None
    start_date: date
    end_date: date | None = None
    priority: Priority | None = None
    # director-created projects only
    manager_id: str | None = None
    assigned_managers: list[str] = Field(default_factory=list)


class ProjectDecision(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: DecisionStatus
    priority: Priority | None = None
    approval_comments: str | None = None
    # extra managers to staff the project with when approving
    assigned_managers: list[str] = Field(default_factory=list)
