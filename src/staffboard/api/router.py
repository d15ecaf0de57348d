"""Master API router mounted at /api/v1."""

from fastapi import APIRouter
from staffboard.api.routes import (
    employees,
    health,
    leaves,
    notifications,
    progress_reports,
    projects,
    tasks,
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(notifications.router, tags=["Notifications"])
api_router.include_router(employees.router, tags=["Employees"])
api_router.include_router(leaves.router, tags=["Leaves"])
api_router.include_router(tasks.router, tags=["Tasks"])
api_router.include_router(progress_reports.router, tags=["Progress Reports"])
api_router.include_router(projects.router, tags=["Projects"])
