"""Health check endpoints."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from staffboard import __version__
from staffboard.config import settings

router = APIRouter()


@router.get("/server-config", include_in_schema=False)
async def server_config():
    """Return non-sensitive server flags needed by the frontend UI."""
    return {
        "local_mode": settings.local_mode,
        "notification_poll_interval_seconds": settings.notification_poll_interval_seconds,
    }


@router.get("/health")
async def health_check():
    return {"status": "healthy", "service": "staffboard-api", "version": __version__}


@router.get("/health/live")
async def liveness():
    """Liveness probe: 200 whenever the process is serving."""
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness(request: Request):
    """Readiness probe: checks database connectivity."""
    checks: dict[str, str] = {}
    overall_ok = True

    try:
        session_factory = request.app.state.db_session_factory
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as exc:
        checks["database"] = f"error: {exc}"
        overall_ok = False

    status_code = 200 if overall_ok else 503
    return JSONResponse(
        status_code=status_code,
        content={"status": "ready" if overall_ok else "not_ready", "checks": checks},
    )
