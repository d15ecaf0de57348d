"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request

from staffboard.errors.exceptions import AuthenticationError, AuthorizationError
from staffboard.models.enums import Role
from staffboard.services.notifications.projector import Viewer


async def get_db(request: Request) -> AsyncGenerator:
    """Yield a database session from the app's session factory."""
    session_factory = request.app.state.db_session_factory
    async with session_factory() as session:
        yield session


async def get_current_user(request: Request) -> Viewer:
    """Return the authenticated caller as a Viewer or raise 401/403."""
    user = getattr(request.state, "user", {}) or {}
    if "_auth_error" in user:
        raise AuthenticationError(user["_auth_error"])
    if not user or user.get("sub") in ("anonymous", "", None):
        raise AuthenticationError("Authentication required")
    if "_role_error" in user or not user.get("role"):
        raise AuthorizationError(f"Invalid user role '{user.get('raw_role')}'")
    return Viewer(user_id=user["sub"], role=Role(user["role"]))


def require_role(*roles: Role):
    """Return a dependency that enforces one of the given roles."""

    async def _check(viewer: Viewer = Depends(get_current_user)) -> Viewer:
        if viewer.role not in roles:
            raise AuthorizationError(f"Requires one of: {', '.join(r.value for r in roles)}")
        return viewer

    return _check


# Type aliases for dependency injection
CurrentUser = Annotated[Viewer, Depends(get_current_user)]
RequireManager = Depends(require_role(Role.MANAGER))
RequireDirector = Depends(require_role(Role.DIRECTOR))
RequireApprover = Depends(require_role(Role.MANAGER, Role.DIRECTOR))
RequireEmployee = Depends(require_role(Role.EMPLOYEE))
