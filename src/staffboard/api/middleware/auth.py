"""JWT Bearer authentication middleware."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from staffboard.errors.exceptions import AuthorizationError
from staffboard.logging_config import bind_request_context
from staffboard.security import decode_access_token
from staffboard.services.roles import normalize_role

logger = logging.getLogger(__name__)

# Paths that do not require authentication
_PUBLIC_PATHS = {
    "/api/v1/health",
    "/api/v1/server-config",
    "/docs",
    "/openapi.json",
    "/redoc",
}

_ANONYMOUS = {"sub": "anonymous", "role": None, "raw_role": None}


class AuthMiddleware(BaseHTTPMiddleware):
    """Validate the Bearer token and attach ``{sub, role}`` to request.state.user.

    Rejection happens in the ``get_current_user`` dependency so that error
    responses go through the regular exception handlers.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path

        if path in _PUBLIC_PATHS or path.startswith("/docs") or path.startswith("/redoc"):
            request.state.user = dict(_ANONYMOUS)
            return await call_next(request)

        auth_header = request.headers.get("authorization", "")
        if auth_header.startswith("Bearer "):
            user_info = self._validate_jwt(auth_header[7:])
        else:
            user_info = {**_ANONYMOUS, "_auth_error": "Authorization token missing or malformed"}

        request.state.user = user_info
        if "_auth_error" not in user_info:
            bind_request_context(
                getattr(request.state, "trace_id", "trc_unknown"),
                user_id=user_info["sub"],
                role=user_info["role"],
            )
        return await call_next(request)

    def _validate_jwt(self, token: str) -> dict:
        try:
            payload = decode_access_token(token)
        except ValueError:
            return {**_ANONYMOUS, "_auth_error": "Invalid or expired token"}

        if payload.get("type") != "access":
            return {**_ANONYMOUS, "_auth_error": "Not an access token"}
        if not payload.get("sub"):
            return {**_ANONYMOUS, "_auth_error": "Token has no subject"}

        raw_role = payload.get("role")
        try:
            role = normalize_role(raw_role).value
        except AuthorizationError:
            logger.warning("Rejected token with unknown role %r", raw_role)
            return {"sub": payload["sub"], "role": None, "raw_role": raw_role, "_role_error": "Invalid user role"}

        return {"sub": payload["sub"], "role": role, "raw_role": raw_role}
