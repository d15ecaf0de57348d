"""Exception classes for the StaffBoard API."""


class StaffBoardError(Exception):
    """Base exception for StaffBoard."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(StaffBoardError):
    """Request validation failure."""

    def __init__(self, message: str, details=None):
        super().__init__("VALIDATION_ERROR", message, details, status_code=400)


class NotFoundError(StaffBoardError):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            "NOT_FOUND",
            f"{resource} '{resource_id}' not found",
            status_code=404,
        )


class AuthenticationError(StaffBoardError):
    """Bearer token missing, malformed or expired."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__("AUTHENTICATION_ERROR", message, status_code=401)


class AuthorizationError(StaffBoardError):
    """Role not recognized or not allowed for the operation."""

    def __init__(self, message: str = "Access denied: insufficient permissions"):
        super().__init__("AUTHORIZATION_ERROR", message, status_code=403)


class ConflictError(StaffBoardError):
    """Resource state conflict."""

    def __init__(self, message: str):
        super().__init__("CONFLICT", message, status_code=409)


class EnrichmentLookupError(StaffBoardError):
    """A batch fetch of source entities failed while projecting notifications."""

    def __init__(self, source_type: str, details=None):
        super().__init__(
            "ENRICHMENT_LOOKUP_ERROR",
            "Failed to load notifications, please try again",
            details or {"source_type": source_type},
            status_code=500,
        )
        self.source_type = source_type


class NotificationWriteError(StaffBoardError):
    """Writing a notification row failed. Never surfaced to clients."""

    def __init__(self, event_type: str, source_id: str):
        super().__init__(
            "NOTIFICATION_WRITE_FAILED",
            f"Could not write notification for {event_type} '{source_id}'",
            status_code=500,
        )
        self.event_type = event_type
        self.source_id = source_id
