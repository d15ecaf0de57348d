"""StaffBoard: role-scoped notifications for the HR/project portal."""

__version__ = "1.0.0"
