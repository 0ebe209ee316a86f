"""
errors.py — Error taxonomy shared by services and routes.
Services raise these; main.py maps them onto HTTP responses.
"""


class HabitFlowError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(HabitFlowError):
    """Client-checkable input violation. Raised before any backend call."""

    status_code = 422


class AuthenticationError(HabitFlowError):
    """No authenticated identity where one is required."""

    status_code = 401


class BackendOperationError(HabitFlowError):
    """Any failure reported by the data store, message passed through."""

    status_code = 502


class NotFoundError(HabitFlowError):
    """The referenced row does not exist for this user."""

    status_code = 404
