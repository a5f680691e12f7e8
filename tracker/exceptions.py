"""
Tracker exception hierarchy.

Services raise these; ``tracker.main`` registers one handler that renders
them as ``{"detail": ..., "reason": ...}`` with the matching status code.
"""
from typing import Optional


class TrackerError(Exception):
    status_code = 400
    reason = "error"

    def __init__(self, message: str, reason: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if reason is not None:
            self.reason = reason


class AuthenticationError(TrackerError):
    """Missing, malformed or expired credentials."""

    status_code = 401
    reason = "not_authenticated"


class AuthorizationError(TrackerError):
    """The caller is known but their role is insufficient.

    When ``required`` is given the message states the required and the
    actual role, e.g. ``"Requires editor permission (you have viewer)"``.
    """

    status_code = 403
    reason = "forbidden"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        required: Optional[str] = None,
        actual: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> None:
        self.required = required
        self.actual = actual
        if message is None:
            message = f"Requires {required} permission (you have {actual or 'no access'})"
        super().__init__(message, reason or ("insufficient_permission" if required else None))


class NotFoundError(TrackerError):
    status_code = 404
    reason = "not_found"

    def __init__(self, resource: str, resource_id=None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found")


class ValidationError(TrackerError):
    status_code = 400
    reason = "validation_error"


class ConflictError(TrackerError):
    """Duplicate share or link. Reported as 400, like other input errors."""

    status_code = 400
    reason = "conflict"
