from __future__ import annotations


class OvertimeError(Exception):
    """Base class for errors reported back to API callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(OvertimeError):
    status_code = 400


class SessionNotFoundError(OvertimeError):
    status_code = 404

    def __init__(self, session_id: str, message: str = "Session not found") -> None:
        super().__init__(message)
        self.session_id = session_id


class SessionNotActiveError(SessionNotFoundError):
    """Raised when stopping a session that already ended."""

    def __init__(self, session_id: str) -> None:
        super().__init__(session_id, "Session not active")
