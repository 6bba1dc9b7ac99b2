"""
Service-level exceptions.

Each exception carries the HTTP status the API layer reports for it, so
services stay framework-agnostic while routers stay free of status logic.
"""


class ParticipantsError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(ParticipantsError):
    """Bad password, or missing/unknown session token."""

    status_code = 401


class BadRequest(ParticipantsError):
    """Request is missing a file or carries an unacceptable one."""

    status_code = 400


class InternalError(ParticipantsError):
    """Processing failed; details are logged, not returned."""

    status_code = 500
