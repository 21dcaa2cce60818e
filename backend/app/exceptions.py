"""Domain errors.

Every error a service can raise carries an HTTP status and a machine-readable
``kind``; ``app.main`` turns them into ``{"kind": ..., "detail": ...}`` responses.
"""


class MatesRaceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    kind: str = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnauthenticatedError(MatesRaceError):
    """No caller identity, an unusable one, or a wrong race password."""

    status_code = 401
    kind = "UNAUTHENTICATED"


class ForbiddenError(MatesRaceError):
    """Authenticated, but not entitled to the action."""

    status_code = 403
    kind = "FORBIDDEN"


class NotFoundError(MatesRaceError):
    """Race, participant or user does not exist."""

    status_code = 404
    kind = "NOT_FOUND"


class RequestValidationFailed(MatesRaceError):
    """Malformed or missing input."""

    status_code = 400
    kind = "VALIDATION_ERROR"


class ConflictError(MatesRaceError):
    """Duplicate participation."""

    status_code = 409
    kind = "CONFLICT"


class UpstreamError(MatesRaceError):
    """The Strava API failed or returned an unusable body."""

    status_code = 502
    kind = "UPSTREAM_ERROR"


class InternalError(MatesRaceError):
    """Persistence failure."""

    status_code = 500
    kind = "INTERNAL_ERROR"
