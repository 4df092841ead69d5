"""Engine error taxonomy.

Every failure the engine detects locally is raised as a subclass of
``EngineError`` carrying a machine code, an HTTP status and a details dict
that is rich enough to build a field-level error in a client.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    TRIP_LOCKED = "TRIP_LOCKED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class EngineError(Exception):
    """Base exception for the itinerary and budget engine."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: dict[str, Any] | None = None,
        status_code: int = 500,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class ValidationError(EngineError):
    """Raised for malformed or inconsistent input.

    ``field`` is a dotted path such as ``stops[2].city_id``; ``index`` is the
    offending stop position when the failure is stop-specific.
    """

    def __init__(self, message: str, field: str | None = None, index: int | None = None) -> None:
        details: dict[str, Any] = {}
        if field is not None:
            details["field"] = field
        if index is not None:
            details["index"] = index
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details=details,
            status_code=400,
        )
        self.field = field
        self.index = index


class ForbiddenError(EngineError):
    """Raised on ownership, role or copy-eligibility violations."""

    def __init__(self, message: str = "Forbidden", details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            error_code=ErrorCode.FORBIDDEN,
            details=details,
            status_code=403,
        )


class LockedTripError(ForbiddenError):
    """Raised when a non-admin attempts to mutate a locked trip."""

    def __init__(self, trip_id: Any) -> None:
        super().__init__(
            message="Trip is locked and cannot be edited",
            details={"trip_id": str(trip_id)},
        )
        self.error_code = ErrorCode.TRIP_LOCKED


class NotFoundError(EngineError):
    """Raised when a trip, share link or catalog reference does not exist."""

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(
            message=f"{entity_type.capitalize()} not found",
            error_code=ErrorCode.NOT_FOUND,
            details={"entity_type": entity_type, "entity_id": str(entity_id)},
            status_code=404,
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class ConflictError(EngineError):
    """Raised when a uniqueness rule (one share link per trip) would break."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            error_code=ErrorCode.CONFLICT,
            details=details,
            status_code=409,
        )


class InternalError(EngineError):
    """Unexpected failure inside a multi-row operation; nothing was persisted.

    Callers must treat it as non-retryable without investigation.
    """

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            message=f"{operation} failed",
            error_code=ErrorCode.INTERNAL_ERROR,
            details={"operation": operation, "reason": reason},
            status_code=500,
        )
        self.operation = operation
