from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations.

    ``code`` is the machine readable kind returned to API callers so the UI can
    tell failures apart; ``http_status`` is the status the controller answers with.
    """

    code = "DOMAIN_ERROR"
    http_status = 400

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    default_message = "Request could not be processed"

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "VALIDATION_ERROR"
    default_message = "Invalid input"


class MissingLocation(ValidationError):
    code = "MISSING_LOCATION"
    default_message = "Location coordinates are required"


class ConflictError(DomainError):
    """Check-in/check-out precondition violated."""

    code = "CONFLICT"
    http_status = 409


class AlreadyCheckedIn(ConflictError):
    code = "ALREADY_CHECKED_IN"
    default_message = "You have already checked in today"


class AlreadyCheckedOut(ConflictError):
    code = "ALREADY_CHECKED_OUT"
    default_message = "You have already checked out today"


class NotCheckedIn(ConflictError):
    code = "NOT_CHECKED_IN"
    default_message = "You must check in first before checking out"


class PolicyRejection(DomainError):
    code = "POLICY_REJECTION"
    http_status = 403


class LocationOutsideOffice(PolicyRejection):
    code = "LOCATION_OUTSIDE_OFFICE"
    default_message = "You must be within the office premises to clock in"


class DependencyError(DomainError):
    """Persistence layer unavailable or inconsistent. Callers may retry."""

    code = "DEPENDENCY_ERROR"
    http_status = 503
    default_message = "Attendance store is unavailable, please retry"


class DuplicateRecordError(DomainError):
    """A unique (user_id, work_date) key was violated by an insert."""

    code = "DUPLICATE_RECORD"
    http_status = 409
    default_message = "Attendance record already exists"


class AuthenticationError(DomainError):
    """Raised when no authenticated identity is attached to the request."""

    code = "UNAUTHENTICATED"
    http_status = 401
    default_message = "Authentication required"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "FORBIDDEN"
    http_status = 403
    default_message = "You do not have permission for this action"
