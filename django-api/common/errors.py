"""Domain error codes shared by the console apps.

Every error raised by a service is a DomainError. Handlers never inspect
exception types beyond this module; the DRF exception handler maps the code
to an HTTP status.
"""

from dataclasses import dataclass, field
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_ID = "INVALID_ID"
    NOT_FOUND = "NOT_FOUND"
    UPLOAD_FAILED = "UPLOAD_FAILED"
    WRITE_FAILED = "WRITE_FAILED"
    CONFLICT = "CONFLICT"
    ACTIVE_SLOT_TAKEN = "ACTIVE_SLOT_TAKEN"
    ENTITY_IN_USE = "ENTITY_IN_USE"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when a submission is rejected before any network call."""

    def __init__(self, message: str, field_name: str | None = None) -> None:
        super().__init__(code=ErrorCode.VALIDATION_FAILED, message=message)
        self.field_name = field_name


class InvalidIdError(DomainError):
    """Raised when an identifier is not a valid UUID or integer key."""

    def __init__(self, entity: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ID,
            message=f"Invalid {entity} ID format",
        )
        self.entity = entity


class NotFoundError(DomainError):
    """Raised when a referenced row does not exist."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message=f"{entity.capitalize()} not found",
        )
        self.entity = entity
        self.entity_id = entity_id


class UploadError(DomainError):
    """Raised when the object store rejects an upload.

    `orphaned_urls` lists assets that were uploaded successfully in the same
    run before the failure was observed. They are left in the object store.
    """

    def __init__(self, message: str, orphaned_urls: tuple[str, ...] = ()) -> None:
        super().__init__(code=ErrorCode.UPLOAD_FAILED, message=message)
        self.orphaned_urls = orphaned_urls


class WriteError(DomainError):
    """Raised when the relational store rejects an insert or update."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.WRITE_FAILED, message=message)


class ConflictError(DomainError):
    """Raised when a write would break a cross-row invariant."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.CONFLICT) -> None:
        super().__init__(code=code, message=message)


class ActiveSlotTakenError(ConflictError):
    """Raised when activating a row while another row of its kind is active."""

    def __init__(self, kind: str, incumbent_id: object | None = None) -> None:
        super().__init__(
            f"Only one {kind} can be active at a time. "
            f"Deactivate the current {kind} first.",
            code=ErrorCode.ACTIVE_SLOT_TAKEN,
        )
        self.kind = kind
        self.incumbent_id = incumbent_id


class EntityInUseError(ConflictError):
    """Raised when deleting an entity whose usage counter is non-zero."""

    def __init__(self, entity: str, usage: int, unit: str) -> None:
        super().__init__(
            f"Cannot delete {entity}: {usage} {unit} still reference it. "
            f"Disable it instead.",
            code=ErrorCode.ENTITY_IN_USE,
        )
        self.entity = entity
        self.usage = usage


class InvalidTransitionError(ConflictError):
    """Raised when a status change is not an edge of the lifecycle graph."""

    def __init__(self, entity: str, current: str, target: str) -> None:
        super().__init__(
            f"Cannot move {entity} from {current} to {target}",
            code=ErrorCode.INVALID_TRANSITION,
        )
        self.current = current
        self.target = target


class NotAuthenticatedError(DomainError):
    """Raised when a write needs an author and no user is signed in."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NOT_AUTHENTICATED,
            message="Not authenticated",
        )


@dataclass(frozen=True)
class ErrorPayload:
    """User-visible rendering of a DomainError."""

    code: str
    message: str
    details: dict = field(default_factory=dict)

    @classmethod
    def from_error(cls, error: DomainError) -> "ErrorPayload":
        details = {}
        field_name = getattr(error, "field_name", None)
        if field_name:
            details["field"] = field_name
        return cls(code=error.code.value, message=error.message, details=details)

    def as_dict(self) -> dict:
        body = {"code": self.code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body
