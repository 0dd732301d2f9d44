"""Error Model — stable error codes, structured errors and the few exceptions the core raises.

Invariants:
    - Every expected business outcome is an Error value, never an exception
    - ErrorCode values are stable strings; callers branch on code, never on message
    - Failure messages are generic ("Failed to {verb} {entity}") and never carry raw exception text
    - Exceptions exist only at two seams: entity invariants (DomainValidationError)
      and the store boundary (StoreError and subclasses)

Design Decisions:
    - Frozen dataclasses: an Error can be shared between results and logs without copying
    - to_response() produces the REST envelope so the HTTP shell never reformats errors
"""

from dataclasses import dataclass, field
from enum import Enum


class ErrorCode(str, Enum):
    """Error taxonomy consumed by the HTTP shell and the UI."""
    UNAUTHORIZED = "Error.Unauthorized"
    VALIDATION = "Error.Validation"
    NOT_FOUND = "Error.NotFound"
    CONFLICT = "Error.Conflict"
    FORBIDDEN = "Error.Forbidden"
    FAILURE = "Error.Failure"


@dataclass(frozen=True)
class FieldViolation:
    """One validation finding. field is None for rules spanning several fields."""
    field: str | None
    message: str


@dataclass(frozen=True)
class Error:
    """Typed error carried by a Failure result."""
    code: ErrorCode
    message: str
    violations: tuple[FieldViolation, ...] = field(default=())

    @classmethod
    def unauthorized(cls, message: str) -> "Error":
        return cls(ErrorCode.UNAUTHORIZED, message)

    @classmethod
    def validation(cls, message: str, field_name: str | None = None) -> "Error":
        return cls(
            ErrorCode.VALIDATION, message,
            (FieldViolation(field_name, message),),
        )

    @classmethod
    def from_violations(cls, violations: list[FieldViolation]) -> "Error":
        """Collapse every violation of one command into a single Validation error."""
        message = "; ".join(v.message for v in violations)
        return cls(ErrorCode.VALIDATION, message, tuple(violations))

    @classmethod
    def not_found(cls, message: str) -> "Error":
        return cls(ErrorCode.NOT_FOUND, message)

    @classmethod
    def conflict(cls, message: str) -> "Error":
        return cls(ErrorCode.CONFLICT, message)

    @classmethod
    def forbidden(cls, message: str) -> "Error":
        return cls(ErrorCode.FORBIDDEN, message)

    @classmethod
    def failure(cls, verb: str, entity: str) -> "Error":
        return cls(ErrorCode.FAILURE, f"Failed to {verb} {entity}")

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "violations": [
                    {"field": v.field, "message": v.message}
                    for v in self.violations
                ],
            }
        }


# ─── Entity invariants ──────────────────────────────────────────

class DomainValidationError(ValueError):
    """Raised by entity factories and mutation methods when an invariant is broken."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


# ─── Store boundary (500/409-level) ─────────────────────────────

class StoreError(Exception):
    """Base for failures raised by store implementations."""

    def __init__(self, message: str, operation: str):
        super().__init__(message)
        self.message = message
        self.operation = operation


class UniquenessViolation(StoreError):
    """A write was rejected by a unique constraint (lost check-then-act race)."""

    def __init__(self, constraint: str | None = None, operation: str = "commit"):
        super().__init__(
            f"Unique constraint violated: {constraint or 'unknown'}", operation,
        )
        self.constraint = constraint


class DatabaseError(StoreError):
    """Database operation failed."""

    def __init__(self, message: str, operation: str):
        super().__init__(f"Database {operation} failed: {message}", operation)
