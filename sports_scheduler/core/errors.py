"""Error Hierarchy — typed, categorized exceptions for all scheduler failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors are scoped to one request; none is fatal to the process
    - InvalidStateError and ConflictError share the BlockReason code space, so a
      lost write-time race renders exactly like the matching pre-check refusal
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SchedulerError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from sports_scheduler.core.domain_types import BlockReason


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


REASON_MESSAGES: dict[BlockReason, str] = {
    BlockReason.SESSION_NOT_FOUND: "Session not found",
    BlockReason.SESSION_PAST: "Session has already taken place",
    BlockReason.SESSION_CANCELLED: "Session has been cancelled",
    BlockReason.SESSION_NOT_ACTIVE: "Session is no longer active",
    BlockReason.OWN_SESSION: "You cannot join your own session",
    BlockReason.ALREADY_JOINED: "You have already joined this session",
    BlockReason.SESSION_FULL: "This session is full",
    BlockReason.NOT_JOINED: "You have not joined this session",
    BlockReason.NOT_OWNER: "You can only modify your own sessions",
}


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    session_id: int | None = None
    sport_id: int | None = None
    user_id: int | None = None
    debug_info: dict[str, Any] | None = None


class SchedulerError(Exception):
    """Base exception for all scheduler errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "session_id": self.context.session_id,
                    "sport_id": self.context.sport_id,
                    "user_id": self.context.user_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(SchedulerError):
    """Malformed or out-of-range input. User corrects and resubmits."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class NotFoundError(SchedulerError):
    """Referenced sport, session or user does not exist."""
    def __init__(
        self, resource_type: str, resource_id: object, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ForbiddenError(SchedulerError):
    """Caller lacks the ownership or role the operation needs."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.FORBIDDEN,
            ErrorSeverity.ERROR, context, 403,
        )


class InvalidStateError(SchedulerError):
    """Operation not allowed given the session's current state or time."""
    def __init__(
        self,
        reason: BlockReason,
        message: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message or REASON_MESSAGES[reason], reason.value,
            ErrorCategory.BUSINESS_RULE, ErrorSeverity.ERROR, context, 409,
        )
        self.reason = reason


class ConflictError(SchedulerError):
    """A concurrent mutation won the race; the write-time invariant refused ours."""
    def __init__(
        self,
        reason: BlockReason | str,
        message: str | None = None,
        context: ErrorContext | None = None,
    ):
        code = reason.value if isinstance(reason, BlockReason) else reason
        if message is None:
            message = REASON_MESSAGES.get(reason, "Conflicting update")
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.reason = reason


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SchedulerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
