"""Error Hierarchy: typed, categorized exceptions for all Property Desk failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries the HTTP status it surfaces as (http_status)
    - to_response() produces the {"message": ...} envelope clients expect
    - DuplicateKeyError is recovered by the create coordinator, never surfaced
      unless creation is exhausted

Design Decisions:
    - Single hierarchy with PropertyDeskError base: FastAPI global handler catches all
    - ErrorContext.user_message lets a route override the surfaced message
      without losing the store-level message in logs
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    property_id: str | None = None
    search_term: str | None = None
    attempt: int | None = None
    user_message: str | None = None


class PropertyDeskError(Exception):
    """Base exception for all Property Desk errors."""

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
        """Convert to the REST error body."""
        return {"message": self.context.user_message or self.message}

    def log_extra(self) -> dict:
        """Structured logging fields for this error."""
        return {
            "error_code": self.code,
            "property_id": self.context.property_id,
            "search_term": self.context.search_term,
            "attempt": self.context.attempt,
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class PropertyNotFoundError(PropertyDeskError):
    """Requested property id does not exist."""
    def __init__(self, property_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.property_id = property_id
        super().__init__(
            "Property not found",
            "PROPERTY_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


class DuplicateKeyError(PropertyDeskError):
    """Insert collided with an existing id."""
    def __init__(self, property_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.property_id = property_id
        super().__init__(
            f"Duplicate property id '{property_id}'",
            "DUPLICATE_KEY", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class CreationExhaustedError(PropertyDeskError):
    """Every create attempt collided on a generated id."""
    def __init__(self, attempts: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.attempt = attempts
        super().__init__(
            "Failed to create property after retries",
            "CREATION_EXHAUSTED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.attempts = attempts


class StoreError(PropertyDeskError):
    """Store operation failed for a reason other than a duplicate id."""
    def __init__(
        self,
        message: str,
        operation: str,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, http_status,
        )
        self.operation = operation
