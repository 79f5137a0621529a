"""Error Hierarchy - typed, categorized exceptions for every Trouver failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; store errors (500-level) are critical
    - to_response() produces the REST error envelope
    - Store error text is kept in context.debug_info and never rendered in to_response()

Design Decisions:
    - Single hierarchy with TrouverError base: one FastAPI handler catches all
    - NotFoundError and ForbiddenError are separate classes so callers can never
      conflate "missing" with "not yours"
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_type: str | None = None
    resource_id: str | None = None
    principal_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class TrouverError(Exception):
    """Base exception for all Trouver errors."""

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
                    "resource_type": self.context.resource_type,
                    "resource_id": self.context.resource_id,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(TrouverError):
    """Payload failed one or more field rules.

    ``violations`` holds every failed rule as ``{"field", "message", "type"}``
    so a client can fix the whole payload in one round trip.
    """
    def __init__(
        self, violations: list[dict], context: ErrorContext | None = None,
    ):
        fields = ", ".join(v["field"] for v in violations)
        super().__init__(
            f"Invalid request data: {fields}" if fields else "Invalid request data",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.violations = violations

    @property
    def fields(self) -> list[str]:
        return [v["field"] for v in self.violations]

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.violations
        return response


class UnauthenticatedError(TrouverError):
    """Request carried no usable principal."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication required",
            "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(TrouverError):
    """Principal is not allowed to mutate the resource."""
    def __init__(
        self, resource_type: str, resource_id: str, principal_id: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = resource_id
        ctx.principal_id = principal_id
        super().__init__(
            f"Not allowed to modify {resource_type} '{resource_id}'",
            "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, ctx, 403,
        )


class NotFoundError(TrouverError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


# ─── Store Errors (500-level) ───────────────────────────────────

class PersistenceError(TrouverError):
    """Store operation failed (connectivity, constraint, corrupt write)."""
    def __init__(
        self, reason: str, operation: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        ctx.debug_info = {**(ctx.debug_info or {}), "reason": reason}
        super().__init__(
            f"Persistence {operation} failed",
            "PERSISTENCE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
        self.reason = reason


class OperationTimeoutError(TrouverError):
    """Operation exceeded its deadline."""
    def __init__(
        self, operation: str, timeout_seconds: float,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Operation '{operation}' exceeded {timeout_seconds:g}s deadline",
            "OPERATION_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.CRITICAL, ctx, 504,
        )
        self.operation = operation
        self.timeout_seconds = timeout_seconds
