"""Error Hierarchy — typed, categorized exceptions for every category-creation failure.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (4xx) are user-correctable; infrastructure errors (5xx) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages (InvalidPlanError keeps the
      offending value in context.debug_info, not in the message)

Design Decisions:
    - Single hierarchy with ServiceError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from event_categories.core.domain_types import QuotaDecision


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    CONFLICT = "conflict"
    CONFIGURATION = "configuration"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class ServiceError(Exception):
    """Base exception for all category service errors."""

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
                    "user_id": self.context.user_id,
                    "field": self.context.field,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class UnauthenticatedError(ServiceError):
    """No resolvable identity on the request."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Unauthorized", "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class CategoryValidationError(ServiceError):
    """Category payload failed validation on a single field."""
    def __init__(self, field: str, message: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 422,
        )
        self.field = field


FREE_LIMIT_MESSAGE = "Categories limit reached. Please upgrade to PRO plan."
PRO_LIMIT_MESSAGE = "Please remove categories to create a new one."


class QuotaExceededError(ServiceError):
    """Plan ceiling reached. Message depends on which ceiling was hit."""
    def __init__(self, decision: QuotaDecision, context: ErrorContext | None = None):
        if decision is QuotaDecision.DENY_PRO_LIMIT_REACHED:
            message, code = PRO_LIMIT_MESSAGE, "PRO_QUOTA_EXCEEDED"
        elif decision is QuotaDecision.DENY_FREE_LIMIT_REACHED:
            message, code = FREE_LIMIT_MESSAGE, "FREE_QUOTA_EXCEEDED"
        else:
            raise ValueError(f"{decision!r} is not a deny decision")
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )
        self.decision = decision


class UserNotProvisionedError(ServiceError):
    """Identity resolved but no user record (and therefore no plan) exists."""
    def __init__(self, user_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            "Account is not provisioned. Please finish signing up.",
            "USER_NOT_PROVISIONED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 403,
        )


class DuplicateCategoryNameError(ServiceError):
    """The user already owns a category with this name."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = "name"
        super().__init__(
            f"A category named '{name}' already exists.",
            "DUPLICATE_CATEGORY_NAME", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.name = name


# ─── Configuration / Infrastructure Errors (500-level) ──────────

class InvalidPlanError(ServiceError):
    """Stored plan value is outside {FREE, PRO} — data integrity problem."""
    def __init__(self, plan_value: object, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {**(ctx.debug_info or {}), "plan": repr(plan_value)}
        super().__init__(
            "Internal server error", "INVALID_PLAN", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.plan_value = plan_value


class StoreUnavailableError(ServiceError):
    """Store operation failed (connection, driver, unexpected DB error).

    The caller sees a generic message; the failing operation and detail stay in
    context.debug_info for the logs.
    """
    def __init__(self, detail: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {
            **(ctx.debug_info or {}), "operation": operation, "detail": detail,
        }
        super().__init__(
            "Internal server error", "STORE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
        self.detail = detail
