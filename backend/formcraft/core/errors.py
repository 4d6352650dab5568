"""Error Hierarchy — typed, categorized exceptions for all FormCraft failure modes.

Invariants:
    - Every error has a code (str), reason (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are caller-fixable; storage errors (500-level) are critical
    - to_response() produces the REST envelope consumed by the API error handlers
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with FormCraftError base: FastAPI global handler catches all
    - reason carries the fine-grained wire code (missing-fields, slug-conflict, ...)
      while code stays coarse (VALIDATION_ERROR, SLUG_CONFLICT, ...)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from formcraft.core.domain_types import ValidationReason


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    form_slug: str | None = None
    field_index: int | None = None
    debug_info: dict[str, Any] | None = None


class FormCraftError(Exception):
    """Base exception for all FormCraft errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        reason: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.reason = reason

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "reason": self.reason,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "form_slug": self.context.form_slug,
                    "field_index": self.context.field_index,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

_VALIDATION_MESSAGES = {
    ValidationReason.MISSING_TITLE: "Form title is required",
    ValidationReason.MISSING_FIELDS: "Form must have at least one field",
    ValidationReason.INVALID_FIELD_TYPE: "Field type is not recognized",
    ValidationReason.UNSLUGIFIABLE_TITLE: (
        "Form title must contain at least one letter or digit (a-z, 0-9)"
    ),
    ValidationReason.INVALID_SLUG: (
        "Slug must contain at least one letter or digit (a-z, 0-9)"
    ),
}


class FormValidationError(FormCraftError):
    """Proposed form definition failed validation. Raised before any storage write."""
    def __init__(
        self,
        reason: ValidationReason,
        message: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message or _VALIDATION_MESSAGES[reason],
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400, reason.value,
        )
        self.validation_reason = reason


class SlugConflictError(FormCraftError):
    """Another form definition already uses this slug."""
    def __init__(self, slug: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.form_slug = slug
        super().__init__(
            f"A form with the URL '{slug}' already exists",
            "SLUG_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409, "slug-conflict",
        )
        self.slug = slug


class ResourceNotFoundError(FormCraftError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404, "not-found",
        )


class FormNotFoundError(ResourceNotFoundError):
    """No form definition has the requested slug."""
    def __init__(self, slug: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.form_slug = slug
        super().__init__("Form", slug, ctx)
        self.slug = slug


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(FormCraftError):
    """Storage operation failed. Message is generic; details go to the log only."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 503, "storage-unavailable",
        )
        self.operation = operation


class DuplicateKeyError(StorageError):
    """A uniqueness constraint rejected the write."""
    def __init__(self, constraint: str, context: ErrorContext | None = None):
        super().__init__("Unique constraint violated", "commit", context)
        self.constraint = constraint
