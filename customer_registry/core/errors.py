"""Error Hierarchy — typed, categorized exceptions for every customer registry failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; storage errors (500-level) are critical
    - Messages are user-facing: the use cases return them verbatim in OperationResult.error
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with CustomerRegistryError base: use cases catch the base at
      their boundary, FastAPI global handler catches whatever escapes the transport
    - Category travels with the failure so the transport picks a status code
      without parsing message text (ADR: uniform error shape)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    INTEGRITY = "integrity"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where the failure happened; surfaced as structured log fields."""
    customer_id: str | None = None
    operation: str | None = None
    field: str | None = None


class CustomerRegistryError(Exception):
    """Base exception for all customer registry errors."""

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

    @property
    def log_level(self) -> int:
        return _LOG_LEVELS[self.severity]

    def log_extra(self) -> dict[str, Any]:
        """Structured logging fields for this error (None values dropped by the formatter)."""
        return {
            "error_code": self.code,
            "customer_id": self.context.customer_id,
            "operation": self.context.operation,
            "field": self.context.field,
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class CustomerValidationError(CustomerRegistryError):
    """Customer construction invariant violated."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidQueryError(CustomerRegistryError):
    """Filter, sort or projection refers to something that is not a customer field."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_QUERY", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class CustomerConflictError(CustomerRegistryError):
    """Uniqueness violation on document number or email."""
    def __init__(
        self, message: str, field: str, value: Any,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "CUSTOMER_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.field = field
        self.value = value


class CustomerNotFoundError(CustomerRegistryError):
    """Referenced id or document number has no matching record."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CUSTOMER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class CustomerIntegrityError(CustomerRegistryError):
    """A write nominally succeeded but its result could not be verified."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INTEGRITY_ERROR", ErrorCategory.INTEGRITY,
            ErrorSeverity.CRITICAL, context, 500,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(CustomerRegistryError):
    """Storage adapter operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation
