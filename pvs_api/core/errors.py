"""Error Hierarchy — typed, categorized exceptions for all API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the public envelope: {"error": message} plus "message" when a detail exists

Design Decisions:
    - Single hierarchy with PvsError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: observability fields travel with the error, not the response
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_id: str | None = None
    service: str | None = None
    debug_info: dict[str, Any] | None = None


class PvsError(Exception):
    """Base exception for all PixelVerse API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.detail = detail

    def to_response(self) -> dict:
        """Convert to the public REST error body."""
        body: dict[str, Any] = {"error": self.message}
        if self.detail:
            body["message"] = self.detail
        return body


# ─── Domain Errors (400-level) ──────────────────────────────────

class BusinessRuleError(PvsError):
    """Request is well-formed but violates a business rule."""
    def __init__(
        self, message: str, detail: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "BUSINESS_RULE_VIOLATION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400, detail,
        )


class ResourceNotFoundError(PvsError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str | None = None,
        message: str | None = None, detail: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        super().__init__(
            message or f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404, detail,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(PvsError):
    """Unique value already taken (slug, domain, email)."""
    def __init__(
        self, message: str, detail: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409, detail,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(PvsError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ExternalServiceError(PvsError):
    """Outbound integration (email, webhook, verification API) failed."""
    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
        http_status: int = 502,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.service = service
        super().__init__(
            message, "EXTERNAL_SERVICE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, http_status,
        )
        self.service = service
        self.status_code = status_code


class ConfigurationError(PvsError):
    """Required integration setting is missing."""
    def __init__(self, setting: str, context: ErrorContext | None = None):
        super().__init__(
            f"{setting} is not configured",
            "CONFIGURATION_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.setting = setting
