"""Error Hierarchy — typed, categorized exceptions for all quote failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400-level) are reported to the caller; calculation errors
      (500-level) are absorbed by the quote service and never reach the client
    - QuoteValidationError.to_response() produces the flat VALIDATION_ERROR envelope

Design Decisions:
    - Single hierarchy with ShipQuoteError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    BUSINESS_RULE = "business_rule"
    CALCULATION = "calculation"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    cache_key: str | None = None
    weight_oz: float | None = None
    debug_info: dict[str, Any] | None = None


class ShipQuoteError(Exception):
    """Base exception for all shipping quote errors."""

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
            "error": self.message,
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class QuoteValidationError(ShipQuoteError):
    """Quote request failed input validation.

    `kind` is the ValidationKind value (MISSING_FIELD, WEIGHT_TOO_HIGH, ...);
    it is carried for logs only, the caller sees it through the message text.
    """
    def __init__(
        self,
        message: str,
        field: str,
        value: Any = None,
        kind: str = "INVALID_REQUEST",
        max_weight: float | None = None,
        context: ErrorContext | None = None,
    ):
        category = (
            ErrorCategory.BUSINESS_RULE if max_weight is not None
            else ErrorCategory.VALIDATION
        )
        super().__init__(
            message, "VALIDATION_ERROR", category,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field
        self.value = value
        self.kind = kind
        self.max_weight = max_weight

    def to_response(self) -> dict:
        """Flat 400 envelope: error, code, details{field, value, maxWeight?}."""
        details: dict[str, Any] = {"field": self.field, "value": self.value}
        if self.max_weight is not None:
            details["maxWeight"] = self.max_weight
        return {"error": self.message, "code": self.code, "details": details}


class MalformedRequestError(QuoteValidationError):
    """Request body could not be decoded into a JSON object."""
    def __init__(self, message: str = "Request body must be a JSON object"):
        super().__init__(message, field="body", kind="MALFORMED_BODY")

    def to_response(self) -> dict:
        return {"error": self.message, "code": self.code}


# ─── Internal Errors (500-level, absorbed) ──────────────────────

class RateCalculationError(ShipQuoteError):
    """Rate tables could not price the given weight."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Rate calculation failed: {message}",
            "RATE_CALCULATION_FAILED", ErrorCategory.CALCULATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
