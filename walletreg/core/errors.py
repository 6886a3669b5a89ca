"""Error Hierarchy — the three external failure kinds of the registration workflow.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Exactly three concrete kinds: InvalidWalletError (400),
      WalletAlreadyRegisteredError (409), InternalFailureError (500)
    - to_response() produces the REST envelope consumed by the transport layer
    - No storage-engine text in user-facing messages

Design Decisions:
    - Single hierarchy with RegistryError base: FastAPI global handler catches all (ADR: uniform error shape)
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
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    request_id: str | None = None
    debug_info: dict[str, Any] | None = None


class RegistryError(Exception):
    """Base exception for all registration errors."""

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
                "request_id": self.context.request_id,
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidWalletError(RegistryError):
    """Wallet input is empty, too long, or not a canonical address."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            _INVALID_WALLET_MESSAGES.get(reason, "Invalid wallet address"),
            "INVALID_WALLET", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.reason = reason


_INVALID_WALLET_MESSAGES = {
    "empty": "Wallet address is required",
    "too_long": "Wallet address is too long",
    "invalid_characters": "Wallet address contains invalid characters",
    "invalid_format": "Wallet address must be 0x followed by 40 hex characters",
}


class WalletAlreadyRegisteredError(RegistryError):
    """A user already exists for this canonical wallet."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Wallet already registered",
            "WALLET_ALREADY_REGISTERED", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class InternalFailureError(RegistryError):
    """Transaction or storage failure. operation is logged, never returned."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "An internal error occurred",
            "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
