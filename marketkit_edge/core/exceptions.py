"""
Exception hierarchy mapping gateway failures to HTTP status codes.

Distinguishes:
- Client errors (400-level): caller sent a bad path, chain, action or body
- Server errors (500-level): a forwarded RPC call or our own code failed
- External errors (503): the market-data upstream returned an error

Usage:
    from marketkit_edge.core.exceptions import ValidationError

    raise ValidationError("Invalid address request", path=path)

The router turns any AppError into ``{"error": message}`` with the class's
status code. Context kwargs are logged, never returned to the caller.
"""

from typing import Any


class AppError(Exception):
    """
    Base gateway error with HTTP status mapping.

    All custom exceptions inherit from this to enable consistent error handling.
    """

    # Default status code (subclasses override)
    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, message: str, **context: Any):
        """
        Initialize error with message and optional context.

        Args:
            message: Human-readable error description, returned to the caller
            **context: Additional key-value pairs for logging (e.g., chain, path)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for structured logging."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "status_code": self.status_code,
            **self.context,
        }


# ===== 400-level: Client Errors =====


class ValidationError(AppError):
    """Caller provided invalid input (malformed path, unknown chain or action)."""

    status_code = 400
    error_type = "validation_error"


class NotFoundError(AppError):
    """No route matches the requested path."""

    status_code = 404
    error_type = "not_found_error"


# ===== 500-level: Server Errors =====


class BlockchainRPCError(AppError):
    """
    Forwarded JSON-RPC call failed (transport error, non-2xx, bad JSON).

    The message stays generic; the underlying cause is only logged.
    """

    status_code = 500
    error_type = "blockchain_rpc_error"

    def __init__(self, message: str, chain: str, **context: Any):
        super().__init__(message, chain=chain, **context)


# ===== 502/503: External Service Errors =====


class ExternalServiceError(AppError):
    """
    Market-data upstream unavailable or returned an error.

    Aggregate handlers absorb these per call, so they normally surface only
    as degraded fields, not as a response status.
    """

    status_code = 503
    error_type = "external_service_error"

    def __init__(self, message: str, service: str, **context: Any):
        """
        Initialize with service name for easier debugging.

        Args:
            message: Error description
            service: Service identifier (e.g., "marketkit")
            **context: Additional context (e.g., endpoint, status)
        """
        super().__init__(message, service=service, **context)
