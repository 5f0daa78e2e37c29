"""
Domain exceptions for the translation catalog.
Services raise these; main.py maps them to HTTP responses.
"""
from typing import Any, Dict, Optional


class CatalogException(Exception):
    """Base exception for all catalog errors."""

    status_code = 500
    default_code = "CATALOG_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Args:
            message: Human-readable error message
            code: Machine-readable error code
            details: Additional error details
        """
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.message,
            "code": self.code,
            "details": self.details,
        }


class NotFoundError(CatalogException):
    """Raised when an id does not resolve to a live record."""

    status_code = 404
    default_code = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(
            f"{entity_type} not found",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )


class ConflictError(CatalogException):
    """Raised when a (key, locale) pair is already taken."""

    status_code = 409
    default_code = "CONFLICT"

    def __init__(self, key: str, locale: str):
        super().__init__(
            "Translation with this key and locale already exists",
            details={"key": key, "locale": locale},
        )


class ValidationFailure(CatalogException):
    """Raised for missing or malformed fields. Never retried."""

    status_code = 422
    default_code = "VALIDATION_FAILED"

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Validation failed", details={"errors": errors})
        self.errors = errors


class StoreUnavailableError(CatalogException):
    """Raised when the database (or cache) cannot be reached. Retryable."""

    status_code = 503
    default_code = "STORE_UNAVAILABLE"

    def __init__(self, message: str = "Storage backend unavailable", operation: Optional[str] = None):
        super().__init__(message, details={"operation": operation} if operation else None)
