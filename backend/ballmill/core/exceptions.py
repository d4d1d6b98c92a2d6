"""
Custom exception classes and error handling utilities for the ball mill backend.
"""

from typing import Any, Optional, Sequence

from fastapi import HTTPException, status


class BallMillException(Exception):
    """Base exception for the ball mill application."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ResourceNotFound(BallMillException):
    """Raised when a catalog entry is not found."""

    pass


class InvalidInput(BallMillException):
    """Raised when input validation fails."""

    pass


class ParameterValidationError(InvalidInput):
    """
    Raised when one or more required parameters are missing or not numeric.

    Carries every offending field so the caller can highlight all of them at once.
    """

    def __init__(self, fields: Sequence[str], errors: Optional[list[dict[str, Any]]] = None):
        self.fields = list(fields)
        self.errors = errors or [
            {"field": name, "reason": "value is missing or not a number"} for name in self.fields
        ]
        message = "Invalid or missing parameters: " + ", ".join(self.fields)
        super().__init__(message, details={"fields": self.fields, "errors": self.errors})


class DomainError(InvalidInput):
    """Raised for numeric input outside the domain of the mill formulas (D <= 0, Cs <= 0, ...)."""

    def __init__(self, field: str, reason: str, value: Any = None):
        self.field = field
        self.reason = reason
        self.value = value
        super().__init__(
            f"Invalid value for '{field}': {reason}",
            details={"field": field, "reason": reason, "value": value},
        )


def raise_not_found(resource_type: str, identifier: Any = None, message: str = None) -> None:
    """
    Raise a 404 HTTPException with descriptive message.

    Args:
        resource_type: Type of resource (e.g., "Material", "Distribution")
        identifier: The key that was not found
        message: Custom message (overrides default)

    Raises:
        HTTPException: 404 Not Found
    """
    if message:
        detail = message
    elif identifier:
        detail = f"{resource_type} '{identifier}' not found"
    else:
        detail = f"{resource_type} not found"

    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def raise_unprocessable(exc: InvalidInput) -> None:
    """
    Raise a 422 HTTPException from a validation or domain error.

    The detail follows the FastAPI validation shape (list of loc/msg/type)
    so the frontend can handle both kinds of 422 the same way.

    Raises:
        HTTPException: 422 Unprocessable Entity
    """
    if isinstance(exc, ParameterValidationError):
        detail = [
            {
                "loc": ["body", "parameters", error["field"]],
                "msg": error["reason"],
                "type": "value_error",
            }
            for error in exc.errors
        ]
    elif isinstance(exc, DomainError):
        detail = [
            {
                "loc": ["body", "parameters", exc.field],
                "msg": exc.reason,
                "type": "domain_error",
            }
        ]
    else:
        detail = [{"loc": ["body"], "msg": exc.message, "type": "value_error"}]

    raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


def raise_internal_error(operation: str, error: Exception = None) -> None:
    """
    Raise a 500 HTTPException for internal errors.

    Args:
        operation: What operation failed (e.g., "calculate mill")
        error: The underlying exception (for logging)

    Raises:
        HTTPException: 500 Internal Server Error
    """
    detail = f"Failed to {operation}. Please try again or contact support."

    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail,
    )
