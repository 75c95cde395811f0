"""
Custom exceptions for branchreport.

Provides a hierarchy of exceptions that map to HTTP status codes
and include structured error information.
"""

from typing import Any


class BranchReportException(Exception):
    """
    Base exception for all branchreport errors.

    All custom exceptions should inherit from this class.
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
            details: Additional error details
        """
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


# =============================================================================
# HTTP 400 - Bad Request Errors
# =============================================================================


class BadRequestError(BranchReportException):
    """Invalid request parameters or payload."""

    status_code = 400


class ValidationError(BadRequestError):
    """Request validation failed."""

    def __init__(
        self,
        message: str = "Validation error",
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"errors": errors or []},
        )


class RequiredFieldError(BadRequestError):
    """Required field attribute is missing."""

    def __init__(self, field_name: str) -> None:
        super().__init__(
            message=f"{field_name} is required",
            code="REQUIRED_FIELD",
            details={
                "field_name": field_name,
            },
        )


# =============================================================================
# HTTP 409 - Conflict Errors
# =============================================================================


class ConflictError(BranchReportException):
    """Resource conflict."""

    status_code = 409

    def __init__(
        self,
        message: str,
        resource: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="CONFLICT",
            details={"resource": resource},
        )


class DuplicateError(ConflictError):
    """Duplicate resource."""

    def __init__(self, resource: str, field: str, value: str) -> None:
        super().__init__(
            message=f"{resource} with {field} '{value}' already exists",
            resource=resource,
        )
        self.details["field"] = field
        self.details["value"] = value


# =============================================================================
# HTTP 422 - Unprocessable Entity
# =============================================================================


class UnprocessableEntityError(BranchReportException):
    """Request cannot be processed."""

    status_code = 422


class FormulaError(UnprocessableEntityError):
    """Formula parsing or execution error."""

    def __init__(self, formula: str, error: str, code: str = "FORMULA_ERROR") -> None:
        super().__init__(
            message=f"Formula error: {error}",
            code=code,
            details={"formula": formula, "error": error},
        )
        self.error = error


class FormulaSyntaxError(FormulaError):
    """Formula is not a well-formed arithmetic expression."""

    def __init__(self, formula: str, error: str) -> None:
        super().__init__(formula, error, code="FORMULA_SYNTAX_ERROR")


class FormulaValidationError(FormulaError):
    """Formula references unknown fields or forms a cycle."""

    def __init__(
        self,
        formula: str,
        error: str,
        unknown_variable: str | None = None,
    ) -> None:
        super().__init__(formula, error, code="FORMULA_VALIDATION_ERROR")
        if unknown_variable is not None:
            self.details["unknown_variable"] = unknown_variable
