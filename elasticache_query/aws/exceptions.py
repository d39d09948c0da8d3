"""Custom exceptions for building ElastiCache query requests."""

from typing import Any, Optional


class QueryBuildError(Exception):
    """Base exception for request building errors."""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        """Initialize build error.

        Args:
            message: Error message
            suggestion: Suggested fix
            original_error: Original exception for debugging
        """
        self.message = message
        self.suggestion = suggestion
        self.original_error = original_error
        super().__init__(self.message)

    def __str__(self) -> str:
        """Format error message."""
        msg = self.message
        if self.suggestion:
            msg += f"\nSuggestion: {self.suggestion}"
        return msg


class InvalidParameterShapeError(QueryBuildError):
    """Exception raised when a structured option value has the wrong shape."""

    def __init__(self, field: str, expected: str, value: Any):
        """Initialize shape error.

        Args:
            field: Field identifier the value was supplied for
            expected: Human readable description of the expected shape
            value: Offending value
        """
        self.field = field
        self.expected = expected
        self.value = value
        message = f"Invalid shape for '{field}': expected {expected}, got {value!r}"
        suggestion = "Check the option value against the operation's option type"
        super().__init__(message, suggestion)


class UnknownFieldError(QueryBuildError):
    """Exception raised in strict mode for a field without a flattening rule."""

    def __init__(self, field: str):
        """Initialize unknown field error.

        Args:
            field: Field identifier with no registered rule
        """
        self.field = field
        message = f"No flattening rule for structured field '{field}'"
        suggestion = "Register a rule in FLATTENING_RULES or flatten without strict mode"
        super().__init__(message, suggestion)


class UnknownOperationError(QueryBuildError):
    """Exception raised when an operation is not known."""

    def __init__(self, operation: str, original_error: Optional[Exception] = None):
        """Initialize unknown operation error.

        Args:
            operation: Operation identifier or action name
            original_error: Original exception
        """
        self.operation = operation
        message = f"Unknown ElastiCache operation: {operation}"
        suggestion = "Run 'elasticache-query operations' to list supported operations"
        super().__init__(message, suggestion, original_error)


class ServiceModelError(QueryBuildError):
    """Exception raised when the ElastiCache service model cannot be loaded."""

    def __init__(self, original_error: Optional[Exception] = None):
        """Initialize service model error.

        Args:
            original_error: Original exception
        """
        message = "Could not load the ElastiCache service model"
        suggestion = "Check that boto3 and botocore are installed and up to date"
        super().__init__(message, suggestion, original_error)
