"""Base formatter interface for output formats."""

from abc import ABC, abstractmethod
from typing import Any, List, Tuple

from elasticache_query.aws.models import QueryRequest


class BaseFormatter(ABC):
    """Abstract base class for request formatters."""

    # File extension used when writing formatted output
    extension = "txt"

    @abstractmethod
    def format(self, request: QueryRequest) -> str:
        """Format a query request.

        Args:
            request: QueryRequest to render

        Returns:
            Formatted string output
        """
        pass

    @staticmethod
    def sorted_params(request: QueryRequest) -> List[Tuple[str, Any]]:
        """Parameters ordered by key, the order a transport serializes them in."""
        return sorted(request.params.items())

    @staticmethod
    def format_value(value: Any) -> str:
        """Render a parameter value as it appears on the wire.

        Args:
            value: str, int, float or bool

        Returns:
            "true"/"false" for booleans, str(value) otherwise
        """
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)
