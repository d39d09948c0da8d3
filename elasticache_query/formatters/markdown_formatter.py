"""Markdown formatter for query request parameters."""

from elasticache_query.aws.models import QueryRequest
from elasticache_query.formatters.base import BaseFormatter


class MarkdownFormatter(BaseFormatter):
    """Markdown table output formatter."""

    extension = "md"

    def format(self, request: QueryRequest) -> str:
        """Format request parameters as a Markdown table.

        Args:
            request: QueryRequest to render

        Returns:
            Markdown table formatted string
        """
        lines = [
            "| Key | Value |",
            "| --- | --- |",
        ]

        for key, value in self.sorted_params(request):
            # Pipes would split the cell
            cell = self.format_value(value).replace("|", "\\|")
            lines.append(f"| {key} | {cell} |")

        return "\n".join(lines)
