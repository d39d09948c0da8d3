"""CSV formatter for query request parameters."""

import csv
import io

from elasticache_query.aws.models import QueryRequest
from elasticache_query.formatters.base import BaseFormatter


class CSVFormatter(BaseFormatter):
    """CSV output formatter."""

    extension = "csv"

    def format(self, request: QueryRequest) -> str:
        """Format request parameters as CSV.

        Args:
            request: QueryRequest to render

        Returns:
            CSV formatted string with a Key,Value header
        """
        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(["Key", "Value"])
        for key, value in self.sorted_params(request):
            writer.writerow([key, self.format_value(value)])

        return output.getvalue()
