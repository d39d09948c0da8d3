"""Query string formatter producing the AWS Query protocol wire form."""

from urllib.parse import quote, urlencode

from elasticache_query.aws.models import QueryRequest
from elasticache_query.formatters.base import BaseFormatter


class QueryStringFormatter(BaseFormatter):
    """Form-encoded ``Key=Value&...`` output, keys sorted."""

    extension = "txt"

    def format(self, request: QueryRequest) -> str:
        """Format a request as a query string.

        Values are percent-encoded per RFC 3986, so spaces become ``%20``.

        Args:
            request: QueryRequest to render

        Returns:
            Query string (e.g., "Action=DeleteSnapshot&SnapshotName=s1&Version=2015-02-02")
        """
        pairs = [(key, self.format_value(value)) for key, value in self.sorted_params(request)]
        return urlencode(pairs, safe="-_.~", quote_via=quote)
