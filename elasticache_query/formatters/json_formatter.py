"""JSON formatter for query requests."""

import json

from elasticache_query.aws.models import QueryRequest
from elasticache_query.formatters.base import BaseFormatter


class JSONFormatter(BaseFormatter):
    """Pretty-printed JSON output of the whole request descriptor."""

    extension = "json"

    def format(self, request: QueryRequest) -> str:
        document = {
            "path": request.path,
            "service": request.service,
            "action": request.action,
            "params": dict(request.params),
        }
        return json.dumps(document, indent=2, sort_keys=True)
