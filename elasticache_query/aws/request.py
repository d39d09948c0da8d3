"""Request builder producing ElastiCache query request descriptors."""

import logging
from typing import Any, Iterable, Tuple

from elasticache_query.aws.models import QueryRequest
from elasticache_query.flattener import camelize, flatten_options

logger = logging.getLogger(__name__)

API_VERSION = "2015-02-02"
SERVICE = "elasticache"
PATH = "/"


def action_name(action: str) -> str:
    """Wire name of an action identifier (e.g., "create_snapshot" -> "CreateSnapshot")."""
    return camelize(action)


def build_request(action: str, entries: Iterable[Tuple[str, Any]], strict: bool = False) -> QueryRequest:
    """Build a query request descriptor for an action.

    Entries are flattened, absent values are dropped, and ``Action`` and
    ``Version`` are set last so they cannot be overridden by an option.

    Args:
        action: snake_case action identifier (e.g., "describe_cache_clusters")
        entries: Ordered (field, value) option entries
        strict: Reject structured values for fields without a flattening rule

    Returns:
        QueryRequest ready for a transport

    Raises:
        InvalidParameterShapeError: If an option value has the wrong shape
        UnknownFieldError: In strict mode, for an unregistered structured field
    """
    flat = flatten_options(entries, strict=strict)

    params = {key: value for key, value in flat.items() if value is not None}
    params["Action"] = action_name(action)
    params["Version"] = API_VERSION

    logger.debug(f"Built {params['Action']} request with {len(params)} parameters")
    return QueryRequest(action=action, params=params, path=PATH, service=SERVICE)
