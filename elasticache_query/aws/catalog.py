"""ElastiCache service model introspection.

Reads the service model bundled with botocore through a boto3 client's
``meta.service_model``. Creating the client does not contact AWS and does
not need credentials; no API call is ever made from here.
"""

import logging
from functools import wraps
from typing import Callable, List, Optional

import boto3
from botocore.exceptions import BotoCoreError
from botocore.model import OperationNotFoundError

from elasticache_query.aws.exceptions import ServiceModelError, UnknownOperationError
from elasticache_query.aws.models import QueryRequest
from elasticache_query.aws.request import SERVICE, action_name

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"


def handle_botocore_errors(func: Callable) -> Callable:
    """Decorator translating botocore errors into package errors.

    Args:
        func: Function to wrap

    Returns:
        Wrapped function raising UnknownOperationError or ServiceModelError
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except OperationNotFoundError as e:
            operation = args[1] if len(args) > 1 else kwargs.get("action", "unknown")
            raise UnknownOperationError(str(operation), e)
        except BotoCoreError as e:
            raise ServiceModelError(e)

    return wrapper


class ServiceCatalog:
    """Offline view of the ElastiCache API as described by botocore."""

    @handle_botocore_errors
    def __init__(self, region: str = DEFAULT_REGION, profile: Optional[str] = None):
        """Initialize the catalog.

        Args:
            region: Region used to create the (unused) client
            profile: Optional AWS profile name
        """
        self.region = region
        self.profile = profile

        session = boto3.Session(profile_name=profile, region_name=region)
        self.service_model = session.client(SERVICE).meta.service_model

        logger.debug(
            f"Loaded {SERVICE} service model {self.service_model.api_version} "
            f"with {len(self.service_model.operation_names)} operations"
        )

    def api_version(self) -> str:
        return self.service_model.api_version

    def operation_names(self) -> List[str]:
        """Wire names of every operation in the model."""
        return list(self.service_model.operation_names)

    def has_operation(self, action: str) -> bool:
        """Check whether an action (snake_case or wire name) exists in the model."""
        return action_name(action) in self.service_model.operation_names

    @handle_botocore_errors
    def required_members(self, action: str) -> List[str]:
        """Top-level input members AWS requires for an action.

        Args:
            action: snake_case identifier or wire name

        Returns:
            Member names (e.g., ["CacheClusterId"])
        """
        operation_model = self.service_model.operation_model(action_name(action))
        input_shape = operation_model.input_shape
        if input_shape is None:
            return []
        return list(input_shape.required_members)

    @handle_botocore_errors
    def list_prefix(self, action: str, member: str) -> Optional[str]:
        """Query protocol prefix of a list member, e.g. "SnapshotArns.SnapshotArn".

        Args:
            action: snake_case identifier or wire name
            member: Top-level input member name

        Returns:
            The prefix, or None if the member is not a list
        """
        input_shape = self.service_model.operation_model(action_name(action)).input_shape
        if input_shape is None or member not in input_shape.members:
            return None

        shape = input_shape.members[member]
        if shape.type_name != "list":
            return None
        element_name = shape.member.serialization.get("name", "member")
        return f"{member}.{element_name}"

    def missing_required_members(self, request: QueryRequest) -> List[str]:
        """Required members of the request's action that have no parameter.

        A list member counts as present when any of its indexed keys is.
        """
        missing = []
        for member in self.required_members(request.action):
            prefix = f"{member}."
            if member in request.params:
                continue
            if any(key.startswith(prefix) for key in request.params):
                continue
            missing.append(member)

        if missing:
            logger.debug(f"{request.params.get('Action')} is missing required members: {missing}")
        return missing
