"""ElastiCache operations as query request builders.

Each function takes the operation's required parameters positionally and
its optional parameters either as a typed options object or as keyword
arguments, and returns a QueryRequest. Nothing is sent over the network.

Example:
    >>> request = create_cache_cluster(
    ...     "MyMemcachedCluster", "cache.m3.medium", "memcached", 1,
    ...     preferred_availability_zones=["us-east-1a"],
    ... )
    >>> request.params["PreferredAvailabilityZones.PreferredAvailabilityZone.1"]
    'us-east-1a'
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Type, TypeVar

from elasticache_query.aws.exceptions import UnknownOperationError
from elasticache_query.aws.models import QueryRequest
from elasticache_query.aws.options import (
    CopySnapshotOptions,
    CreateCacheClusterOptions,
    CreateReplicationGroupOptions,
    CreateSnapshotOptions,
    DeleteCacheClusterOptions,
    DeleteReplicationGroupOptions,
    DescribeCacheClustersOptions,
    DescribeCacheEngineVersionsOptions,
    DescribeCacheParametersOptions,
    DescribeGlobalReplicationGroupsOptions,
    DescribeReplicationGroupsOptions,
    DescribeSnapshotsOptions,
    RequestOptions,
    TagsOption,
)
from elasticache_query.aws.request import action_name, build_request

OptionsT = TypeVar("OptionsT", bound=RequestOptions)


@dataclass(frozen=True)
class Operation:
    """Registry entry for an operation function."""

    name: str
    function: Callable[..., QueryRequest]
    options_type: Optional[Type[RequestOptions]] = None

    @property
    def action(self) -> str:
        return action_name(self.name)

    @property
    def required_parameters(self) -> List[str]:
        """Names of the positional parameters the function requires."""
        return [
            param.name
            for param in inspect.signature(self.function).parameters.values()
            if param.kind is inspect.Parameter.POSITIONAL_OR_KEYWORD
            and param.default is inspect.Parameter.empty
        ]


OPERATIONS: Dict[str, Operation] = {}


def _operation(options_type: Optional[Type[RequestOptions]] = None) -> Callable:
    def decorator(func: Callable[..., QueryRequest]) -> Callable[..., QueryRequest]:
        OPERATIONS[func.__name__] = Operation(func.__name__, func, options_type)
        return func

    return decorator


def get_operation(name: str) -> Operation:
    """Look up a registered operation by its snake_case name.

    Raises:
        UnknownOperationError: If no operation has that name
    """
    try:
        return OPERATIONS[name]
    except KeyError as e:
        raise UnknownOperationError(name, e)


def _resolve_options(
    options_type: Type[OptionsT],
    options: Optional[OptionsT],
    kwargs: Dict[str, Any]
) -> OptionsT:
    if options is not None and kwargs:
        raise TypeError("Pass either an options object or keyword options, not both")
    if options is None:
        return options_type(**kwargs)
    if not isinstance(options, options_type):
        raise TypeError(f"Expected {options_type.__name__}, got {type(options).__name__}")
    return options


@_operation()
def authorize_cache_security_group_ingress(
    cache_security_group_name: str,
    ec2_security_group_name: str,
    ec2_security_group_owner_id: str
) -> QueryRequest:
    """Authorize network ingress to a cache security group."""
    return build_request("authorize_cache_security_group_ingress", [
        ("CacheSecurityGroupName", cache_security_group_name),
        ("EC2SecurityGroupName", ec2_security_group_name),
        ("EC2SecurityGroupOwnerId", ec2_security_group_owner_id),
    ])


@_operation(CopySnapshotOptions)
def copy_snapshot(
    source_snapshot_name: str,
    target_snapshot_name: str,
    options: Optional[CopySnapshotOptions] = None,
    **kwargs: Any
) -> QueryRequest:
    """Make a copy of an existing snapshot."""
    opts = _resolve_options(CopySnapshotOptions, options, kwargs)
    return build_request("copy_snapshot", [
        ("SourceSnapshotName", source_snapshot_name),
        ("TargetSnapshotName", target_snapshot_name),
        *opts.entries(),
    ])


@_operation(CreateCacheClusterOptions)
def create_cache_cluster(
    cache_cluster_id: str,
    cache_node_type: str,
    engine: str,
    num_cache_nodes: int,
    options: Optional[CreateCacheClusterOptions] = None,
    **kwargs: Any
) -> QueryRequest:
    """Create a cache cluster running Memcached, Redis or Valkey.

    Args:
        cache_cluster_id: Node group identifier, stored as lowercase by AWS
        cache_node_type: Compute and memory capacity (e.g., "cache.m3.medium")
        engine: Cache engine name
        num_cache_nodes: Initial number of cache nodes
        options: CreateCacheClusterOptions, or pass the same fields as keywords

    Returns:
        QueryRequest for CreateCacheCluster
    """
    opts = _resolve_options(CreateCacheClusterOptions, options, kwargs)
    return build_request("create_cache_cluster", [
        ("CacheClusterId", cache_cluster_id),
        ("CacheNodeType", cache_node_type),
        ("Engine", engine),
        ("NumCacheNodes", num_cache_nodes),
        *opts.entries(),
    ])


@_operation(CreateReplicationGroupOptions)
def create_replication_group(
    replication_group_id: str,
    replication_group_description: str,
    options: Optional[CreateReplicationGroupOptions] = None,
    **kwargs: Any
) -> QueryRequest:
    """Create a Redis or Valkey replication group.

    Shards are laid out with ``node_group_configurations``: a list of
    NodeGroupConfiguration objects or
    ``(primary_zone, [replica_zones], replica_count, slots)`` tuples.

    Args:
        replication_group_id: Replication group identifier
        replication_group_description: User supplied description
        options: CreateReplicationGroupOptions, or pass the same fields as keywords

    Returns:
        QueryRequest for CreateReplicationGroup
    """
    opts = _resolve_options(CreateReplicationGroupOptions, options, kwargs)
    return build_request("create_replication_group", [
        ("ReplicationGroupId", replication_group_id),
        ("ReplicationGroupDescription", replication_group_description),
        *opts.entries(),
    ])


@_operation(CreateSnapshotOptions)
def create_snapshot(
    snapshot_name: str,
    options: Optional[CreateSnapshotOptions] = None,
    **kwargs: Any
) -> QueryRequest:
    """Create a copy of an entire cluster or replication group."""
    opts = _resolve_options(CreateSnapshotOptions, options, kwargs)
    return build_request("create_snapshot", [("SnapshotName", snapshot_name), *opts.entries()])


@_operation(DeleteCacheClusterOptions)
def delete_cache_cluster(
    cache_cluster_id: str,
    options: Optional[DeleteCacheClusterOptions] = None,
    **kwargs: Any
) -> QueryRequest:
    """Delete a provisioned cache cluster and all of its nodes."""
    opts = _resolve_options(DeleteCacheClusterOptions, options, kwargs)
    return build_request("delete_cache_cluster", [("CacheClusterId", cache_cluster_id), *opts.entries()])


@_operation(DeleteReplicationGroupOptions)
def delete_replication_group(
    replication_group_id: str,
    options: Optional[DeleteReplicationGroupOptions] = None,
    **kwargs: Any
) -> QueryRequest:
    """Delete an existing replication group."""
    opts = _resolve_options(DeleteReplicationGroupOptions, options, kwargs)
    return build_request("delete_replication_group", [
        ("ReplicationGroupId", replication_group_id),
        *opts.entries(),
    ])


@_operation()
def delete_snapshot(snapshot_name: str) -> QueryRequest:
    return build_request("delete_snapshot", [("SnapshotName", snapshot_name)])


@_operation(DescribeCacheClustersOptions)
def describe_cache_clusters(
    options: Optional[DescribeCacheClustersOptions] = None,
    **kwargs: Any
) -> QueryRequest:
    """Describe all provisioned cache clusters, or one when cache_cluster_id is given."""
    opts = _resolve_options(DescribeCacheClustersOptions, options, kwargs)
    return build_request("describe_cache_clusters", opts.entries())


@_operation(DescribeCacheEngineVersionsOptions)
def describe_cache_engine_versions(
    options: Optional[DescribeCacheEngineVersionsOptions] = None,
    **kwargs: Any
) -> QueryRequest:
    """List the available cache engines and their versions."""
    opts = _resolve_options(DescribeCacheEngineVersionsOptions, options, kwargs)
    return build_request("describe_cache_engine_versions", opts.entries())


@_operation(DescribeReplicationGroupsOptions)
def describe_replication_groups(
    options: Optional[DescribeReplicationGroupsOptions] = None,
    **kwargs: Any
) -> QueryRequest:
    """Describe all replication groups, or one when replication_group_id is given."""
    opts = _resolve_options(DescribeReplicationGroupsOptions, options, kwargs)
    return build_request("describe_replication_groups", opts.entries())


@_operation(DescribeCacheParametersOptions)
def describe_cache_parameters(
    cache_parameter_group_name: str,
    options: Optional[DescribeCacheParametersOptions] = None,
    **kwargs: Any
) -> QueryRequest:
    """List the parameters of a cache parameter group."""
    opts = _resolve_options(DescribeCacheParametersOptions, options, kwargs)
    return build_request("describe_cache_parameters", [
        ("CacheParameterGroupName", cache_parameter_group_name),
        *opts.entries(),
    ])


@_operation(DescribeGlobalReplicationGroupsOptions)
def describe_global_replication_groups(
    options: Optional[DescribeGlobalReplicationGroupsOptions] = None,
    **kwargs: Any
) -> QueryRequest:
    """Describe Global Datastores.

    Members are only listed by AWS when ``show_member_info=True``.
    """
    opts = _resolve_options(DescribeGlobalReplicationGroupsOptions, options, kwargs)
    return build_request("describe_global_replication_groups", opts.entries())


@_operation(DescribeSnapshotsOptions)
def describe_snapshots(
    options: Optional[DescribeSnapshotsOptions] = None,
    **kwargs: Any
) -> QueryRequest:
    opts = _resolve_options(DescribeSnapshotsOptions, options, kwargs)
    return build_request("describe_snapshots", opts.entries())


@_operation()
def reboot_cache_cluster(cache_cluster_id: str, cache_node_ids_to_reboot: Sequence[str]) -> QueryRequest:
    """Reboot some or all of the cache nodes in a cluster.

    Args:
        cache_cluster_id: Cluster identifier
        cache_node_ids_to_reboot: Node ids such as "0001"; sent in the given order

    Returns:
        QueryRequest for RebootCacheCluster
    """
    return build_request("reboot_cache_cluster", [
        ("cache_cluster_id", cache_cluster_id),
        ("cache_node_ids_to_reboot", cache_node_ids_to_reboot),
    ])


@_operation()
def add_tags_to_resource(resource_name: str, tags: TagsOption) -> QueryRequest:
    """Add cost allocation tags to a cluster, snapshot or other resource ARN."""
    return build_request("add_tags_to_resource", [("ResourceName", resource_name), ("tags", tags)])


@_operation()
def list_tags_for_resource(resource_name: str) -> QueryRequest:
    return build_request("list_tags_for_resource", [("ResourceName", resource_name)])


@_operation()
def remove_tags_from_resource(resource_name: str, tag_keys: Sequence[str]) -> QueryRequest:
    """Remove the tags with the given keys from a resource ARN."""
    return build_request("remove_tags_from_resource", [
        ("ResourceName", resource_name),
        ("tag_keys", tag_keys),
    ])
