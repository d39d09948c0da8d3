"""Typed optional parameters for each ElastiCache operation.

Every field defaults to ``None``, meaning "not provided". ``None`` is never
sent; ``""``, ``0``, ``False`` and ``[]`` are real values.
"""

from dataclasses import dataclass, fields
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from elasticache_query.aws.models import NodeGroupConfiguration, Tag

TagsOption = Union[Sequence[Union[Tag, Tuple[Any, str]]], Mapping[Any, str]]
NodeGroupsOption = Sequence[
    Union[NodeGroupConfiguration, Tuple[str, Sequence[str], int, Union[str, int]]]
]


@dataclass
class RequestOptions:
    """Base class for operation options."""

    def entries(self) -> List[Tuple[str, Any]]:
        """Option entries in field declaration order, unset fields included."""
        return [(f.name, getattr(self, f.name)) for f in fields(self)]


@dataclass
class CopySnapshotOptions(RequestOptions):
    """Options for CopySnapshot."""

    target_bucket: Optional[str] = None
    kms_key_id: Optional[str] = None
    tags: Optional[TagsOption] = None


@dataclass
class CreateCacheClusterOptions(RequestOptions):
    """Options for CreateCacheCluster."""

    auth_token: Optional[str] = None
    auto_minor_version_upgrade: Optional[bool] = None
    az_mode: Optional[str] = None
    cache_parameter_group_name: Optional[str] = None
    cache_security_group_names: Optional[Sequence[str]] = None
    cache_subnet_group_name: Optional[str] = None
    engine_version: Optional[str] = None
    notification_topic_arn: Optional[str] = None
    port: Optional[int] = None
    preferred_availability_zone: Optional[str] = None
    preferred_availability_zones: Optional[Sequence[str]] = None
    preferred_maintenance_window: Optional[str] = None
    replication_group_id: Optional[str] = None
    security_group_ids: Optional[Sequence[str]] = None
    snapshot_arns: Optional[Sequence[str]] = None
    snapshot_name: Optional[str] = None
    snapshot_retention_limit: Optional[int] = None
    snapshot_window: Optional[str] = None
    tags: Optional[TagsOption] = None


@dataclass
class CreateReplicationGroupOptions(RequestOptions):
    """Options for CreateReplicationGroup."""

    at_rest_encryption_enabled: Optional[bool] = None
    auth_token: Optional[str] = None
    automatic_failover_enabled: Optional[bool] = None
    auto_minor_version_upgrade: Optional[bool] = None
    cache_node_type: Optional[str] = None
    cache_parameter_group_name: Optional[str] = None
    cache_security_group_names: Optional[Sequence[str]] = None
    cache_subnet_group_name: Optional[str] = None
    engine: Optional[str] = None
    engine_version: Optional[str] = None
    node_group_configurations: Optional[NodeGroupsOption] = None
    notification_topic_arn: Optional[str] = None
    num_cache_clusters: Optional[int] = None
    num_node_groups: Optional[int] = None
    port: Optional[int] = None
    preferred_cache_cluster_azs: Optional[Sequence[str]] = None
    preferred_maintenance_window: Optional[str] = None
    primary_cluster_id: Optional[str] = None
    replicas_per_node_group: Optional[int] = None
    security_group_ids: Optional[Sequence[str]] = None
    snapshot_arns: Optional[Sequence[str]] = None
    snapshot_name: Optional[str] = None
    snapshot_retention_limit: Optional[int] = None
    snapshot_window: Optional[str] = None
    tags: Optional[TagsOption] = None
    transit_encryption_enabled: Optional[bool] = None


@dataclass
class CreateSnapshotOptions(RequestOptions):
    """Options for CreateSnapshot."""

    cache_cluster_id: Optional[str] = None
    replication_group_id: Optional[str] = None


@dataclass
class DeleteCacheClusterOptions(RequestOptions):
    """Options for DeleteCacheCluster."""

    final_snapshot_identifier: Optional[str] = None


@dataclass
class DeleteReplicationGroupOptions(RequestOptions):
    """Options for DeleteReplicationGroup."""

    final_snapshot_identifier: Optional[str] = None
    retain_primary_cluster: Optional[bool] = None


@dataclass
class DescribeCacheClustersOptions(RequestOptions):
    """Options for DescribeCacheClusters."""

    cache_cluster_id: Optional[str] = None
    marker: Optional[str] = None
    max_records: Optional[int] = None
    show_cache_clusters_not_in_replication_groups: Optional[bool] = None
    show_cache_node_info: Optional[bool] = None


@dataclass
class DescribeCacheEngineVersionsOptions(RequestOptions):
    """Options for DescribeCacheEngineVersions."""

    cache_parameter_group_family: Optional[str] = None
    default_only: Optional[bool] = None
    engine: Optional[str] = None
    engine_version: Optional[str] = None
    marker: Optional[str] = None
    max_records: Optional[int] = None


@dataclass
class DescribeReplicationGroupsOptions(RequestOptions):
    """Options for DescribeReplicationGroups."""

    marker: Optional[str] = None
    max_records: Optional[int] = None
    replication_group_id: Optional[str] = None


@dataclass
class DescribeCacheParametersOptions(RequestOptions):
    """Options for DescribeCacheParameters."""

    source: Optional[str] = None
    marker: Optional[str] = None
    max_records: Optional[int] = None


@dataclass
class DescribeGlobalReplicationGroupsOptions(RequestOptions):
    """Options for DescribeGlobalReplicationGroups."""

    global_replication_group_id: Optional[str] = None
    marker: Optional[str] = None
    max_records: Optional[int] = None
    show_member_info: Optional[bool] = None


@dataclass
class DescribeSnapshotsOptions(RequestOptions):
    """Options for DescribeSnapshots."""

    cache_cluster_id: Optional[str] = None
    replication_group_id: Optional[str] = None
    snapshot_name: Optional[str] = None
    snapshot_source: Optional[str] = None
    marker: Optional[str] = None
    max_records: Optional[int] = None
    show_node_group_config: Optional[bool] = None
