"""Data models for ElastiCache query requests."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, List, Mapping, Union


@dataclass(frozen=True)
class QueryRequest:
    """Query protocol request descriptor handed to a transport.

    ``params`` is flat: every key is a full query parameter name such as
    ``Tags.Tag.1.Key`` and every value is a str, int, float or bool.
    It always holds ``Action`` and ``Version`` and never holds ``None``.
    The mapping is a read-only copy of what the request was built with.
    """

    action: str
    params: Mapping[str, Any] = field(default_factory=dict)
    path: str = "/"
    service: str = "elasticache"

    def __post_init__(self):
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def __hash__(self):
        return hash((self.action, tuple(sorted(self.params.items())), self.path, self.service))


@dataclass
class Tag:
    """Cost allocation tag."""

    key: Any
    value: str


@dataclass
class NodeGroupConfiguration:
    """Shard layout for a cluster mode enabled replication group."""

    primary_availability_zone: str
    replica_availability_zones: List[str]
    replica_count: int
    slots: Union[str, int]
