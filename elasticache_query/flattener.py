"""Flattening of nested option values into AWS Query protocol parameters.

The Query protocol has no nesting: lists and records are spelled out as
dotted, 1-indexed keys such as ``SecurityGroupIds.SecurityGroupId.2`` or
``NodeGroupConfigurations.NodeGroupConfiguration.1.ReplicaCount``.
Fields whose wire name cannot be derived mechanically from the Python
identifier are registered in ``FLATTENING_RULES``; every other field is
PascalCased.
"""

import logging
from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from elasticache_query.aws.exceptions import InvalidParameterShapeError, UnknownFieldError
from elasticache_query.aws.models import NodeGroupConfiguration, Tag

logger = logging.getLogger(__name__)

SCALAR_TYPES = (str, int, float, bool)

FlatPairs = List[Tuple[str, Any]]


class Strategy(Enum):
    """How a field's value is expanded into query parameters."""

    SCALAR = "scalar"
    INDEXED_LIST = "indexed_list"
    INDEXED_COMPOSITE = "indexed_composite"
    TAG_LIST = "tag_list"
    RENAME_ONLY = "rename_only"


@dataclass(frozen=True)
class FlatteningRule:
    """Strategy plus the wire name (or list prefix) for one field."""

    strategy: Strategy
    wire_name: str


FLATTENING_RULES: Dict[str, FlatteningRule] = {
    "az_mode": FlatteningRule(Strategy.RENAME_ONLY, "AZMode"),
    "cache_node_ids_to_reboot": FlatteningRule(
        Strategy.INDEXED_LIST, "CacheNodeIdsToReboot.CacheNodeId"
    ),
    "cache_security_group_names": FlatteningRule(
        Strategy.INDEXED_LIST, "CacheSecurityGroupNames.CacheSecurityGroupName"
    ),
    "node_group_configurations": FlatteningRule(
        Strategy.INDEXED_COMPOSITE, "NodeGroupConfigurations.NodeGroupConfiguration"
    ),
    "preferred_availability_zones": FlatteningRule(
        Strategy.INDEXED_LIST, "PreferredAvailabilityZones.PreferredAvailabilityZone"
    ),
    "preferred_cache_cluster_azs": FlatteningRule(
        Strategy.INDEXED_LIST, "PreferredCacheClusterAZs.AvailabilityZone"
    ),
    "security_group_ids": FlatteningRule(
        Strategy.INDEXED_LIST, "SecurityGroupIds.SecurityGroupId"
    ),
    "snapshot_arns": FlatteningRule(Strategy.INDEXED_LIST, "SnapshotArns.SnapshotArn"),
    "tag_keys": FlatteningRule(Strategy.INDEXED_LIST, "TagKeys.member"),
    "tags": FlatteningRule(Strategy.TAG_LIST, "Tags.Tag"),
}


def camelize(identifier: str) -> str:
    """Convert a snake_case identifier to PascalCase.

    Identifiers without underscores keep their casing apart from the first
    letter, so ``EC2SecurityGroupName`` passes through unchanged.
    The mapping is not injective across spellings: "cache__cluster_id",
    "CacheClusterId" and "cache_cluster_id" all give "CacheClusterId".
    ``flatten_options`` warns when two fields land on the same key.

    Args:
        identifier: Field or action identifier (e.g., "cache_cluster_id")

    Returns:
        PascalCase name (e.g., "CacheClusterId")
    """
    return "".join(part[:1].upper() + part[1:] for part in identifier.split("_"))


def rule_for(field_name: str) -> FlatteningRule:
    """Return the registered rule for a field, or the mechanical scalar rule."""
    rule = FLATTENING_RULES.get(field_name)
    if rule is not None:
        return rule
    return FlatteningRule(Strategy.SCALAR, camelize(field_name))


def wire_name(field_name: str) -> str:
    """Wire name of a record member, honoring rename-only rules."""
    rule = FLATTENING_RULES.get(field_name)
    if rule is not None and rule.strategy is Strategy.RENAME_ONLY:
        return rule.wire_name
    return camelize(field_name)


def _as_record(value: Any) -> Optional[List[Tuple[str, Any]]]:
    if isinstance(value, Mapping):
        return list(value.items())
    if is_dataclass(value) and not isinstance(value, type):
        return [(f.name, getattr(value, f.name)) for f in fields(value)]
    return None


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def flatten_value(value: Any, prefix: str) -> FlatPairs:
    """Recursively flatten a value under a key prefix.

    Scalars map to the prefix itself, sequences to ``prefix.N`` (1-based)
    and records (mappings or dataclasses) to ``prefix.MemberName``.

    Args:
        value: Scalar, sequence, mapping or dataclass instance
        prefix: Key prefix the value is emitted under

    Returns:
        Ordered list of (key, value) pairs

    Raises:
        InvalidParameterShapeError: If the value is none of the above
    """
    if value is None:
        return [(prefix, None)]
    if isinstance(value, Enum):
        return [(prefix, value.value)]
    if isinstance(value, SCALAR_TYPES):
        return [(prefix, value)]

    record = _as_record(value)
    if record is not None:
        pairs: FlatPairs = []
        for member, item in record:
            pairs.extend(flatten_value(item, f"{prefix}.{wire_name(member)}"))
        return pairs

    if _is_sequence(value):
        pairs = []
        for index, item in enumerate(value, start=1):
            pairs.extend(flatten_value(item, f"{prefix}.{index}"))
        return pairs

    raise InvalidParameterShapeError(prefix, "a scalar, sequence or record", value)


def _scalar_list(field_name: str, value: Any) -> List[Any]:
    if not _is_sequence(value):
        raise InvalidParameterShapeError(field_name, "a list of scalars", value)
    items = []
    for item in value:
        if isinstance(item, Enum):
            item = item.value
        if not isinstance(item, SCALAR_TYPES):
            raise InvalidParameterShapeError(field_name, "a list of scalars", value)
        items.append(item)
    return items


def _flatten_scalar(field_name: str, value: Any, rule: FlatteningRule, strict: bool) -> FlatPairs:
    if isinstance(value, SCALAR_TYPES) or isinstance(value, Enum):
        return flatten_value(value, rule.wire_name)
    if strict:
        raise UnknownFieldError(field_name)
    # No rule: expand lists and records generically under the PascalCase name
    return flatten_value(value, rule.wire_name)


def _flatten_rename_only(field_name: str, value: Any, rule: FlatteningRule, strict: bool) -> FlatPairs:
    return flatten_value(value, rule.wire_name)


def _flatten_indexed_list(field_name: str, value: Any, rule: FlatteningRule, strict: bool) -> FlatPairs:
    items = _scalar_list(field_name, value)
    return [(f"{rule.wire_name}.{index}", item) for index, item in enumerate(items, start=1)]


def _node_group_record(field_name: str, group: Any) -> Dict[str, Any]:
    if isinstance(group, NodeGroupConfiguration):
        primary, replicas, count, slots = (
            group.primary_availability_zone,
            group.replica_availability_zones,
            group.replica_count,
            group.slots,
        )
    elif _is_sequence(group) and len(group) == 4:
        primary, replicas, count, slots = group
    else:
        raise InvalidParameterShapeError(
            field_name,
            "a NodeGroupConfiguration or a 4-item "
            "(primary zone, replica zones, replica count, slots) tuple",
            group,
        )

    return {
        "primary_availability_zone": primary,
        "replica_availability_zones": {
            "availability_zone": _scalar_list(f"{field_name}.replica_availability_zones", replicas)
        },
        "replica_count": count,
        "slots": slots,
    }


def _flatten_indexed_composite(field_name: str, value: Any, rule: FlatteningRule, strict: bool) -> FlatPairs:
    if not _is_sequence(value):
        raise InvalidParameterShapeError(field_name, "a list of node group configurations", value)

    pairs: FlatPairs = []
    for index, group in enumerate(value, start=1):
        record = _node_group_record(field_name, group)
        pairs.extend(flatten_value(record, f"{rule.wire_name}.{index}"))
    return pairs


def _stringify_tag_key(key: Any) -> str:
    if isinstance(key, Enum):
        return str(key.value)
    return key if isinstance(key, str) else str(key)


def _tag_pairs(field_name: str, value: Any) -> List[Tuple[Any, Any]]:
    if isinstance(value, Mapping):
        return list(value.items())
    if not _is_sequence(value):
        raise InvalidParameterShapeError(field_name, "a list of (key, value) tags", value)

    tags = []
    for tag in value:
        if isinstance(tag, Tag):
            tags.append((tag.key, tag.value))
        elif _is_sequence(tag) and len(tag) == 2:
            tags.append((tag[0], tag[1]))
        else:
            raise InvalidParameterShapeError(field_name, "a Tag or a (key, value) pair", tag)
    return tags


def _flatten_tag_list(field_name: str, value: Any, rule: FlatteningRule, strict: bool) -> FlatPairs:
    pairs: FlatPairs = []
    for index, (key, tag_value) in enumerate(_tag_pairs(field_name, value), start=1):
        pairs.append((f"{rule.wire_name}.{index}.Key", _stringify_tag_key(key)))
        pairs.append((f"{rule.wire_name}.{index}.Value", tag_value))
    return pairs


_STRATEGY_HANDLERS: Dict[Strategy, Callable[[str, Any, FlatteningRule, bool], FlatPairs]] = {
    Strategy.SCALAR: _flatten_scalar,
    Strategy.RENAME_ONLY: _flatten_rename_only,
    Strategy.INDEXED_LIST: _flatten_indexed_list,
    Strategy.INDEXED_COMPOSITE: _flatten_indexed_composite,
    Strategy.TAG_LIST: _flatten_tag_list,
}


def flatten_entry(field_name: str, value: Any, strict: bool = False) -> FlatPairs:
    """Flatten a single option entry.

    ``None`` is forwarded as an absent value under the field's base key so
    the request builder can drop it.

    Args:
        field_name: Field identifier (snake_case, or an exact AWS name)
        value: Option value
        strict: Raise UnknownFieldError for structured values without a rule

    Returns:
        Ordered list of (key, value) pairs
    """
    rule = rule_for(field_name)
    if value is None:
        return [(rule.wire_name, None)]

    pairs = _STRATEGY_HANDLERS[rule.strategy](field_name, value, rule, strict)
    logger.debug(f"Flattened {field_name} ({rule.strategy.value}) into {len(pairs)} keys")
    return pairs


def flatten_options(entries: Iterable[Tuple[str, Any]], strict: bool = False) -> Dict[str, Any]:
    """Flatten an ordered list of option entries into a flat parameter mapping.

    Repeated keys keep the last present value. An absent (``None``) value
    never replaces a present one.

    Args:
        entries: Ordered (field, value) pairs
        strict: Raise UnknownFieldError for structured values without a rule

    Returns:
        Mapping of query parameter key to value, possibly holding ``None``
    """
    params: Dict[str, Any] = {}
    sources: Dict[str, str] = {}
    for field_name, value in entries:
        for key, flat_value in flatten_entry(field_name, value, strict=strict):
            if flat_value is None:
                params.setdefault(key, None)
                continue
            if params.get(key) is not None:
                if sources[key] != field_name:
                    logger.warning(
                        f"Fields {sources[key]} and {field_name} both map to {key}; keeping the last value"
                    )
                else:
                    logger.warning(f"Duplicate query parameter {key}; keeping the last value")
            params[key] = flat_value
            sources[key] = field_name
    return params
