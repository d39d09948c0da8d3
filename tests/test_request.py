"""Unit tests for the request builder."""

import dataclasses

import pytest

from elasticache_query.aws.exceptions import InvalidParameterShapeError
from elasticache_query.aws.models import QueryRequest
from elasticache_query.aws.request import API_VERSION, action_name, build_request


class TestActionName:
    """Tests for action_name()."""

    @pytest.mark.parametrize("action,expected", [
        ("create_cache_cluster", "CreateCacheCluster"),
        ("authorize_cache_security_group_ingress", "AuthorizeCacheSecurityGroupIngress"),
        ("DescribeSnapshots", "DescribeSnapshots"),
    ])
    def test_pascal_case(self, action, expected):
        """Test action identifier conversion."""
        assert action_name(action) == expected


class TestBuildRequest:
    """Tests for build_request()."""

    def test_descriptor_fields(self):
        """Test path, service and action of the descriptor."""
        request = build_request("delete_snapshot", [("SnapshotName", "s1")])

        assert request == QueryRequest(
            action="delete_snapshot",
            params={"SnapshotName": "s1", "Action": "DeleteSnapshot", "Version": "2015-02-02"},
            path="/",
            service="elasticache",
        )

    def test_no_entries(self):
        """Test that an empty entry list yields only Action and Version."""
        request = build_request("describe_cache_clusters", [])
        assert request.params == {"Action": "DescribeCacheClusters", "Version": API_VERSION}

    def test_absent_values_dropped(self):
        """Test that None values never reach the descriptor."""
        request = build_request("delete_cache_cluster", [
            ("CacheClusterId", "Test"),
            ("final_snapshot_identifier", None),
            ("tags", None),
        ])

        assert request.params == {
            "CacheClusterId": "Test",
            "Action": "DeleteCacheCluster",
            "Version": API_VERSION,
        }
        assert None not in request.params.values()

    def test_falsy_values_kept(self):
        """Test that empty strings, zero and False are real values."""
        request = build_request("describe_cache_clusters", [
            ("marker", ""),
            ("max_records", 0),
            ("show_cache_node_info", False),
        ])

        assert request.params["Marker"] == ""
        assert request.params["MaxRecords"] == 0
        assert request.params["ShowCacheNodeInfo"] is False

    def test_action_and_version_cannot_be_overridden(self):
        """Test that caller entries named Action or Version are replaced."""
        request = build_request("copy_snapshot", [("Action", "DeleteSnapshot"), ("Version", "1999-01-01")])

        assert request.params["Action"] == "CopySnapshot"
        assert request.params["Version"] == API_VERSION

    def test_atomic_on_error(self):
        """Test that a shape error propagates and no descriptor is built."""
        with pytest.raises(InvalidParameterShapeError):
            build_request("create_replication_group", [
                ("ReplicationGroupId", "rg"),
                ("node_group_configurations", [("us-east-1a",)]),
            ])

    def test_descriptor_is_frozen(self):
        """Test that descriptor fields cannot be reassigned."""
        request = build_request("list_tags_for_resource", [("ResourceName", "arn:aws:elasticache:x")])

        with pytest.raises(dataclasses.FrozenInstanceError):
            request.action = "other"

    def test_params_are_read_only(self):
        """Test that params cannot be changed after the request is built."""
        request = build_request("delete_cache_cluster", [("CacheClusterId", "Test")])

        with pytest.raises(TypeError):
            request.params.pop("Version")
        with pytest.raises(TypeError):
            request.params["FinalSnapshotIdentifier"] = None
        assert request.params["Version"] == API_VERSION

    def test_caller_dict_is_copied(self):
        """Test that a descriptor does not share the mapping it was given."""
        params = {"Action": "DeleteSnapshot", "Version": API_VERSION}
        request = QueryRequest(action="delete_snapshot", params=params)

        params["SnapshotName"] = "s1"

        assert "SnapshotName" not in request.params

    def test_descriptor_is_hashable(self):
        """Test that equal descriptors hash equally."""
        first = build_request("describe_cache_clusters", [("MaxRecords", 20)])
        second = build_request("describe_cache_clusters", [("MaxRecords", 20)])

        assert hash(first) == hash(second)
        assert len({first, second}) == 1
