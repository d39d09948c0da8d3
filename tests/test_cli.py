"""Tests for the command line interface."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from elasticache_query.cli import app


@pytest.fixture
def runner():
    return CliRunner()


class TestBuild:
    """Tests for the build command."""

    def test_query_string_output(self, runner):
        """Test the default query string output."""
        result = runner.invoke(app, ["build", "delete_snapshot", "-p", "snapshot_name=s1"])

        assert result.exit_code == 0
        assert "Action=DeleteSnapshot&SnapshotName=s1&Version=2015-02-02" in result.output

    def test_json_list_parameter(self, runner):
        """Test JSON list values and JSON output."""
        result = runner.invoke(app, [
            "build", "reboot_cache_cluster",
            "-p", "cache_cluster_id=MyCacheClusterId",
            "-p", 'cache_node_ids_to_reboot=["0001", "0002"]',
            "-f", "json",
        ])

        assert result.exit_code == 0
        document = json.loads(result.output)
        assert document["params"]["CacheNodeIdsToReboot.CacheNodeId.2"] == "0002"
        assert document["action"] == "reboot_cache_cluster"

    def test_dashed_operation_name(self, runner):
        """Test operation names may use dashes."""
        result = runner.invoke(app, ["build", "describe-cache-clusters", "-p", "max-records=20"])

        assert result.exit_code == 0
        assert "MaxRecords=20" in result.output

    def test_node_groups_as_csv(self, runner):
        """Test node group tuples given as JSON arrays."""
        result = runner.invoke(app, [
            "build", "create_replication_group",
            "-p", "replication_group_id=rg",
            "-p", "replication_group_description=desc",
            "-p", 'node_group_configurations=[["us-east-1a", ["us-east-1b"], 1, 0]]',
            "-f", "csv",
        ])

        assert result.exit_code == 0
        assert "NodeGroupConfigurations.NodeGroupConfiguration.1.ReplicaCount,1" in result.output

    def test_missing_required_parameter(self, runner):
        """Test a missing positional parameter exits with an error."""
        result = runner.invoke(app, ["build", "reboot_cache_cluster", "-p", "cache_cluster_id=c1"])

        assert result.exit_code == 1
        assert "cache_node_ids_to_reboot" in result.output

    def test_unknown_operation(self, runner):
        """Test an unknown operation exits with an error."""
        result = runner.invoke(app, ["build", "launch_rockets"])

        assert result.exit_code == 1
        assert "launch_rockets" in result.output

    def test_unknown_option(self, runner):
        """Test an unknown option exits with an error."""
        result = runner.invoke(app, ["build", "delete_snapshot", "-p", "snapshot_name=s1", "-p", "force=true"])

        assert result.exit_code == 1

    def test_bad_shape(self, runner):
        """Test a malformed node group exits with an error."""
        result = runner.invoke(app, [
            "build", "create_replication_group",
            "-p", "replication_group_id=rg",
            "-p", "replication_group_description=desc",
            "-p", 'node_group_configurations=[["us-east-1a"]]',
        ])

        assert result.exit_code == 1
        assert "Invalid shape" in result.output

    def test_invalid_format(self, runner):
        """Test an invalid output format."""
        result = runner.invoke(app, ["build", "delete_snapshot", "-p", "snapshot_name=s1", "-f", "xml"])

        assert result.exit_code == 1

    def test_output_file(self, runner, tmp_path):
        """Test writing the formatted request to a file."""
        output_file = tmp_path / "out" / "request.md"

        result = runner.invoke(app, [
            "build", "delete_cache_cluster",
            "-p", "cache_cluster_id=Test",
            "-f", "markdown",
            "-o", str(output_file),
        ])

        assert result.exit_code == 0
        content = output_file.read_text(encoding="utf-8")
        assert content.startswith("| Key | Value |")
        assert "| CacheClusterId | Test |" in content

    def test_number_like_identifier_kept_verbatim(self, runner):
        """Test values that look like numbers are sent unchanged."""
        result = runner.invoke(app, ["build", "delete_cache_cluster", "-p", "cache_cluster_id=1e3"])

        assert result.exit_code == 0
        assert "CacheClusterId=1e3" in result.output

    def test_null_is_not_dropped(self, runner):
        """Test the word null is a value, not a missing required parameter."""
        result = runner.invoke(app, ["build", "delete_snapshot", "-p", "snapshot_name=null"])

        assert result.exit_code == 0
        assert "Action=DeleteSnapshot&SnapshotName=null&Version=2015-02-02" in result.output

    def test_invalid_json_value(self, runner):
        """Test a value that starts like JSON but does not decode."""
        result = runner.invoke(app, [
            "build", "reboot_cache_cluster",
            "-p", "cache_cluster_id=c1",
            "-p", 'cache_node_ids_to_reboot=["0001",',
        ])

        assert result.exit_code == 1
        assert "Invalid JSON value" in result.output

    def test_output_directory(self, runner, tmp_path):
        """Test a directory given to -o gets a generated file name."""
        result = runner.invoke(app, [
            "build", "delete_snapshot",
            "-p", "snapshot_name=s1",
            "-f", "json",
            "-o", str(tmp_path),
        ])

        assert result.exit_code == 0
        written = list(tmp_path.glob("elasticache-delete_snapshot-*.json"))
        assert len(written) == 1
        assert json.loads(written[0].read_text(encoding="utf-8"))["params"]["SnapshotName"] == "s1"

    def test_output_directory_created(self, runner, tmp_path):
        """Test a missing directory ending in a slash is created."""
        target = tmp_path / "requests"

        result = runner.invoke(app, [
            "build", "delete_snapshot",
            "-p", "snapshot_name=s1",
            "-o", f"{target}/",
        ])

        assert result.exit_code == 0
        written = list(target.glob("elasticache-delete_snapshot-*.txt"))
        assert len(written) == 1
        assert written[0].read_text(encoding="utf-8") == "Action=DeleteSnapshot&SnapshotName=s1&Version=2015-02-02"

    @patch('elasticache_query.cli.ServiceCatalog')
    def test_check_reports_missing_members(self, mock_catalog, runner):
        """Test --check warns about required members missing from the request."""
        mock_catalog.return_value.missing_required_members.return_value = ["CacheNodeIdsToReboot"]

        result = runner.invoke(app, [
            "build", "reboot_cache_cluster",
            "-p", "cache_cluster_id=c1",
            "-p", "cache_node_ids_to_reboot=[]",
            "--check",
        ])

        assert result.exit_code == 0
        assert "CacheNodeIdsToReboot" in result.output
        mock_catalog.assert_called_once_with(region="us-east-1")


class TestOperations:
    """Tests for the operations command."""

    def test_filter(self, runner):
        """Test listing filtered operations."""
        result = runner.invoke(app, ["operations", "-c", "describe_snap*"])

        assert result.exit_code == 0
        assert "describe_snapshots" in result.output
        assert "DescribeSnapshots" in result.output
        assert "reboot_cache_cluster" not in result.output

    def test_no_match(self, runner):
        """Test a filter matching nothing."""
        result = runner.invoke(app, ["operations", "-c", "nothing_*"])

        assert result.exit_code == 0
        assert "No operations match" in result.output

    @patch('elasticache_query.cli.ServiceCatalog')
    def test_check(self, mock_catalog, runner):
        """Test --check adds the model column."""
        mock_catalog.return_value.has_operation.return_value = True

        result = runner.invoke(app, ["operations", "-c", "delete_snapshot", "--check"])

        assert result.exit_code == 0
        assert "In Model" in result.output
        assert "yes" in result.output
