"""Tests for the aws-plan CLI"""

import json
import time
from unittest.mock import patch

import pytest
import yaml
from rich.console import Console
from typer.testing import CliRunner

from aws_network_planner import cli
from aws_network_planner.core.cache import Cache, get_default_ttl

runner = CliRunner()

AVAILABLE = "us-east-1a,us-east-1b,us-east-1c"


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Wide console so tables are not truncated in captured output"""
    monkeypatch.setattr(cli, "console", Console(width=200))


def plan(*args, fmt="table"):
    return runner.invoke(
        cli.app,
        ["--format", fmt, "plan", "--region", "us-east-1", "--available", AVAILABLE, *args],
    )


class TestPlanCommand:
    def test_table_output(self):
        result = plan("--ha")
        assert result.exit_code == 0, result.output
        assert "10.0.0.0/19" in result.output
        assert "10.0.160.0/19" in result.output
        assert "nat-2" in result.output
        assert "eks-private-shared" not in result.output

    def test_json_output(self):
        result = plan("--ha", fmt="json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        cidrs = [s["cidr"] for s in data["allocation"]["subnets"]]
        assert cidrs[3] == "10.0.96.0/19"
        assert len(data["nat"]["gateways"]) == 3

    def test_yaml_output(self):
        result = plan("--no-ha", "--public", "2", "--private", "2", fmt="yaml")
        assert result.exit_code == 0, result.output
        data = yaml.safe_load(result.stdout)
        assert len(data["nat"]["gateways"]) == 1
        assert data["allocation"]["new_bits"] == 2

    def test_overrides(self):
        result = plan(
            "--cidr", "172.16.0.0/20", "--az", "us-east-1b", "--az-count", "1",
            "--public", "1", "--private", "1", fmt="json",
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["azs"] == ["us-east-1b"]
        assert [s["cidr"] for s in data["allocation"]["subnets"]] == [
            "172.16.0.0/21",
            "172.16.8.0/21",
        ]

    def test_config_file(self, tmp_path, sample_config_yaml):
        path = tmp_path / "planner.yaml"
        path.write_text(sample_config_yaml)
        result = plan("--config", str(path), "--private", "6", fmt="json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["name"] == "eks-prod"
        assert data["allocation"]["private_count"] == 6
        assert data["nat"]["high_availability"] is True

    def test_invalid_az(self):
        result = plan("--az", "us-east-1z")
        assert result.exit_code == 1
        assert "us-east-1z" in result.output

    def test_prefix_exhausted(self):
        result = plan("--cidr", "10.0.0.0/31")
        assert result.exit_code == 1
        assert "exceeds /32" in result.output

    def test_no_public_subnet(self):
        result = plan("--public", "0")
        assert result.exit_code == 1
        assert "public subnet" in result.output

    def test_bad_cidr(self):
        result = plan("--cidr", "banana")
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_invalid_format(self):
        result = runner.invoke(cli.app, ["--format", "xml", "plan"])
        assert result.exit_code == 1
        assert "Invalid format" in result.output

    def test_discovers_when_no_available_given(self):
        with patch.object(
            cli, "get_available_zones", return_value=["us-east-1a", "us-east-1b"]
        ) as discover:
            result = runner.invoke(
                cli.app,
                ["--format", "json", "plan", "--region", "us-east-1", "--no-cache"],
            )
        assert result.exit_code == 0, result.output
        discover.assert_called_once_with(
            "us-east-1", None, no_cache=True, refresh_cache=False
        )
        assert json.loads(result.stdout)["azs"] == ["us-east-1a", "us-east-1b"]

    def test_unknown_profile(self, aws_credentials, no_aws_config):
        result = runner.invoke(
            cli.app,
            ["plan", "--region", "us-east-1", "--profile", "no-such-profile", "--no-cache"],
        )
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "no-such-profile" in result.output

    def test_discovery_timeout(self, monkeypatch):
        def slow(*args, **kwargs):
            time.sleep(1.0)
            return ["us-east-1a"]

        monkeypatch.setattr(cli, "get_available_zones", slow)
        result = runner.invoke(
            cli.app, ["--timeout", "0", "plan", "--region", "us-east-1"]
        )
        assert result.exit_code == 1
        assert "timed out" in result.output


class TestZonesCommand:
    def test_lists_zones(self, mock_boto_session, sample_zone_response):
        mock_boto_session.client.return_value.describe_availability_zones.return_value = (
            sample_zone_response
        )
        result = runner.invoke(cli.app, ["zones", "--region", "us-east-1"])
        assert result.exit_code == 0, result.output
        assert "use1-az1" in result.output
        assert "local-zone" in result.output

    def test_unknown_profile(self, aws_credentials, no_aws_config):
        result = runner.invoke(
            cli.app, ["zones", "--region", "us-east-1", "--profile", "no-such-profile"]
        )
        assert result.exit_code == 1
        assert "no-such-profile" in result.output


class TestCacheCommands:
    def test_cache_timeout(self):
        result = runner.invoke(cli.app, ["cache-timeout", "2h"])
        assert result.exit_code == 0
        assert "2h" in result.output
        assert get_default_ttl() == 7200

    def test_cache_timeout_invalid(self):
        result = runner.invoke(cli.app, ["cache-timeout", "soon"])
        assert result.exit_code == 1
        assert "Invalid TTL" in result.output

    def test_clear_cache(self):
        Cache("zones-us-east-1").set(["us-east-1a"])
        result = runner.invoke(cli.app, ["clear-cache"])
        assert result.exit_code == 0
        assert "zones-us-east-1" in result.output
        assert Cache("zones-us-east-1").get() is None

    def test_show_config(self, tmp_path, sample_config_yaml):
        path = tmp_path / "planner.yaml"
        path.write_text(sample_config_yaml)
        result = runner.invoke(
            cli.app, ["--format", "json", "show-config", "--config", str(path)]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["planner"]["name"] == "eks-prod"
        assert data["cache_ttl_seconds"] == get_default_ttl()
