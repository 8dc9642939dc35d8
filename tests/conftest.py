"""Shared pytest fixtures"""

import pytest
from unittest.mock import MagicMock, patch
from rich.console import Console
from io import StringIO

from aws_network_planner.core import cache as cache_module

AZS = ["us-east-1a", "us-east-1b", "us-east-1c"]


@pytest.fixture(autouse=True)
def isolated_cache_dir(tmp_path, monkeypatch):
    """Keep every test away from ~/.cache"""
    cache_dir = tmp_path / "cache"
    monkeypatch.setattr(cache_module, "CACHE_DIR", cache_dir)
    monkeypatch.setattr(cache_module, "CONFIG_FILE", cache_dir / "config.json")
    return cache_dir


@pytest.fixture
def mock_console():
    """Create a console that captures output"""
    output = StringIO()
    console = Console(file=output, force_terminal=False, width=160)
    console._output = output
    return console


@pytest.fixture
def mock_boto_session():
    """Mock boto3 session"""
    with patch("boto3.Session") as mock:
        session = MagicMock()
        session.region_name = "us-east-1"
        mock.return_value = session
        yield session


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so moto never reaches real AWS"""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def azs():
    return list(AZS)


@pytest.fixture
def sample_zone_response():
    """describe_availability_zones payload with a local zone mixed in"""
    return {
        "AvailabilityZones": [
            {
                "ZoneName": "us-east-1b",
                "ZoneId": "use1-az2",
                "State": "available",
                "ZoneType": "availability-zone",
                "RegionName": "us-east-1",
            },
            {
                "ZoneName": "us-east-1a",
                "ZoneId": "use1-az1",
                "State": "available",
                "ZoneType": "availability-zone",
                "RegionName": "us-east-1",
            },
            {
                "ZoneName": "us-east-1-bos-1a",
                "ZoneId": "use1-bos1-az1",
                "State": "available",
                "ZoneType": "local-zone",
                "RegionName": "us-east-1",
            },
            {
                "ZoneName": "us-east-1c",
                "ZoneId": "use1-az3",
                "State": "impaired",
                "ZoneType": "availability-zone",
                "RegionName": "us-east-1",
            },
        ]
    }


@pytest.fixture
def sample_config_yaml():
    return """\
name: eks-prod
region: us-east-1
cidr: 10.0.0.0/16
public_subnets: 3
private_subnets: 3
az_count: 3
high_availability: true
cluster_name: prod
tags:
  Environment: prod
"""


@pytest.fixture
def no_aws_config(tmp_path, monkeypatch):
    """Point botocore at empty config files so named profiles are unknown"""
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "aws-config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "aws-credentials"))
