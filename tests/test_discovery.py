"""Tests for availability zone discovery"""

from unittest.mock import MagicMock

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from aws_network_planner.errors import DiscoveryError
from aws_network_planner.modules.zones import (
    ZoneClient,
    ZoneDisplay,
    get_available_zones,
    zone_cache,
)


class TestZoneClient:
    @pytest.fixture
    def mock_ec2(self, mock_boto_session):
        client = MagicMock()
        mock_boto_session.client.return_value = client
        return client

    def test_discover_filters_and_sorts(self, mock_ec2, sample_zone_response):
        mock_ec2.describe_availability_zones.return_value = sample_zone_response
        zones = ZoneClient().discover("us-east-1")
        assert zones == ["us-east-1a", "us-east-1b"]

    def test_describe_keeps_everything(self, mock_ec2, sample_zone_response):
        mock_ec2.describe_availability_zones.return_value = sample_zone_response
        zones = ZoneClient().describe("us-east-1")
        assert [z["name"] for z in zones] == [
            "us-east-1-bos-1a",
            "us-east-1a",
            "us-east-1b",
            "us-east-1c",
        ]
        assert zones[0]["type"] == "local-zone"

    def test_uses_target_region(self, mock_boto_session, mock_ec2):
        mock_ec2.describe_availability_zones.return_value = {"AvailabilityZones": []}
        ZoneClient().discover("eu-west-1")
        mock_boto_session.client.assert_called_with("ec2", region_name="eu-west-1")

    def test_client_error_wrapped(self, mock_ec2):
        mock_ec2.describe_availability_zones.side_effect = ClientError(
            {"Error": {"Code": "UnauthorizedOperation", "Message": "denied"}},
            "DescribeAvailabilityZones",
        )
        with pytest.raises(DiscoveryError, match="UnauthorizedOperation"):
            ZoneClient().discover("us-east-1")

    def test_with_explicit_session(self):
        session = MagicMock()
        client = ZoneClient(session=session)
        assert client.session is session

    def test_unknown_profile_wrapped(self, aws_credentials, no_aws_config):
        with pytest.raises(DiscoveryError, match="no-such-profile"):
            ZoneClient("no-such-profile")


class TestZoneClientMoto:
    @mock_aws
    def test_discover_against_moto(self, aws_credentials):
        client = ZoneClient(session=boto3.Session(region_name="us-east-1"))
        zones = client.discover("us-east-1")

        assert "us-east-1a" in zones
        assert zones == sorted(zones)
        assert all(z.startswith("us-east-1") for z in zones)

    @mock_aws
    def test_account_id_against_moto(self, aws_credentials):
        client = ZoneClient(session=boto3.Session(region_name="us-east-1"))
        assert client.account_id() == "123456789012"


class FakeZoneClient:
    def __init__(self, zones, account="111111111111"):
        self.zones = zones
        self.account = account
        self.calls = 0

    def discover(self, region):
        self.calls += 1
        return list(self.zones)

    def account_id(self):
        return self.account


class TestGetAvailableZones:
    def test_caches_result(self, azs):
        client = FakeZoneClient(azs)
        assert get_available_zones("us-east-1", client=client) == azs
        assert get_available_zones("us-east-1", client=client) == azs
        assert client.calls == 1

    def test_cache_is_per_region(self, azs):
        client = FakeZoneClient(azs)
        get_available_zones("us-east-1", client=client)
        get_available_zones("us-west-2", client=client)
        assert client.calls == 2

    def test_no_cache_always_fetches(self, azs):
        client = FakeZoneClient(azs)
        get_available_zones("us-east-1", client=client, no_cache=True)
        get_available_zones("us-east-1", client=client, no_cache=True)
        assert client.calls == 2
        assert zone_cache("us-east-1").get() is None

    def test_refresh_cache_refetches(self, azs):
        client = FakeZoneClient(azs)
        get_available_zones("us-east-1", client=client)
        client.zones = azs[:1]
        assert get_available_zones("us-east-1", client=client, refresh_cache=True) == azs[:1]
        assert get_available_zones("us-east-1", client=client) == azs[:1]
        assert client.calls == 2

    def test_other_account_invalidates_cache(self, azs):
        get_available_zones("us-east-1", client=FakeZoneClient(azs, "111111111111"))
        other = FakeZoneClient(azs[:2], "222222222222")
        assert get_available_zones("us-east-1", client=other) == azs[:2]
        assert other.calls == 1

    def test_empty_answer_not_cached(self):
        client = FakeZoneClient([])
        get_available_zones("us-east-1", client=client)
        get_available_zones("us-east-1", client=client)
        assert client.calls == 2

    def test_corrupt_cache_entry_refetches(self, azs):
        cache = zone_cache("us-east-1")
        cache.cache_file.parent.mkdir(parents=True, exist_ok=True)
        cache.cache_file.write_text('{"data": ["x"], "cached_at": "garbage"}')

        client = FakeZoneClient(azs)
        assert get_available_zones("us-east-1", client=client) == azs
        assert client.calls == 1
        assert cache.get() == azs


class TestZoneDisplay:
    def test_show_list(self, mock_console, sample_zone_response, mock_boto_session):
        mock_boto_session.client.return_value.describe_availability_zones.return_value = (
            sample_zone_response
        )
        zones = ZoneClient().describe("us-east-1")
        ZoneDisplay(mock_console).show_list(zones, "us-east-1")
        output = mock_console._output.getvalue()
        assert "us-east-1a" in output
        assert "use1-az1" in output
        assert "impaired" in output

    def test_show_empty(self, mock_console):
        ZoneDisplay(mock_console).show_list([], "us-east-1")
        assert "No availability zones" in mock_console._output.getvalue()
