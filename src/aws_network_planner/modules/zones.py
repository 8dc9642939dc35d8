"""Availability zone discovery module"""

from typing import Optional
import boto3
from botocore.exceptions import BotoCoreError, ClientError
from rich.table import Table

from ..core import BaseClient, BaseDisplay, Cache
from ..core.logging import get_logger
from ..errors import DiscoveryError

logger = get_logger("discovery")


def zone_cache(region: str) -> Cache:
    return Cache(f"zones-{region}")


class ZoneClient(BaseClient):
    def __init__(
        self, profile: Optional[str] = None, session: Optional[boto3.Session] = None
    ):
        super().__init__(profile, session)

    def describe(self, region: str) -> list[dict]:
        """Raw zone records for a region, sorted by zone name."""
        try:
            ec2 = self.client("ec2", region_name=region)
            resp = ec2.describe_availability_zones()
        except (BotoCoreError, ClientError) as e:
            raise DiscoveryError(
                f"describe_availability_zones failed in {region}: {e}"
            ) from e

        zones = []
        for z in resp.get("AvailabilityZones", []):
            zones.append(
                {
                    "name": z["ZoneName"],
                    "id": z.get("ZoneId", ""),
                    "state": z.get("State", "available"),
                    "type": z.get("ZoneType", "availability-zone"),
                    "region": z.get("RegionName", region),
                }
            )
        return sorted(zones, key=lambda z: z["name"])

    def discover(self, region: str) -> list[str]:
        """Names of usable availability zones in ``region``, alphabetical.

        Local and Wavelength zones are excluded, as are zones not in the
        ``available`` state.
        """
        names = [
            z["name"]
            for z in self.describe(region)
            if z["state"] == "available" and z["type"] == "availability-zone"
        ]
        logger.debug("Discovered %d AZs in %s: %s", len(names), region, names)
        return names


def get_available_zones(
    region: str,
    profile: Optional[str] = None,
    no_cache: bool = False,
    refresh_cache: bool = False,
    client: Optional[ZoneClient] = None,
) -> list[str]:
    """Cached AZ discovery; never caches an empty answer."""
    client = client or ZoneClient(profile)
    cache = zone_cache(region)

    if refresh_cache:
        cache.clear()

    account_id = None
    if not no_cache:
        account_id = client.account_id()
        if not refresh_cache:
            cached = cache.get(current_account=account_id)
            if cached:
                logger.debug("Using cached AZs for %s", region)
                return cached

    zones = client.discover(region)
    if zones and not no_cache:
        cache.set(zones, account_id=account_id)
    return zones


class ZoneDisplay(BaseDisplay):
    def show_list(self, zones: list[dict], region: str):
        if not zones:
            self.console.print(f"[yellow]No availability zones found in {region}[/]")
            return

        table = Table(
            title=f"Availability Zones ({region})",
            show_header=True,
            header_style="bold",
        )
        table.add_column("#", style="dim", justify="right")
        table.add_column("Zone", style="cyan")
        table.add_column("Zone ID", style="white")
        table.add_column("Type", style="dim")
        table.add_column("State")

        for i, z in enumerate(zones, 1):
            state_style = "green" if z["state"] == "available" else "red"
            table.add_row(
                str(i),
                z["name"],
                z["id"],
                z["type"],
                f"[{state_style}]{z['state']}[/]",
            )
        self.console.print(table)
