"""End-to-end planning run."""

from typing import Sequence

from ..config import PlannerConfig
from ..core.logging import get_logger
from ..models import NetworkPlan
from .nat import plan_nat_topology
from .routes import plan_route_tables
from .subnets import allocate_subnets
from .tags import gateway_tags, subnet_tags
from .zones import resolve_azs

logger = get_logger("pipeline")


def plan_network(config: PlannerConfig, available: Sequence[str]) -> NetworkPlan:
    """Resolve AZs, allocate subnets, place NAT gateways and derive tables/tags.

    ``available`` is the region's AZ list, fetched by the caller beforehand.
    Any ``PlanningError`` aborts the whole run.
    """
    azs = resolve_azs(config.availability_zones, config.az_count, available)
    logger.debug("Resolved AZs: %s", azs)

    allocation = allocate_subnets(
        config.cidr, config.public_subnets, config.private_subnets, azs
    )
    nat = plan_nat_topology(allocation, config.high_availability)
    route_tables = plan_route_tables(allocation, nat, config.name)

    plan = NetworkPlan(
        name=config.name,
        region=config.region,
        azs=tuple(azs),
        allocation=allocation,
        nat=nat,
        route_tables=tuple(route_tables),
        subnet_tags=subnet_tags(
            allocation, config.name, config.cluster_name, config.tags
        ),
        gateway_tags=gateway_tags(nat, config.name, config.tags),
    )
    logger.info(
        "Planned %s: %d subnets (/%d), %d NAT gateway(s), %d route table(s)",
        config.name,
        len(allocation),
        allocation.prefixlen,
        len(nat.gateways),
        len(route_tables),
    )
    return plan
