"""Deterministic VPC subnet, availability zone and NAT gateway planning."""

from .errors import (
    PlanningError,
    InvalidConfigurationError,
    InvalidAvailabilityZoneError,
    PrefixExhaustedError,
    NoPublicSubnetError,
    NoMatchingNatGatewayError,
    DiscoveryError,
)
from .config import PlannerConfig, load_config
from .planner import (
    resolve_azs,
    allocate_subnets,
    plan_nat_topology,
    plan_route_tables,
    plan_network,
)

__version__ = "0.1.0"

__all__ = [
    "PlanningError",
    "InvalidConfigurationError",
    "InvalidAvailabilityZoneError",
    "PrefixExhaustedError",
    "NoPublicSubnetError",
    "NoMatchingNatGatewayError",
    "DiscoveryError",
    "PlannerConfig",
    "load_config",
    "resolve_azs",
    "allocate_subnets",
    "plan_nat_topology",
    "plan_route_tables",
    "plan_network",
]
