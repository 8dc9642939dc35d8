"""Deterministic VPC topology planning."""

from .zones import resolve_azs
from .subnets import allocate_subnets, subnet_bits
from .nat import plan_nat_topology
from .routes import plan_route_tables
from .tags import subnet_tags, gateway_tags
from .pipeline import plan_network

__all__ = [
    "resolve_azs",
    "allocate_subnets",
    "subnet_bits",
    "plan_nat_topology",
    "plan_route_tables",
    "subnet_tags",
    "gateway_tags",
    "plan_network",
]
