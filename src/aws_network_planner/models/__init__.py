"""Pydantic models for planned network resources."""

from .base import PlanModel, CIDRBlock, parse_ipv4_network
from .plan import (
    SubnetSpec,
    AllocationPlan,
    NatGateway,
    NatGatewayPlan,
    Route,
    RouteTablePlan,
    NetworkPlan,
)

__all__ = [
    "PlanModel",
    "CIDRBlock",
    "parse_ipv4_network",
    "SubnetSpec",
    "AllocationPlan",
    "NatGateway",
    "NatGatewayPlan",
    "Route",
    "RouteTablePlan",
    "NetworkPlan",
]
