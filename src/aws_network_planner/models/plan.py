"""Models for subnet, NAT gateway and route table plans."""

from ipaddress import IPv4Network
from typing import Literal, Optional
from pydantic import Field, model_validator

from .base import CIDRStr, PlanModel

Role = Literal["public", "private"]


class SubnetSpec(PlanModel):
    """One planned subnet."""

    index: int = Field(..., ge=0, description="Position in the allocation")
    cidr: CIDRStr = Field(..., description="Subnet CIDR block")
    az: str = Field(..., description="Availability zone")
    public: bool = Field(default=False, description="Is public subnet")

    @property
    def role(self) -> Role:
        return "public" if self.public else "private"

    @property
    def network(self) -> IPv4Network:
        return IPv4Network(self.cidr)


class AllocationPlan(PlanModel):
    """Ordered subnets carved from one base CIDR, public ones first."""

    base: CIDRStr = Field(..., description="Base CIDR the subnets were carved from")
    new_bits: int = Field(..., ge=0, description="Prefix bits added per subnet")
    public_count: int = Field(..., ge=0)
    private_count: int = Field(..., ge=0)
    subnets: tuple[SubnetSpec, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def check_layout(self) -> "AllocationPlan":
        if self.public_count + self.private_count != len(self.subnets):
            raise ValueError(
                f"{self.public_count} public + {self.private_count} private "
                f"!= {len(self.subnets)} subnets"
            )
        for i, subnet in enumerate(self.subnets):
            if subnet.index != i:
                raise ValueError(f"Subnet at position {i} has index {subnet.index}")
            if subnet.public != (i < self.public_count):
                raise ValueError(f"Subnet {i} has the wrong role ({subnet.role})")
        return self

    @property
    def public_subnets(self) -> list[SubnetSpec]:
        return [s for s in self.subnets if s.public]

    @property
    def private_subnets(self) -> list[SubnetSpec]:
        return [s for s in self.subnets if not s.public]

    @property
    def prefixlen(self) -> int:
        return IPv4Network(self.base).prefixlen + self.new_bits

    @property
    def azs(self) -> list[str]:
        """Distinct AZs in first-use order."""
        return list(dict.fromkeys(s.az for s in self.subnets))

    def __len__(self) -> int:
        return len(self.subnets)


class NatGateway(PlanModel):
    """NAT gateway placed in a public subnet."""

    id: str = Field(..., description="Synthetic gateway identifier")
    subnet_index: int = Field(..., ge=0, description="Hosting public subnet")
    az: str = Field(..., description="Availability zone of the host subnet")


class NatGatewayPlan(PlanModel):
    """Gateway placements plus the private subnet routing table."""

    high_availability: bool = False
    gateways: tuple[NatGateway, ...] = Field(default_factory=tuple)
    routes: dict[int, str] = Field(
        default_factory=dict, description="Private subnet index -> gateway id"
    )

    @model_validator(mode="after")
    def check_targets(self) -> "NatGatewayPlan":
        known = {gw.id for gw in self.gateways}
        unknown = sorted(set(self.routes.values()) - known)
        if unknown:
            raise ValueError(f"Routes target unknown NAT gateway(s): {unknown}")
        return self

    @property
    def placements(self) -> dict[int, str]:
        """Public subnet index -> gateway id."""
        return {gw.subnet_index: gw.id for gw in self.gateways}

    def gateway(self, gateway_id: str) -> Optional[NatGateway]:
        return next((gw for gw in self.gateways if gw.id == gateway_id), None)

    def gateway_for(self, subnet: SubnetSpec) -> Optional[NatGateway]:
        """Gateway a private subnet routes through."""
        gateway_id = self.routes.get(subnet.index)
        return self.gateway(gateway_id) if gateway_id else None


class Route(PlanModel):
    """Route entry in a planned route table."""

    destination: str = Field(..., description="Destination CIDR")
    target: str = Field(..., description="igw or a NAT gateway id")


class RouteTablePlan(PlanModel):
    """Route table and the subnets associated with it."""

    name: str
    public: bool = False
    routes: tuple[Route, ...] = Field(default_factory=tuple)
    subnet_indexes: tuple[int, ...] = Field(default_factory=tuple)
    nat_gateway_id: Optional[str] = None


class NetworkPlan(PlanModel):
    """Complete result of a planning run."""

    name: str
    region: Optional[str] = None
    azs: tuple[str, ...]
    allocation: AllocationPlan
    nat: NatGatewayPlan
    route_tables: tuple[RouteTablePlan, ...] = Field(default_factory=tuple)
    subnet_tags: dict[int, dict[str, str]] = Field(default_factory=dict)
    gateway_tags: dict[str, dict[str, str]] = Field(default_factory=dict)

    @property
    def subnets(self) -> tuple[SubnetSpec, ...]:
        return self.allocation.subnets
