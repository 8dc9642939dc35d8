"""Route tables derived from an allocation and its NAT plan."""

from ..models import AllocationPlan, NatGatewayPlan, Route, RouteTablePlan

DEFAULT_ROUTE = "0.0.0.0/0"
INTERNET_GATEWAY = "igw"


def plan_route_tables(
    allocation: AllocationPlan, nat_plan: NatGatewayPlan, name: str
) -> list[RouteTablePlan]:
    """One shared public table, then one private table per used NAT gateway."""
    tables = []

    public = [s.index for s in allocation.public_subnets]
    if public:
        tables.append(
            RouteTablePlan(
                name=f"{name}-public",
                public=True,
                routes=(Route(destination=DEFAULT_ROUTE, target=INTERNET_GATEWAY),),
                subnet_indexes=tuple(public),
            )
        )

    for gateway in sorted(nat_plan.gateways, key=lambda g: g.subnet_index):
        members = tuple(
            index for index, target in sorted(nat_plan.routes.items())
            if target == gateway.id
        )
        if not members:
            continue
        suffix = gateway.az if nat_plan.high_availability else "shared"
        if nat_plan.high_availability and _az_hosts_several(nat_plan, gateway.az):
            suffix = f"{gateway.az}-{gateway.subnet_index}"
        tables.append(
            RouteTablePlan(
                name=f"{name}-private-{suffix}",
                routes=(Route(destination=DEFAULT_ROUTE, target=gateway.id),),
                subnet_indexes=members,
                nat_gateway_id=gateway.id,
            )
        )
    return tables


def _az_hosts_several(nat_plan: NatGatewayPlan, az: str) -> bool:
    return sum(1 for gw in nat_plan.gateways if gw.az == az) > 1
