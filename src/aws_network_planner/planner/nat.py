"""NAT gateway placement and private subnet routing."""

from ..core.logging import get_logger
from ..errors import NoMatchingNatGatewayError, NoPublicSubnetError
from ..models import AllocationPlan, NatGateway, NatGatewayPlan, SubnetSpec

logger = get_logger("nat")


def gateway_id(subnet: SubnetSpec) -> str:
    return f"nat-{subnet.index}"


def _gateway(subnet: SubnetSpec) -> NatGateway:
    return NatGateway(id=gateway_id(subnet), subnet_index=subnet.index, az=subnet.az)


def plan_nat_topology(plan: AllocationPlan, high_availability: bool) -> NatGatewayPlan:
    """Place NAT gateways and route every private subnet through one.

    HA mode puts a gateway in every public subnet and routes each private
    subnet to the gateway in its own AZ; when an AZ hosts several public
    subnets the lowest index wins. Otherwise a single gateway sits in the
    first public subnet and takes all private traffic, across AZs.

    Raises:
        NoPublicSubnetError: private subnets exist but no public subnet does
        NoMatchingNatGatewayError: HA mode and a private subnet's AZ has no
            public subnet
    """
    public = sorted(plan.public_subnets, key=lambda s: s.index)
    private = sorted(plan.private_subnets, key=lambda s: s.index)

    if not public:
        if private:
            raise NoPublicSubnetError(len(private))
        return NatGatewayPlan(high_availability=high_availability)

    if not high_availability:
        gateway = _gateway(public[0])
        logger.debug(
            "Single NAT gateway %s in %s for %d private subnets",
            gateway.id,
            gateway.az,
            len(private),
        )
        return NatGatewayPlan(
            high_availability=False,
            gateways=(gateway,),
            routes={p.index: gateway.id for p in private},
        )

    gateways = tuple(_gateway(s) for s in public)
    by_az: dict[str, NatGateway] = {}
    for gateway in gateways:
        # public is index-ordered, so the first gateway seen per AZ is the lowest
        by_az.setdefault(gateway.az, gateway)

    routes: dict[int, str] = {}
    for subnet in private:
        match = by_az.get(subnet.az)
        if match is None:
            raise NoMatchingNatGatewayError(subnet.index, subnet.az)
        routes[subnet.index] = match.id

    logger.debug(
        "%d NAT gateways across %d AZs for %d private subnets",
        len(gateways),
        len(by_az),
        len(private),
    )
    return NatGatewayPlan(high_availability=True, gateways=gateways, routes=routes)
