"""Resource tags for planned subnets and NAT gateways.

Kubernetes load balancer controllers pick subnets by the ``kubernetes.io/role``
tags, and Karpenter discovers node subnets by ``karpenter.sh/discovery``.
"""

from collections import Counter
from typing import Mapping, Optional

from ..models import AllocationPlan, NatGatewayPlan

ELB_ROLE_TAG = "kubernetes.io/role/elb"
INTERNAL_ELB_ROLE_TAG = "kubernetes.io/role/internal-elb"
KARPENTER_DISCOVERY_TAG = "karpenter.sh/discovery"


def cluster_tag(cluster_name: str) -> str:
    return f"kubernetes.io/cluster/{cluster_name}"


def subnet_tags(
    allocation: AllocationPlan,
    name: str,
    cluster_name: Optional[str] = None,
    extra: Optional[Mapping[str, str]] = None,
) -> dict[int, dict[str, str]]:
    """Tags per subnet index."""
    seen = Counter((s.role, s.az) for s in allocation.subnets)
    tags: dict[int, dict[str, str]] = {}
    for subnet in allocation.subnets:
        label = f"{name}-{subnet.role}-{subnet.az}"
        if seen[(subnet.role, subnet.az)] > 1:
            label += f"-{subnet.index}"

        t = dict(extra or {})
        t["Name"] = label
        if subnet.public:
            t[ELB_ROLE_TAG] = "1"
        else:
            t[INTERNAL_ELB_ROLE_TAG] = "1"
        if cluster_name:
            t[cluster_tag(cluster_name)] = "shared"
            if not subnet.public:
                t[KARPENTER_DISCOVERY_TAG] = cluster_name
        tags[subnet.index] = t
    return tags


def gateway_tags(
    nat_plan: NatGatewayPlan, name: str, extra: Optional[Mapping[str, str]] = None
) -> dict[str, dict[str, str]]:
    """Tags per NAT gateway id."""
    per_az = Counter(gw.az for gw in nat_plan.gateways)
    tags: dict[str, dict[str, str]] = {}
    for gateway in nat_plan.gateways:
        label = f"{name}-nat-{gateway.az}"
        if per_az[gateway.az] > 1:
            label += f"-{gateway.subnet_index}"
        tags[gateway.id] = {**(extra or {}), "Name": label}
    return tags
