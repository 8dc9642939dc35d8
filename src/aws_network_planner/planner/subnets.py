"""Subnet allocation: carve a base CIDR into equally sized subnets."""

from ipaddress import IPv4Network
from itertools import islice
from typing import Sequence, Union

from ..core.logging import get_logger
from ..errors import InvalidConfigurationError, PrefixExhaustedError
from ..models import AllocationPlan, CIDRBlock, SubnetSpec, parse_ipv4_network

logger = get_logger("subnets")

MAX_PREFIXLEN = 32


def subnet_bits(total: int) -> int:
    """Smallest b with 2**b >= total."""
    return (total - 1).bit_length()


def _as_network(base: Union[str, CIDRBlock, IPv4Network]) -> IPv4Network:
    if isinstance(base, IPv4Network):
        return base
    if isinstance(base, CIDRBlock):
        return base.network
    try:
        return parse_ipv4_network(base)
    except ValueError as e:
        raise InvalidConfigurationError(str(e)) from None


def allocate_subnets(
    base: Union[str, CIDRBlock, IPv4Network],
    public_count: int,
    private_count: int,
    azs: Sequence[str],
) -> AllocationPlan:
    """Partition ``base`` into public then private subnets spread across AZs.

    The block is split into ``2**subnet_bits(total)`` equal sub-blocks and the
    first ``total`` are used; spare blocks stay unallocated. Subnet ``i`` lands
    in ``azs[i % len(azs)]`` and is public iff ``i < public_count``.

    Raises:
        InvalidConfigurationError: negative counts, nothing to allocate, no
            AZs, or an unparsable base CIDR
        PrefixExhaustedError: the split would go past /32
    """
    if public_count < 0 or private_count < 0:
        raise InvalidConfigurationError(
            f"Subnet counts must not be negative "
            f"(public={public_count}, private={private_count})"
        )
    total = public_count + private_count
    if total < 1:
        raise InvalidConfigurationError("At least one subnet must be requested")
    if not azs:
        raise InvalidConfigurationError("At least one availability zone is required")

    network = _as_network(base)
    new_bits = subnet_bits(total)
    if network.prefixlen + new_bits > MAX_PREFIXLEN:
        raise PrefixExhaustedError(str(network), total, new_bits)

    blocks = islice(network.subnets(prefixlen_diff=new_bits), total)
    subnets = tuple(
        SubnetSpec(
            index=i,
            cidr=str(block),
            az=azs[i % len(azs)],
            public=i < public_count,
        )
        for i, block in enumerate(blocks)
    )
    logger.debug(
        "Allocated %d subnets of /%d from %s across %d AZs (%d spare)",
        total,
        network.prefixlen + new_bits,
        network,
        len(azs),
        2**new_bits - total,
    )
    return AllocationPlan(
        base=str(network),
        new_bits=new_bits,
        public_count=public_count,
        private_count=private_count,
        subnets=subnets,
    )
