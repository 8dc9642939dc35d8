"""Planning errors.

Every error raised by the planner derives from ``PlanningError`` so callers
can stop a run with a single ``except`` clause. All of them are terminal for
the run that raised them.
"""

from typing import Iterable


class PlanningError(Exception):
    """Base class for all planner failures."""


class InvalidConfigurationError(PlanningError):
    """Malformed or out-of-range planner input."""


class InvalidAvailabilityZoneError(PlanningError):
    """One or more requested AZs are not offered in the region."""

    def __init__(self, invalid: Iterable[str], available: Iterable[str] = ()):
        self.invalid = list(invalid)
        self.available = list(available)
        msg = f"Invalid availability zone(s): {', '.join(self.invalid)}"
        if self.available:
            msg += f" (available: {', '.join(self.available)})"
        super().__init__(msg)


class PrefixExhaustedError(PlanningError):
    """The base CIDR is too small for the requested number of subnets."""

    def __init__(self, base: str, total: int, new_bits: int):
        self.base = base
        self.total = total
        self.new_bits = new_bits
        super().__init__(
            f"Cannot carve {total} subnets out of {base}: "
            f"needs {new_bits} extra prefix bits, which exceeds /32"
        )


class NoPublicSubnetError(PlanningError):
    """Private subnets were requested without any public subnet for NAT."""

    def __init__(self, private_count: int):
        self.private_count = private_count
        super().__init__(
            f"{private_count} private subnet(s) have no egress path: "
            "at least one public subnet is required to host a NAT gateway"
        )


class NoMatchingNatGatewayError(PlanningError):
    """A private subnet's AZ has no NAT gateway in HA mode."""

    def __init__(self, index: int, az: str):
        self.index = index
        self.az = az
        super().__init__(
            f"Private subnet {index} in {az} has no NAT gateway in the same AZ"
        )


class DiscoveryError(PlanningError):
    """Availability zone discovery against AWS failed."""
