"""Base Pydantic models for planned network resources."""

from ipaddress import IPv4Network
from typing import Annotated
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


class PlanModel(BaseModel):
    """Immutable value object produced by a planning run."""

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> dict:
        """JSON-safe dict for JSON/YAML rendering."""
        return self.model_dump(mode="json", exclude_none=True)


def parse_ipv4_network(value: str) -> IPv4Network:
    """Parse an IPv4 CIDR literal, masking off any host bits.

    Raises:
        ValueError: not an IPv4 address/prefix pair
    """
    if not isinstance(value, str) or "/" not in value:
        raise ValueError(f"Invalid CIDR format: {value!r}")
    try:
        return IPv4Network(value.strip(), strict=False)
    except ValueError as e:
        raise ValueError(f"Invalid CIDR format: {value!r} ({e})") from None


def _normalise_cidr(value) -> str:
    if isinstance(value, IPv4Network):
        return str(value)
    return str(parse_ipv4_network(value))


# CIDR string normalised to its network address, e.g. "10.0.5.7/16" -> "10.0.0.0/16"
CIDRStr = Annotated[str, BeforeValidator(_normalise_cidr)]


class CIDRBlock(PlanModel):
    """Validated IPv4 CIDR block, normalised to its network address."""

    cidr: CIDRStr = Field(..., description="CIDR notation (e.g., 10.0.0.0/16)")

    @property
    def network(self) -> IPv4Network:
        return IPv4Network(self.cidr)

    @property
    def prefixlen(self) -> int:
        return self.network.prefixlen

    def __str__(self) -> str:
        return self.cidr
