"""Availability zone resolution."""

from typing import Optional, Sequence

from ..core.logging import get_logger
from ..errors import InvalidAvailabilityZoneError, InvalidConfigurationError

logger = get_logger("zones")


def resolve_azs(
    requested: Optional[Sequence[str]], count: int, available: Sequence[str]
) -> list[str]:
    """Pick the ordered AZs a network will span.

    Args:
        requested: Explicit AZs from configuration, or None/empty to pick
            from ``available``
        count: Maximum number of AZs to use
        available: AZs the provider offers, in a deterministic order

    Returns:
        At most ``count`` AZs

    Raises:
        InvalidConfigurationError: ``count`` is below 1
        InvalidAvailabilityZoneError: some requested AZs are not available;
            every offending entry is reported
    """
    if count < 1:
        raise InvalidConfigurationError(f"AZ count must be at least 1, got {count}")

    if not requested:
        chosen = list(available[:count])
        logger.debug("Using first %d of %d available AZs", len(chosen), len(available))
        return chosen

    offered = set(available)
    invalid = list(dict.fromkeys(az for az in requested if az not in offered))
    if invalid:
        raise InvalidAvailabilityZoneError(invalid, available)

    chosen = list(requested[:count])
    if len(chosen) < len(requested):
        logger.debug("Capped %d requested AZs to %d", len(requested), count)
    return chosen
