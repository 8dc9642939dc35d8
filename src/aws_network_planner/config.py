"""Planner configuration: YAML file plus command line overrides."""

from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .core.logging import get_logger
from .errors import InvalidConfigurationError
from .models import parse_ipv4_network

logger = get_logger("config")

DEFAULT_CIDR = "10.0.0.0/16"


class PlannerConfig(BaseModel):
    """Inputs for one planning run.

    Example YAML::

        name: eks-prod
        region: us-east-1
        cidr: 10.0.0.0/16
        public_subnets: 3
        private_subnets: 3
        az_count: 3
        high_availability: true
        cluster_name: prod
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(default="eks", min_length=1, description="Resource name prefix")
    region: Optional[str] = Field(None, description="Target AWS region")
    cidr: str = Field(default=DEFAULT_CIDR, description="VPC base CIDR")
    public_subnets: int = Field(default=3, ge=0)
    private_subnets: int = Field(default=3, ge=0)
    availability_zones: list[str] = Field(
        default_factory=list, description="Explicit AZs; empty means discover"
    )
    az_count: int = Field(default=3, description="Maximum AZs to span")
    high_availability: bool = Field(
        default=False, description="One NAT gateway per public subnet"
    )
    cluster_name: Optional[str] = Field(None, description="EKS cluster for tags")
    tags: dict[str, str] = Field(default_factory=dict, description="Extra tags")

    @field_validator("cidr")
    @classmethod
    def validate_cidr(cls, v: str) -> str:
        return str(parse_ipv4_network(v))

    @field_validator("availability_zones", mode="before")
    @classmethod
    def split_csv(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [az.strip() for az in v.split(",") if az.strip()]
        return v

    def merged(self, **overrides: Any) -> "PlannerConfig":
        """Copy with every non-None override applied and re-validated."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return build_config(values)


def build_config(values: dict) -> PlannerConfig:
    try:
        return PlannerConfig(**values)
    except ValidationError as e:
        raise InvalidConfigurationError(_describe(e)) from None


def load_config(path: Union[str, Path]) -> PlannerConfig:
    """Load a planner config from a YAML file.

    Raises:
        InvalidConfigurationError: missing file, bad YAML, or invalid values
    """
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text())
    except OSError as e:
        raise InvalidConfigurationError(f"Cannot read config {path}: {e}") from None
    except yaml.YAMLError as e:
        raise InvalidConfigurationError(f"Invalid YAML in {path}: {e}") from None

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise InvalidConfigurationError(f"Config {path} must be a YAML mapping")
    logger.debug("Loaded config from %s: %s", path, sorted(raw))
    return build_config(raw)


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "config"
        parts.append(f"{loc}: {err['msg']}")
    return "Invalid configuration: " + "; ".join(parts)
