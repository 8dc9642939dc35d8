"""Core utilities for the network planner"""

from .cache import Cache, parse_ttl, format_ttl, get_default_ttl, set_default_ttl
from .spinner import run_with_spinner
from .display import BaseDisplay
from .base import BaseClient
from .renderer import DisplayRenderer
from .logging import setup_logging, get_logger, logger

__all__ = [
    "Cache",
    "run_with_spinner",
    "BaseDisplay",
    "parse_ttl",
    "format_ttl",
    "get_default_ttl",
    "set_default_ttl",
    "BaseClient",
    "DisplayRenderer",
    "setup_logging",
    "get_logger",
    "logger",
]
