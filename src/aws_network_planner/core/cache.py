"""File-based cache for discovery results, with TTL and account safety"""

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Any

from .logging import get_logger

logger = get_logger("cache")

CACHE_DIR = Path.home() / ".cache" / "aws-network-planner"
CONFIG_FILE = CACHE_DIR / "config.json"
DEFAULT_TTL = 3600  # AZ offerings change rarely

_TTL_UNITS = {"m": 60, "h": 3600, "d": 86400}


def parse_ttl(value: str) -> int:
    """Parse TTL string like '15m', '1h', '2d' to seconds"""
    match = re.match(r"^(\d+)([mhd]?)$", value.strip().lower())
    if not match:
        raise ValueError(
            f"Invalid TTL format: {value}. Use number with optional m/h/d suffix"
        )
    return int(match.group(1)) * _TTL_UNITS[match.group(2) or "m"]


def format_ttl(seconds: int) -> str:
    """Render seconds using the largest whole unit ('2h', '15m')"""
    if seconds >= 86400:
        return f"{seconds // 86400}d"
    if seconds >= 3600:
        return f"{seconds // 3600}h"
    return f"{seconds // 60}m"


def _read_json(path: Path) -> Optional[Any]:
    try:
        return json.loads(path.read_text())
    except (OSError, ValueError) as e:
        logger.debug("Ignoring unreadable cache file %s: %s", path, e)
        return None


def get_default_ttl() -> int:
    """Get default TTL from config or use default"""
    if not CONFIG_FILE.exists():
        return DEFAULT_TTL
    config = _read_json(CONFIG_FILE)
    ttl = config.get("ttl_seconds") if isinstance(config, dict) else None
    if not _is_seconds(ttl):
        logger.debug("Ignoring cache config %s without a valid ttl_seconds", CONFIG_FILE)
        return DEFAULT_TTL
    return ttl


def _is_seconds(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0


def set_default_ttl(ttl_seconds: int) -> None:
    """Persist default TTL in config"""
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    config = _read_json(CONFIG_FILE) if CONFIG_FILE.exists() else None
    if not isinstance(config, dict):
        config = {}
    config["ttl_seconds"] = ttl_seconds
    CONFIG_FILE.write_text(json.dumps(config))


class Cache:
    """One JSON document per namespace, e.g. ``zones-us-east-1``."""

    def __init__(self, namespace: str):
        self.namespace = namespace
        self.cache_file = CACHE_DIR / f"{namespace}.json"

    def _load(self) -> Optional[dict]:
        """Cache entry with ``cached_at`` parsed, or None if missing or corrupt."""
        if not self.cache_file.exists():
            return None
        raw = _read_json(self.cache_file)
        if not isinstance(raw, dict) or "cached_at" not in raw:
            return None
        try:
            cached_at = datetime.fromisoformat(raw["cached_at"])
        except (TypeError, ValueError) as e:
            logger.debug("Ignoring cache %s with bad cached_at: %s", self.namespace, e)
            return None
        if cached_at.tzinfo is None:
            cached_at = cached_at.replace(tzinfo=timezone.utc)
        ttl = raw.get("ttl_seconds")
        if ttl is None:
            ttl = get_default_ttl()
        elif not _is_seconds(ttl):
            logger.debug("Ignoring cache %s with bad ttl_seconds: %r", self.namespace, ttl)
            return None
        return {**raw, "cached_at": cached_at, "ttl_seconds": ttl}

    def get(
        self, ignore_expiry: bool = False, current_account: Optional[str] = None
    ) -> Optional[Any]:
        """Get cached data if present, not expired, and for the same account"""
        raw = self._load()
        if raw is None:
            return None

        if (
            current_account
            and raw.get("account_id")
            and raw["account_id"] != current_account
        ):
            logger.debug(
                "Cache %s belongs to account %s, clearing",
                self.namespace,
                raw["account_id"],
            )
            self.clear()
            return None

        if not ignore_expiry:
            age = (datetime.now(timezone.utc) - raw["cached_at"]).total_seconds()
            if age > raw["ttl_seconds"]:
                logger.debug(
                    "Cache %s expired (%.0fs > %ss)", self.namespace, age, raw["ttl_seconds"]
                )
                return None
        return raw.get("data")

    def set(
        self,
        data: Any,
        ttl_seconds: Optional[int] = None,
        account_id: Optional[str] = None,
    ) -> None:
        """Store data with TTL and account ID"""
        self.cache_file.parent.mkdir(parents=True, exist_ok=True)
        raw = {
            "data": data,
            "cached_at": datetime.now(timezone.utc).isoformat(),
            "ttl_seconds": ttl_seconds or get_default_ttl(),
            "account_id": account_id,
        }
        self.cache_file.write_text(json.dumps(raw, default=str))

    def clear(self) -> None:
        if self.cache_file.exists():
            self.cache_file.unlink()

    def get_info(self) -> Optional[dict]:
        """Get cache metadata"""
        raw = self._load()
        if raw is None:
            return None
        age = (datetime.now(timezone.utc) - raw["cached_at"]).total_seconds()
        return {
            "namespace": self.namespace,
            "cached_at": raw["cached_at"],
            "ttl_seconds": raw["ttl_seconds"],
            "age_seconds": age,
            "expired": age > raw["ttl_seconds"],
            "account_id": raw.get("account_id"),
        }


def all_caches() -> list[Cache]:
    """Every cache namespace currently on disk"""
    if not CACHE_DIR.exists():
        return []
    return [
        Cache(p.stem)
        for p in sorted(CACHE_DIR.glob("*.json"))
        if p != CONFIG_FILE
    ]
