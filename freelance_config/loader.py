"""
Configuration Loader (``freelance_config.loader``).

Responsibility
--------------
Loads YAML configuration files and parses them into the frozen
``freelance_config.schema`` dataclasses.  Runtime callers go through
``freelance_config.get_active_config()`` instead of calling this directly.

Invariants enforced
-------------------
* Parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; required fields have no silent defaults.
* ``compute_checksum`` is deterministic for identical input.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing ``config_id`` or ``store.database_url`` -> ``KeyError``.
* Out-of-range policy values or unknown isolation level -> ``ValueError``.
  AUTOCOMMIT is rejected; every ledger operation runs in one transaction.
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from freelance_config.schema import MarketplaceConfig, PolicyConfig, StoreConfig

ISOLATION_LEVELS = frozenset(
    {
        "READ COMMITTED",
        "REPEATABLE READ",
        "SERIALIZABLE",
    }
)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_decimal(value: Any, field_name: str) -> Decimal:
    """Parse a Decimal from YAML; floats go through str()."""
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a number, got {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"{field_name} must be a number, got {value!r}") from None


def parse_store(data: dict[str, Any]) -> StoreConfig:
    """Parse a StoreConfig from a dict."""
    isolation_level = str(data.get("isolation_level", "READ COMMITTED")).upper()
    if isolation_level not in ISOLATION_LEVELS:
        raise ValueError(
            f"Unknown isolation_level {isolation_level!r}; "
            f"expected one of {sorted(ISOLATION_LEVELS)}"
        )
    busy_timeout = float(data.get("busy_timeout_seconds", 30.0))
    if busy_timeout < 0:
        raise ValueError(f"busy_timeout_seconds must be >= 0, got {busy_timeout}")

    return StoreConfig(
        database_url=data["database_url"],
        echo=bool(data.get("echo", False)),
        isolation_level=isolation_level,
        lock_rows=bool(data.get("lock_rows", True)),
        busy_timeout_seconds=busy_timeout,
        pool_size=int(data.get("pool_size", 20)),
        max_overflow=int(data.get("max_overflow", 10)),
    )


def parse_policy(data: dict[str, Any]) -> PolicyConfig:
    """Parse a PolicyConfig from a dict."""
    ratio = parse_decimal(data.get("deposit_cap_ratio", "0.25"), "deposit_cap_ratio")
    if not ratio.is_finite() or ratio < 0 or ratio > 1:
        raise ValueError(f"deposit_cap_ratio must be within [0, 1], got {ratio}")

    limit = data.get("best_clients_default_limit", 2)
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(
            f"best_clients_default_limit must be an integer >= 1, got {limit!r}"
        )

    return PolicyConfig(deposit_cap_ratio=ratio, best_clients_default_limit=limit)


def parse_config(data: dict[str, Any]) -> MarketplaceConfig:
    """Parse a complete MarketplaceConfig from the root mapping."""
    return MarketplaceConfig(
        config_id=data["config_id"],
        store=parse_store(data["store"]),
        policy=parse_policy(data.get("policy") or {}),
        checksum=compute_checksum(data),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
