"""
MarketplaceConfig schema.

Typed, frozen view of a configuration set.  YAML files are parsed into
these types by the loader; bridges turn them into kernel inputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StoreConfig:
    """Relational store connection and locking settings."""

    database_url: str
    echo: bool = False
    isolation_level: str = "READ COMMITTED"  # PostgreSQL only
    lock_rows: bool = True  # SELECT ... FOR UPDATE on mutated rows
    busy_timeout_seconds: float = 30.0  # SQLite writer wait
    pool_size: int = 20
    max_overflow: int = 10


# ---------------------------------------------------------------------------
# Business policy
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PolicyConfig:
    """Tunable marketplace rules."""

    deposit_cap_ratio: Decimal = Decimal("0.25")
    best_clients_default_limit: int = 2


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MarketplaceConfig:
    """A complete, validated configuration set."""

    config_id: str
    store: StoreConfig
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    checksum: str = ""
