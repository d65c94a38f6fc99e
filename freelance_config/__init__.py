"""
freelance_config -- single public entrypoint for marketplace configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  Returns a frozen ``MarketplaceConfig``.

Architecture position:
    Configuration sits above ``freelance_kernel``.  The kernel MUST NEVER
    import from ``freelance_config``; ``bridges`` translates the config
    into kernel inputs.

Failure modes:
    - ``FileNotFoundError`` -- the configuration file does not exist.
    - ``KeyError`` / ``ValueError`` -- missing or out-of-range fields.

Every successful call emits a ``config_loaded`` log entry carrying the
config_id and checksum.
"""

from __future__ import annotations

import os
from pathlib import Path

from freelance_config.loader import load_yaml_file, parse_config
from freelance_config.schema import MarketplaceConfig, PolicyConfig, StoreConfig
from freelance_kernel.logging_config import get_logger

_logger = get_logger("config")

DATABASE_URL_ENV = "FREELANCE_DATABASE_URL"

_DEFAULT_CONFIG_FILE = Path(__file__).parent / "sets" / "default.yaml"

__all__ = [
    "DATABASE_URL_ENV",
    "MarketplaceConfig",
    "PolicyConfig",
    "StoreConfig",
    "get_active_config",
]


def get_active_config(path: Path | str | None = None) -> MarketplaceConfig:
    """The ONLY public configuration entrypoint.

    Args:
        path: Override path to a configuration file.  Defaults to
            freelance_config/sets/default.yaml.

    Returns:
        MarketplaceConfig.  When ``FREELANCE_DATABASE_URL`` is set it
        replaces ``store.database_url`` (and so the checksum).

    Raises:
        FileNotFoundError, KeyError, ValueError.
    """
    config_file = Path(path) if path is not None else _DEFAULT_CONFIG_FILE
    data = load_yaml_file(config_file)

    override = os.environ.get(DATABASE_URL_ENV)
    if override:
        data = {**data, "store": {**(data.get("store") or {}), "database_url": override}}

    config = parse_config(data)

    _logger.info(
        "config_loaded",
        extra={
            "config_id": config.config_id,
            "checksum": config.checksum,
            "config_file": str(config_file),
            "database_url_overridden": bool(override),
            "deposit_cap_ratio": str(config.policy.deposit_cap_ratio),
            "best_clients_default_limit": config.policy.best_clients_default_limit,
        },
    )
    return config
