"""
Config -> Kernel Bridges.

Functions that turn a MarketplaceConfig into kernel objects.  They live in
freelance_config because the kernel must NEVER import freelance_config.

Usage:
    from freelance_config import get_active_config
    from freelance_config.bridges import build_orchestrator, init_store

    config = get_active_config()
    init_store(config)
    with session_scope() as session:
        orchestrator = build_orchestrator(session, config)
"""

from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from freelance_config.schema import MarketplaceConfig
from freelance_kernel.db.engine import init_engine_from_url
from freelance_kernel.db.immutability import register_immutability_listeners
from freelance_kernel.domain.clock import Clock
from freelance_kernel.services.marketplace_orchestrator import MarketplaceOrchestrator


def init_store(config: MarketplaceConfig) -> Engine:
    """Initialize the kernel engine and the paid-job guards from config."""
    store = config.store
    engine = init_engine_from_url(
        store.database_url,
        echo=store.echo,
        isolation_level=store.isolation_level,
        pool_size=store.pool_size,
        max_overflow=store.max_overflow,
        busy_timeout_seconds=store.busy_timeout_seconds,
    )
    register_immutability_listeners()
    return engine


def build_orchestrator(
    session: Session,
    config: MarketplaceConfig,
    clock: Clock | None = None,
) -> MarketplaceOrchestrator:
    """Orchestrator wired with the configured policy and locking mode."""
    return MarketplaceOrchestrator(
        session,
        clock,
        deposit_cap_ratio=config.policy.deposit_cap_ratio,
        best_clients_default_limit=config.policy.best_clients_default_limit,
        lock_rows=config.store.lock_rows,
    )
