"""Write services for the freelance kernel."""

from freelance_kernel.services.deposit_service import (
    DEFAULT_DEPOSIT_CAP_RATIO,
    DepositService,
)
from freelance_kernel.services.ledger_service import LedgerService
from freelance_kernel.services.marketplace_orchestrator import MarketplaceOrchestrator

__all__ = [
    "DEFAULT_DEPOSIT_CAP_RATIO",
    "DepositService",
    "LedgerService",
    "MarketplaceOrchestrator",
]
