"""Read-only selectors for the freelance kernel."""

from freelance_kernel.selectors.base import BaseSelector
from freelance_kernel.selectors.contract_selector import ContractSelector
from freelance_kernel.selectors.profile_selector import ProfileSelector
from freelance_kernel.selectors.reporting_selector import (
    DEFAULT_BEST_CLIENTS_LIMIT,
    ReportingSelector,
)

__all__ = [
    "BaseSelector",
    "ContractSelector",
    "DEFAULT_BEST_CLIENTS_LIMIT",
    "ProfileSelector",
    "ReportingSelector",
]
