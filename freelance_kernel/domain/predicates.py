"""
Derived predicates over contracts and jobs.

These accept either DTOs or ORM rows (anything with the same attribute
names).  The ORM models expose the same rules as SQL clauses
(``Contract.involving``, ``Contract.is_active_clause``,
``Job.unpaid_clause``) so that store filters and in-memory checks agree.
"""

from typing import Any

from freelance_kernel.domain.dtos import ContractStatus
from freelance_kernel.domain.payment_state import Unpaid


def belongs_to(contract: Any, profile_id: int) -> bool:
    """True if the profile is the contract's client or contractor."""
    return contract.client_id == profile_id or contract.contractor_id == profile_id


def is_active(contract: Any) -> bool:
    """True if work under the contract is in progress."""
    return contract.status == ContractStatus.IN_PROGRESS


def is_unpaid(job: Any) -> bool:
    """True if the job has not been paid."""
    return isinstance(job.payment_state, Unpaid)
