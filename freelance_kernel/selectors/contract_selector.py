"""
Module: freelance_kernel.selectors.contract_selector
Responsibility: Contract and job lookups scoped to the requesting profile.
Architecture position: Kernel > Selectors.

Every lookup is restricted to the profile's own contracts (``belongs_to``
for a single row, ``Contract.involving`` in listings): a profile
only ever sees contracts where it is the client or the contractor.  A
contract that exists but belongs to someone else is reported exactly like a
missing one.

Listings return plain lists ordered by id; turning an empty list into an
error is the orchestrator's decision.
"""

from sqlalchemy import select

from freelance_kernel.domain.dtos import ContractInfo, ContractStatus, JobInfo
from freelance_kernel.domain.predicates import belongs_to
from freelance_kernel.exceptions import ContractNotFoundError
from freelance_kernel.models.contract import Contract
from freelance_kernel.models.job import Job
from freelance_kernel.selectors.base import BaseSelector


class ContractSelector(BaseSelector[Contract]):
    """Read-only contract and job queries for one profile at a time."""

    def get_contract(self, profile_id: int, contract_id: int) -> ContractInfo:
        """
        Fetch one of the profile's contracts.

        Raises:
            ContractNotFoundError: absent, or the profile is not a party to it.
        """
        contract = self.session.get(Contract, contract_id, populate_existing=True)
        if contract is None or not belongs_to(contract, profile_id):
            raise ContractNotFoundError(contract_id, profile_id)
        return ContractInfo.from_model(contract)

    def list_contracts(self, profile_id: int) -> list[ContractInfo]:
        """The profile's contracts that are not terminated."""
        stmt = (
            select(Contract)
            .where(
                Contract.involving(profile_id),
                Contract.status != ContractStatus.TERMINATED.value,
            )
            .order_by(Contract.id)
        )
        return [ContractInfo.from_model(c) for c in self.session.scalars(stmt)]

    def list_unpaid_jobs(self, profile_id: int) -> list[JobInfo]:
        """Unpaid jobs of the profile's in-progress contracts."""
        stmt = (
            select(Job)
            .join(Job.contract)
            .where(
                Contract.involving(profile_id),
                Contract.is_active_clause(),
                Job.unpaid_clause(),
            )
            .order_by(Job.id)
        )
        return [JobInfo.from_model(j) for j in self.session.scalars(stmt)]
