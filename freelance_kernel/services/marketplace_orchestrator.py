"""
Marketplace Orchestrator - single entry point for the marketplace operations.

The Orchestrator ties together:
- ProfileSelector: caller resolution
- ContractSelector: contract and unpaid-job lookups
- LedgerService: job payment
- DepositService: capped deposits
- ReportingSelector: admin earnings reports

All collaborators share one session and one clock.  Write operations own
their transaction through the services.  Reads end their transaction as
soon as the result is built (commit, or rollback on error) when
auto_commit is set, so a read never keeps a store lock open.
"""

from collections.abc import Callable
from datetime import date
from decimal import Decimal
from typing import Any, TypeVar

from sqlalchemy.orm import Session

from freelance_kernel.domain.clock import Clock, SystemClock
from freelance_kernel.domain.dtos import (
    ClientPaymentTotal,
    ContractInfo,
    DepositReceipt,
    JobInfo,
    PaymentReceipt,
    ProfessionEarnings,
    ProfileInfo,
)
from freelance_kernel.exceptions import EmptyResultError, InvalidLimitError
from freelance_kernel.selectors.contract_selector import ContractSelector
from freelance_kernel.selectors.profile_selector import ProfileSelector
from freelance_kernel.selectors.reporting_selector import (
    DEFAULT_BEST_CLIENTS_LIMIT,
    ReportingSelector,
)
from freelance_kernel.services.deposit_service import (
    DEFAULT_DEPOSIT_CAP_RATIO,
    DepositService,
)
from freelance_kernel.services.ledger_service import LedgerService

T = TypeVar("T")


class MarketplaceOrchestrator:
    """
    Facade over the kernel's services and selectors.

    Set auto_commit=False to let the caller own every transaction (the
    services then only flush, and reads leave the transaction open).
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        *,
        deposit_cap_ratio: Decimal = DEFAULT_DEPOSIT_CAP_RATIO,
        best_clients_default_limit: int = DEFAULT_BEST_CLIENTS_LIMIT,
        lock_rows: bool = True,
        auto_commit: bool = True,
    ):
        if best_clients_default_limit < 1:
            raise InvalidLimitError(best_clients_default_limit)

        self._session = session
        self._clock = clock or SystemClock()
        self._auto_commit = auto_commit
        self._best_clients_default_limit = best_clients_default_limit

        self._profiles = ProfileSelector(session)
        self._contracts = ContractSelector(session)
        self._reports = ReportingSelector(session)
        self._ledger = LedgerService(
            session, self._clock, auto_commit=auto_commit, lock_rows=lock_rows
        )
        self._deposits = DepositService(
            session,
            self._clock,
            auto_commit=auto_commit,
            lock_rows=lock_rows,
            deposit_cap_ratio=deposit_cap_ratio,
        )

    def _read(self, query: Callable[[], T]) -> T:
        try:
            result = query()
        except Exception:
            if self._auto_commit:
                self._session.rollback()
            raise
        if self._auto_commit:
            self._session.commit()
        return result

    # Access

    def resolve_caller(self, profile_id: int | None) -> ProfileInfo:
        return self._read(lambda: self._profiles.resolve_caller(profile_id))

    # Lookups

    def get_contract(self, caller: ProfileInfo, contract_id: int) -> ContractInfo:
        return self._read(lambda: self._contracts.get_contract(caller.id, contract_id))

    def list_contracts(self, caller: ProfileInfo) -> list[ContractInfo]:
        """Caller's non-terminated contracts; EmptyResultError when none."""
        contracts = self._read(lambda: self._contracts.list_contracts(caller.id))
        if not contracts:
            raise EmptyResultError("contracts", caller.id)
        return contracts

    def list_unpaid_jobs(self, caller: ProfileInfo) -> list[JobInfo]:
        """Caller's unpaid jobs on in-progress contracts; EmptyResultError when none."""
        jobs = self._read(lambda: self._contracts.list_unpaid_jobs(caller.id))
        if not jobs:
            raise EmptyResultError("unpaid jobs", caller.id)
        return jobs

    # Writes

    def pay_job(self, caller: ProfileInfo, job_id: int) -> PaymentReceipt:
        return self._ledger.pay_job(caller, job_id)

    def deposit(
        self,
        caller: ProfileInfo,
        target_profile_id: int,
        amount: Any,
    ) -> DepositReceipt:
        return self._deposits.deposit(caller, target_profile_id, amount)

    # Reports

    def best_profession(self, start: date, end: date) -> ProfessionEarnings:
        return self._read(lambda: self._reports.best_profession(start, end))

    def best_clients(
        self,
        start: date,
        end: date,
        limit: int | None = None,
    ) -> list[ClientPaymentTotal]:
        """Top clients by amount paid; ``limit`` defaults to the configured value."""
        resolved = self._best_clients_default_limit if limit is None else limit
        return self._read(lambda: self._reports.best_clients(start, end, resolved))
