"""
Hypothesis-based property tests for the ledger rules.

Boundaries fuzzed here:
- Amount parsing: any cent-precision Decimal round-trips, finer ones fail
- Deposit cap: never above ratio x outstanding, never more than a cent below
- pay_job: money conservation and non-negative balances over random job sets
- deposit: accepted exactly when amount <= cap

Database-backed properties create fresh profiles per example, so examples
share the per-test store without interfering.
"""

from decimal import Decimal

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from freelance_kernel.domain.amounts import CENT, deposit_cap, parse_amount
from freelance_kernel.domain.dtos import ContractStatus, ProfileType
from freelance_kernel.exceptions import (
    DepositCapExceededError,
    InsufficientFundsError,
    InvalidAmountError,
)
from freelance_kernel.services.marketplace_orchestrator import MarketplaceOrchestrator

cents = st.decimals(
    min_value=Decimal("0.01"),
    max_value=Decimal("99999.99"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)

ratios = st.decimals(min_value=Decimal("0"), max_value=Decimal("1"), places=4)

db_settings = settings(
    max_examples=25,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture, HealthCheck.too_slow],
)


class TestAmountProperties:

    @given(amount=cents)
    def test_cent_amounts_parse_unchanged(self, amount):
        assert parse_amount(amount) == amount
        assert parse_amount(str(amount)) == amount

    @given(amount=st.decimals(min_value=Decimal("0"), max_value=Decimal("1000"), places=4))
    def test_sub_cent_amounts_rejected(self, amount):
        if amount == amount.quantize(CENT):
            assert parse_amount(amount) == amount
        else:
            with pytest.raises(InvalidAmountError):
                parse_amount(amount)

    @given(outstanding=cents, ratio=ratios)
    def test_cap_bounds(self, outstanding, ratio):
        cap = deposit_cap(outstanding, ratio)
        exact = outstanding * ratio
        assert cap <= exact
        assert exact - cap < CENT
        assert cap == cap.quantize(CENT)


class TestLedgerProperties:

    @db_settings
    @given(
        balance=cents,
        prices=st.lists(cents, min_size=1, max_size=6),
    )
    def test_payments_conserve_money(
        self, session, deterministic_clock, create_profile, create_contract, create_job,
        balance_of, balance, prices,
    ):
        client = create_profile(ProfileType.CLIENT, balance=balance)
        contractor = create_profile(ProfileType.CONTRACTOR, balance="0")
        contract_id = create_contract(client, contractor, ContractStatus.IN_PROGRESS)
        job_ids = [create_job(contract_id, price=p) for p in prices]
        orchestrator = MarketplaceOrchestrator(session, deterministic_clock)

        paid_total = Decimal("0")
        for job_id, price in zip(job_ids, prices):
            try:
                orchestrator.pay_job(client, job_id)
                paid_total += price
            except InsufficientFundsError:
                pass

        client_after = balance_of(client.id)
        contractor_after = balance_of(contractor.id)
        assert client_after >= 0
        assert client_after + contractor_after == balance
        assert contractor_after == paid_total

    @db_settings
    @given(
        prices=st.lists(cents, min_size=0, max_size=4),
        amount=st.decimals(min_value=Decimal("0"), max_value=Decimal("50000"), places=2),
    )
    def test_deposit_accepted_iff_within_cap(
        self, session, deterministic_clock, create_profile, create_contract, create_job,
        balance_of, prices, amount,
    ):
        client = create_profile(ProfileType.CLIENT, balance="0")
        contractor = create_profile(ProfileType.CONTRACTOR)
        contract_id = create_contract(client, contractor, ContractStatus.IN_PROGRESS)
        for p in prices:
            create_job(contract_id, price=p)
        orchestrator = MarketplaceOrchestrator(session, deterministic_clock)
        cap = deposit_cap(sum(prices, Decimal("0")), Decimal("0.25"))

        if amount <= cap:
            receipt = orchestrator.deposit(client, client.id, amount)
            assert receipt.cap == cap
            assert balance_of(client.id) == amount
        else:
            with pytest.raises(DepositCapExceededError):
                orchestrator.deposit(client, client.id, amount)
            assert balance_of(client.id) == Decimal("0")
