"""
Tests for the two-variant job payment state.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from freelance_kernel.domain.dtos import ContractInfo, ContractStatus, JobInfo
from freelance_kernel.domain.payment_state import Paid, Unpaid, payment_state_of
from freelance_kernel.domain.predicates import belongs_to, is_active, is_unpaid


class TestPaymentStateOf:
    """Stored (paid, payment_date) pairs map to exactly one variant."""

    def test_null_is_unpaid(self):
        state = payment_state_of(None, None)
        assert isinstance(state, Unpaid)
        assert state.is_paid is False

    def test_true_with_date_is_paid(self):
        when = datetime(2020, 8, 15, 19, 11, tzinfo=timezone.utc)
        state = payment_state_of(True, when)
        assert state == Paid(paid_at=when)
        assert state.is_paid is True

    def test_naive_date_is_taken_as_utc(self):
        state = payment_state_of(True, datetime(2020, 8, 15, 19, 11))
        assert state.paid_at.tzinfo == timezone.utc

    def test_offset_date_is_converted_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        state = payment_state_of(True, datetime(2020, 8, 15, 21, 0, tzinfo=plus_two))
        assert state.paid_at == datetime(2020, 8, 15, 19, 0, tzinfo=timezone.utc)
        assert state.paid_at.tzinfo == timezone.utc

    @pytest.mark.parametrize(
        "paid, payment_date",
        [
            (False, None),
            (True, None),
            (None, datetime(2020, 1, 1, tzinfo=timezone.utc)),
        ],
    )
    def test_inconsistent_pairs_rejected(self, paid, payment_date):
        with pytest.raises(ValueError):
            payment_state_of(paid, payment_date)


class TestPredicates:
    """Derived predicates over DTOs."""

    def _contract(self, status=ContractStatus.IN_PROGRESS):
        return ContractInfo(id=1, terms="t", status=status, client_id=1, contractor_id=5)

    def test_belongs_to_client_and_contractor(self):
        contract = self._contract()
        assert belongs_to(contract, 1)
        assert belongs_to(contract, 5)
        assert not belongs_to(contract, 2)

    @pytest.mark.parametrize(
        "status, expected",
        [
            (ContractStatus.NEW, False),
            (ContractStatus.IN_PROGRESS, True),
            (ContractStatus.TERMINATED, False),
        ],
    )
    def test_is_active(self, status, expected):
        assert is_active(self._contract(status)) is expected

    def test_is_unpaid(self):
        unpaid = JobInfo(id=1, description="", price=Decimal("1"), contract_id=1, payment_state=Unpaid())
        paid = JobInfo(
            id=2,
            description="",
            price=Decimal("1"),
            contract_id=1,
            payment_state=Paid(datetime(2020, 1, 1, tzinfo=timezone.utc)),
        )
        assert is_unpaid(unpaid)
        assert not is_unpaid(paid)
        assert paid.paid is True
        assert paid.payment_date == datetime(2020, 1, 1, tzinfo=timezone.utc)
        assert unpaid.payment_date is None
