"""
PaymentState -- the two states a job can be in.

A job is either Unpaid or Paid at a specific instant.  There is no third
"paid = false" state: the store column is NULL or TRUE, and the domain
reads it through ``payment_state_of`` into one of these two variants.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Union

from freelance_kernel.domain.clock import as_utc


@dataclass(frozen=True, slots=True)
class Unpaid:
    """Job has not been paid yet."""

    @property
    def is_paid(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Paid:
    """Job was paid exactly once, at ``paid_at``."""

    paid_at: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "paid_at", as_utc(self.paid_at))

    @property
    def is_paid(self) -> bool:
        return True


PaymentState = Union[Unpaid, Paid]

UNPAID = Unpaid()


def payment_state_of(paid: bool | None, payment_date: datetime | None) -> PaymentState:
    """
    Build the payment state from the stored (paid, payment_date) pair.

    Raises:
        ValueError: if the pair is inconsistent (paid without a date, a date
            without paid, or an explicit False).
    """
    if paid is None:
        if payment_date is not None:
            raise ValueError("Unpaid job cannot carry a payment date")
        return UNPAID
    if paid is not True and paid != 1:
        raise ValueError(f"Stored paid flag must be NULL or TRUE, got {paid!r}")
    if payment_date is None:
        raise ValueError("Paid job must carry a payment date")
    return Paid(paid_at=payment_date)
