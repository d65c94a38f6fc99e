"""
Module: freelance_kernel.models.job
Responsibility: ORM persistence for a unit of billable work under one
    contract, and its one-way transition to paid.
Architecture position: Kernel > Models.  May import from db/base.py and the
    domain layer.

Invariants enforced:
    - price > 0 (ck_job_price_positive).
    - paid is NULL or TRUE, never FALSE (ck_job_paid_never_false).
    - payment_date is set iff paid is set (ck_job_payment_date_matches_paid).
    - Once paid, price/paid/payment_date never change again.  mark_paid()
      refuses a second payment; db/immutability.py blocks direct writes.

Failure modes:
    - ValueError from mark_paid() on an already paid job.
    - IntegrityError on a CHECK constraint violation at flush.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from freelance_kernel.db.base import TrackedBase
from freelance_kernel.db.types import Money
from freelance_kernel.domain.clock import as_utc
from freelance_kernel.domain.payment_state import PaymentState, payment_state_of

if TYPE_CHECKING:
    from freelance_kernel.models.contract import Contract


class Job(TrackedBase):
    """
    Billable work owned by a contract, paid at most once.

    The stored (paid, payment_date) pair is only read through
    ``payment_state``, which yields Unpaid or Paid(paid_at).
    """

    __tablename__ = "jobs"

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_job_price_positive"),
        CheckConstraint("paid IS NULL OR paid = true", name="ck_job_paid_never_false"),
        CheckConstraint(
            "(paid IS NULL AND payment_date IS NULL) "
            "OR (paid IS NOT NULL AND payment_date IS NOT NULL)",
            name="ck_job_payment_date_matches_paid",
        ),
        Index("idx_job_contract", "contract_id"),
        Index("idx_job_payment_date", "payment_date"),
    )

    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    price: Mapped[Money] = mapped_column(nullable=False)

    paid: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=None)

    payment_date: Mapped[datetime | None] = mapped_column(nullable=True, default=None)

    contract_id: Mapped[int] = mapped_column(
        ForeignKey("contracts.id"),
        nullable=False,
    )

    contract: Mapped["Contract"] = relationship(back_populates="jobs")

    @property
    def payment_state(self) -> PaymentState:
        return payment_state_of(self.paid, self.payment_date)

    def mark_paid(self, paid_at: datetime) -> None:
        """Record the one and only payment of this job.

        Raises:
            ValueError: if the job is already paid.
        """
        if self.paid is not None:
            raise ValueError(f"Job {self.id} is already paid")
        self.paid = True
        self.payment_date = as_utc(paid_at)

    @classmethod
    def unpaid_clause(cls):
        """SQL clause: the job has not been paid."""
        return cls.paid.is_(None)

    @classmethod
    def paid_clause(cls):
        """SQL clause: the job has been paid."""
        return cls.paid.is_(True)

    def __repr__(self) -> str:
        return f"<Job {self.id}: {self.price} on contract {self.contract_id}>"
