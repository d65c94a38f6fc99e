"""
Module: freelance_kernel.models.profile
Responsibility: ORM persistence for marketplace accounts -- clients who pay
    for jobs and contractors who are paid for them.  Profile rows hold the
    balance that the ledger moves money between.
Architecture position: Kernel > Models.  May import from db/base.py and the
    domain enums.  MUST NOT import from services/ or selectors/.

Invariants enforced:
    - balance >= 0 (ck_profile_balance_non_negative).  The ledger checks
      funds before debiting; the constraint catches anything that slips by.
    - Balances change only through credit()/debit(), which the ledger and
      deposit services call inside their locked transactions.

Failure modes:
    - InsufficientFundsError from debit() when the balance would go negative.
    - IntegrityError if the CHECK constraint is violated at flush.
"""

from decimal import Decimal

from sqlalchemy import CheckConstraint, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from freelance_kernel.db.base import TrackedBase
from freelance_kernel.db.types import Money, PersonName
from freelance_kernel.domain.dtos import ProfileType
from freelance_kernel.exceptions import InsufficientFundsError


class Profile(TrackedBase):
    """
    A party in the marketplace, either client or contractor.

    Guarantees:
        - type is set at creation and never changes.
        - balance is never negative after a flush.

    Non-goals:
        - Profiles are provisioned and never deleted by the kernel.
    """

    __tablename__ = "profiles"

    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_profile_balance_non_negative"),
        Index("idx_profile_type", "type"),
        Index("idx_profile_profession", "profession"),
    )

    first_name: Mapped[PersonName]

    last_name: Mapped[PersonName]

    # Free text, grouped on by the earnings report
    profession: Mapped[PersonName]

    balance: Mapped[Money] = mapped_column(
        nullable=False,
        default=Decimal("0"),
    )

    type: Mapped[ProfileType] = mapped_column(String(20), nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def credit(self, amount: Decimal) -> None:
        """Add funds. Callers hold the row lock."""
        self.balance = self.balance + amount

    def debit(self, amount: Decimal) -> None:
        """Remove funds. Callers hold the row lock.

        Raises:
            InsufficientFundsError: if the balance would go negative.
        """
        if self.balance < amount:
            raise InsufficientFundsError(self.id, self.balance, amount)
        self.balance = self.balance - amount

    def __repr__(self) -> str:
        return f"<Profile {self.id}: {self.full_name} ({self.type})>"
