"""
Module: freelance_kernel.models.contract
Responsibility: ORM persistence for the agreement between one client and
    one contractor.  Contracts own their jobs; they only reference their
    two profiles.
Architecture position: Kernel > Models.  May import from db/base.py and the
    domain enums.

Invariants enforced (upstream, not by this model):
    - client_id references a client profile, contractor_id a contractor.
    - status moves new -> in_progress -> terminated, never backwards.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text, or_
from sqlalchemy.orm import Mapped, mapped_column, relationship

from freelance_kernel.db.base import TrackedBase
from freelance_kernel.domain.dtos import ContractStatus

if TYPE_CHECKING:
    from freelance_kernel.models.job import Job
    from freelance_kernel.models.profile import Profile


class Contract(TrackedBase):
    """
    Agreement binding a client and a contractor.

    The class-level clause builders mirror the domain predicates so store
    filters and in-memory checks stay in step.
    """

    __tablename__ = "contracts"

    __table_args__ = (
        Index("idx_contract_client", "client_id"),
        Index("idx_contract_contractor", "contractor_id"),
        Index("idx_contract_status", "status"),
    )

    terms: Mapped[str] = mapped_column(Text, nullable=False, default="")

    status: Mapped[ContractStatus] = mapped_column(
        String(20),
        nullable=False,
        default=ContractStatus.NEW,
    )

    client_id: Mapped[int] = mapped_column(
        ForeignKey("profiles.id"),
        nullable=False,
    )

    contractor_id: Mapped[int] = mapped_column(
        ForeignKey("profiles.id"),
        nullable=False,
    )

    # Lookup-only back references, no cascade
    client: Mapped["Profile"] = relationship(foreign_keys=[client_id])
    contractor: Mapped["Profile"] = relationship(foreign_keys=[contractor_id])

    jobs: Mapped[list["Job"]] = relationship(
        back_populates="contract",
        order_by="Job.id",
    )

    @classmethod
    def involving(cls, profile_id: int):
        """SQL clause: the profile is this contract's client or contractor."""
        return or_(cls.client_id == profile_id, cls.contractor_id == profile_id)

    @classmethod
    def is_active_clause(cls):
        """SQL clause: work under the contract is in progress."""
        return cls.status == ContractStatus.IN_PROGRESS.value

    def __repr__(self) -> str:
        return f"<Contract {self.id}: {self.client_id} -> {self.contractor_id} ({self.status})>"
