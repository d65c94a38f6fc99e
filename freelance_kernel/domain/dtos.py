"""
DTOs -- Pure domain data transfer objects.

Responsibility:
    Defines the immutable data structures that leave the kernel: profile,
    contract and job snapshots, the receipts returned by the ledger
    operations, and the report rows.  Also owns the two classification
    enums shared by the ORM models.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    from_model() class methods exist as boundary converters but are only
    invoked from the service and selector layers.

Invariants enforced:
    - Services and selectors return these DTOs, never ORM entities, so no
      caller can mutate a balance by assigning to a returned object.
    - Monetary fields are Decimal (never float).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from freelance_kernel.domain.payment_state import PaymentState, payment_state_of

if TYPE_CHECKING:
    from freelance_kernel.models.contract import Contract as ContractModel
    from freelance_kernel.models.job import Job as JobModel
    from freelance_kernel.models.profile import Profile as ProfileModel


class ProfileType(str, Enum):
    """Role of a profile in the marketplace."""

    CLIENT = "client"  # Pays for jobs
    CONTRACTOR = "contractor"  # Is paid for jobs


class ContractStatus(str, Enum):
    """Contract lifecycle status.

    Transitions follow NEW -> IN_PROGRESS -> TERMINATED; they are driven
    outside the kernel.
    """

    NEW = "new"
    IN_PROGRESS = "in_progress"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class ProfileInfo:
    """Immutable snapshot of a profile."""

    id: int
    type: ProfileType
    first_name: str
    last_name: str
    profession: str
    balance: Decimal

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_client(self) -> bool:
        return self.type == ProfileType.CLIENT

    @classmethod
    def from_model(cls, model: ProfileModel) -> ProfileInfo:
        return cls(
            id=model.id,
            type=ProfileType(model.type),
            first_name=model.first_name,
            last_name=model.last_name,
            profession=model.profession,
            balance=model.balance,
        )


@dataclass(frozen=True)
class ContractInfo:
    """Immutable snapshot of a contract."""

    id: int
    terms: str
    status: ContractStatus
    client_id: int
    contractor_id: int

    @classmethod
    def from_model(cls, model: ContractModel) -> ContractInfo:
        return cls(
            id=model.id,
            terms=model.terms,
            status=ContractStatus(model.status),
            client_id=model.client_id,
            contractor_id=model.contractor_id,
        )


@dataclass(frozen=True)
class JobInfo:
    """Immutable snapshot of a job and its payment state."""

    id: int
    description: str
    price: Decimal
    contract_id: int
    payment_state: PaymentState

    @property
    def paid(self) -> bool:
        return self.payment_state.is_paid

    @property
    def payment_date(self) -> datetime | None:
        return getattr(self.payment_state, "paid_at", None)

    @classmethod
    def from_model(cls, model: JobModel) -> JobInfo:
        return cls(
            id=model.id,
            description=model.description,
            price=model.price,
            contract_id=model.contract_id,
            payment_state=payment_state_of(model.paid, model.payment_date),
        )


@dataclass(frozen=True)
class PaymentReceipt:
    """Outcome of a successful job payment."""

    job_id: int
    client_id: int
    contractor_id: int
    amount: Decimal
    paid_at: datetime
    client_balance: Decimal
    contractor_balance: Decimal


@dataclass(frozen=True)
class DepositReceipt:
    """Outcome of a successful deposit."""

    profile_id: int
    amount: Decimal
    balance: Decimal
    outstanding: Decimal
    cap: Decimal


@dataclass(frozen=True)
class ProfessionEarnings:
    """Total earned by one contractor profession in a report window."""

    profession: str
    total: Decimal


@dataclass(frozen=True)
class ClientPaymentTotal:
    """Total paid by one client in a report window."""

    id: int
    full_name: str
    paid: Decimal
