"""
Pure domain layer.

Contains the marketplace DTOs, the payment state, predicates, amount
parsing, report windows and the clock, with NO dependencies on:
- ORM (SQLAlchemy)
- Database
- I/O (except SystemClock)
"""

from freelance_kernel.domain.amounts import CENT, deposit_cap, parse_amount
from freelance_kernel.domain.clock import Clock, DeterministicClock, SystemClock, as_utc
from freelance_kernel.domain.dtos import (
    ClientPaymentTotal,
    ContractInfo,
    ContractStatus,
    DepositReceipt,
    JobInfo,
    PaymentReceipt,
    ProfessionEarnings,
    ProfileInfo,
    ProfileType,
)
from freelance_kernel.domain.payment_state import (
    Paid,
    PaymentState,
    Unpaid,
    payment_state_of,
)
from freelance_kernel.domain.predicates import belongs_to, is_active, is_unpaid
from freelance_kernel.domain.report_window import ReportWindow

__all__ = [
    "CENT",
    "ClientPaymentTotal",
    "Clock",
    "ContractInfo",
    "ContractStatus",
    "DepositReceipt",
    "DeterministicClock",
    "JobInfo",
    "Paid",
    "PaymentReceipt",
    "PaymentState",
    "ProfessionEarnings",
    "ProfileInfo",
    "ProfileType",
    "ReportWindow",
    "SystemClock",
    "Unpaid",
    "as_utc",
    "belongs_to",
    "deposit_cap",
    "is_active",
    "is_unpaid",
    "parse_amount",
    "payment_state_of",
]
