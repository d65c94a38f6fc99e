"""
DepositService -- client deposits bounded by outstanding work.

Responsibility:
    Credits a client's own balance, refusing any deposit above a fixed
    share (``deposit_cap_ratio``, 25% by default) of what the client still
    owes on unpaid jobs of in-progress contracts.

Architecture position:
    Kernel > Services -- imperative shell.

Invariants enforced:
    - amount <= cap, where cap = outstanding * ratio rounded down to the
      cent.  With nothing outstanding the cap is zero, so only a zero
      deposit passes.
    - The client's profile row is locked before the outstanding total is
      summed.  pay_job locks the same row, so the total cannot shrink
      between the check and the commit.

Failure modes:
    - UnauthorizedError: caller is not a client, or targets another profile.
    - InvalidAmountError / NegativeAmountError: rejected before any query.
    - ProfileNotFoundError: the caller's row vanished.
    - DepositCapExceededError: carries cap and outstanding.
    - TransactionFailureError: store error; rolled back.
"""

import time
from decimal import Decimal
from typing import Any
from uuid import uuid4

from sqlalchemy import func, select

from freelance_kernel.domain.amounts import CENT, deposit_cap, parse_amount
from freelance_kernel.domain.clock import Clock
from freelance_kernel.domain.dtos import DepositReceipt, ProfileInfo
from freelance_kernel.exceptions import (
    DepositCapExceededError,
    MarketplaceError,
    ProfileNotFoundError,
    UnauthorizedError,
)
from freelance_kernel.logging_config import LogContext, elapsed_ms, get_logger
from freelance_kernel.models.contract import Contract
from freelance_kernel.models.job import Job
from freelance_kernel.models.profile import Profile
from freelance_kernel.services.base import BaseService

logger = get_logger("services.deposit")

DEFAULT_DEPOSIT_CAP_RATIO = Decimal("0.25")


class DepositService(BaseService[Profile]):
    """Deposits into a client's own balance."""

    def __init__(
        self,
        session,
        clock: Clock | None = None,
        auto_commit: bool = True,
        lock_rows: bool = True,
        deposit_cap_ratio: Decimal = DEFAULT_DEPOSIT_CAP_RATIO,
    ):
        super().__init__(session, clock, auto_commit=auto_commit, lock_rows=lock_rows)
        self._ratio = Decimal(str(deposit_cap_ratio))

    def deposit(
        self,
        caller: ProfileInfo,
        target_profile_id: int,
        amount: Any,
    ) -> DepositReceipt:
        """
        Deposit ``amount`` into the caller's balance.

        ``amount`` is the raw value from the request; it is parsed here.

        Raises:
            UnauthorizedError, InvalidAmountError, NegativeAmountError,
            ProfileNotFoundError, DepositCapExceededError,
            TransactionFailureError.
        """
        with LogContext.bind(
            correlation_id=str(uuid4()),
            actor_id=str(caller.id),
            operation="deposit",
        ):
            if not caller.is_client or caller.id != target_profile_id:
                logger.warning(
                    "deposit_rejected",
                    extra={
                        "code": UnauthorizedError.code,
                        "target_profile_id": target_profile_id,
                    },
                )
                raise UnauthorizedError(caller.id, f"deposit into profile {target_profile_id}")

            try:
                value = parse_amount(amount)
            except MarketplaceError as exc:
                logger.warning("deposit_rejected", extra={"code": exc.code})
                raise

            logger.info("deposit_started", extra={"amount": str(value)})
            t0 = time.monotonic()

            try:
                with self._transaction("deposit"):
                    receipt = self._credit_within_cap(caller.id, value)
            except MarketplaceError as exc:
                logger.warning(
                    "deposit_rejected",
                    extra={
                        "code": exc.code,
                        "duration_ms": elapsed_ms(t0),
                    },
                )
                raise

            logger.info(
                "deposit_completed",
                extra={
                    "amount": str(receipt.amount),
                    "cap": str(receipt.cap),
                    "outstanding": str(receipt.outstanding),
                    "duration_ms": elapsed_ms(t0),
                },
            )
            return receipt

    def outstanding_total(self, client_id: int) -> Decimal:
        """Sum of prices of the client's unpaid jobs on in-progress contracts."""
        stmt = (
            select(func.coalesce(func.sum(Job.price), 0))
            .select_from(Job)
            .join(Job.contract)
            .where(
                Contract.client_id == client_id,
                Contract.is_active_clause(),
                Job.unpaid_clause(),
            )
        )
        return Decimal(str(self.session.scalar(stmt))).quantize(CENT)

    def _credit_within_cap(self, client_id: int, amount: Decimal) -> DepositReceipt:
        stmt = (
            select(Profile)
            .where(Profile.id == client_id)
            .execution_options(populate_existing=True)
        )
        profile = self.session.scalars(self._locking(stmt)).one_or_none()
        if profile is None:
            raise ProfileNotFoundError(client_id)

        outstanding = self.outstanding_total(client_id)
        cap = deposit_cap(outstanding, self._ratio)
        if amount > cap:
            raise DepositCapExceededError(client_id, amount, cap, outstanding)

        profile.credit(amount)
        self.session.flush()

        return DepositReceipt(
            profile_id=profile.id,
            amount=amount,
            balance=profile.balance,
            outstanding=outstanding,
            cap=cap,
        )
