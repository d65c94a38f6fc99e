"""
LedgerService -- atomic, exactly-once job payment.

Responsibility:
    Moves a job's price from the paying client to the contractor and marks
    the job paid, as one unit of work.

Architecture position:
    Kernel > Services -- imperative shell.  Reads and locks through the
    ORM models; returns PaymentReceipt DTOs.

Invariants enforced:
    - Exactly-once payment: the unpaid check and the paid mutation happen
      under the same row lock on the job.  A second payer blocked on that
      lock reads the committed row once it is released, finds it Paid, and
      is refused with InvalidJobError.
    - Money conservation: the client loses exactly what the contractor
      gains; both balances are read from locked rows.
    - Lock order: job row first, then both profiles in ascending id order,
      so two payments touching the same profiles never deadlock.  Deposits
      lock the client's profile only, which keeps the same order.

Failure modes:
    - UnauthorizedError: caller is not a client (raised before any query).
    - InvalidJobError: no such job, already paid, contract not in progress,
      or caller is not the contract's client.
    - InsufficientFundsError: client balance below the job price.
    - TransactionFailureError: store error; everything rolled back.
"""

import time
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.orm import contains_eager

from freelance_kernel.domain.dtos import PaymentReceipt, ProfileInfo
from freelance_kernel.domain.predicates import is_active, is_unpaid
from freelance_kernel.exceptions import (
    InsufficientFundsError,
    InvalidJobError,
    MarketplaceError,
    UnauthorizedError,
)
from freelance_kernel.logging_config import LogContext, elapsed_ms, get_logger
from freelance_kernel.models.job import Job
from freelance_kernel.models.profile import Profile
from freelance_kernel.services.base import BaseService

logger = get_logger("services.ledger")


class LedgerService(BaseService[Job]):
    """
    Pays jobs.

    Contract:
        ``pay_job`` either commits the whole transfer or leaves every row as
        it was.

    Non-goals:
        - Does not move jobs between contracts or change prices.
        - Does not refund; a paid job stays paid.
    """

    def pay_job(self, caller: ProfileInfo, job_id: int) -> PaymentReceipt:
        """
        Pay for a job on behalf of its client.

        Preconditions:
            caller is the resolved profile of the requester.

        Postconditions:
            client.balance -= price, contractor.balance += price,
            job is Paid(clock.now()).  Committed when auto_commit is set.

        Raises:
            UnauthorizedError, InvalidJobError, InsufficientFundsError,
            TransactionFailureError.
        """
        with LogContext.bind(
            correlation_id=str(uuid4()),
            actor_id=str(caller.id),
            operation="pay_job",
            job_id=str(job_id),
        ):
            if not caller.is_client:
                logger.warning(
                    "job_payment_rejected",
                    extra={"code": UnauthorizedError.code, "profile_type": caller.type.value},
                )
                raise UnauthorizedError(caller.id, "pay for jobs")

            logger.info("job_payment_started")
            t0 = time.monotonic()

            try:
                with self._transaction("pay_job"):
                    receipt = self._transfer(caller, job_id)
            except MarketplaceError as exc:
                logger.warning(
                    "job_payment_rejected",
                    extra={
                        "code": exc.code,
                        "duration_ms": elapsed_ms(t0),
                    },
                )
                raise

            logger.info(
                "job_payment_completed",
                extra={
                    "amount": str(receipt.amount),
                    "contractor_id": receipt.contractor_id,
                    "duration_ms": elapsed_ms(t0),
                },
            )
            return receipt

    def _transfer(self, caller: ProfileInfo, job_id: int) -> PaymentReceipt:
        """Transfer logic, run inside the caller's transaction."""
        stmt = (
            select(Job)
            .join(Job.contract)
            .options(contains_eager(Job.contract))
            .where(Job.id == job_id)
            .execution_options(populate_existing=True)
        )
        job = self.session.scalars(self._locking(stmt, of=Job)).one_or_none()
        # Checked on the locked, freshly loaded row
        if (
            job is None
            or not is_unpaid(job)
            or not is_active(job.contract)
            or job.contract.client_id != caller.id
        ):
            raise InvalidJobError(job_id, caller.id)

        contract = job.contract
        profiles = self._lock_profiles(contract.client_id, contract.contractor_id)
        client = profiles[contract.client_id]
        contractor = profiles[contract.contractor_id]

        if client.balance < job.price:
            raise InsufficientFundsError(client.id, client.balance, job.price)

        paid_at = self._clock.now()
        client.debit(job.price)
        contractor.credit(job.price)
        job.mark_paid(paid_at)
        self.session.flush()

        return PaymentReceipt(
            job_id=job.id,
            client_id=client.id,
            contractor_id=contractor.id,
            amount=job.price,
            paid_at=paid_at,
            client_balance=client.balance,
            contractor_balance=contractor.balance,
        )

    def _lock_profiles(self, *profile_ids: int) -> dict[int, Profile]:
        stmt = (
            select(Profile)
            .where(Profile.id.in_(profile_ids))
            .order_by(Profile.id)
            .execution_options(populate_existing=True)
        )
        return {p.id: p for p in self.session.scalars(self._locking(stmt))}
