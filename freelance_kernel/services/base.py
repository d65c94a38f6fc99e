"""
BaseService -- abstract base for the kernel's write services.

Responsibility:
    Provides the common constructor and the transaction contract for the
    services that move money (LedgerService, DepositService).  Each public
    operation of those services is one unit of work: it reads and locks the
    rows it will change, mutates them, and then commits, or rolls back
    everything on the first failure.

Architecture position:
    Kernel > Services -- imperative shell infrastructure.

Invariants enforced:
    - Transaction boundaries: with auto_commit=True (the default) the
      service commits on success and rolls back on any failure before the
      error propagates.  With auto_commit=False it only flushes, and the
      caller owns commit/rollback, so the operation can join a larger
      transaction.
    - Store errors never escape raw: SQLAlchemyError is wrapped in
      TransactionFailureError with the original chained.

Failure modes:
    - TransactionFailureError after a store error (connection loss,
      constraint violation, lock timeout).
"""

import time
from abc import ABC
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from freelance_kernel.db.base import Base
from freelance_kernel.domain.clock import Clock, SystemClock
from freelance_kernel.exceptions import TransactionFailureError
from freelance_kernel.logging_config import elapsed_ms, get_logger

ModelType = TypeVar("ModelType", bound=Base)

logger = get_logger("services.base")


class BaseService(ABC, Generic[ModelType]):
    """
    Abstract base class for kernel write services.

    Contract:
        Accepts a SQLAlchemy ``Session`` from the caller.  Operations run
        inside ``_transaction()``.

    Non-goals:
        - Does NOT provide query-only (read) methods -- those belong
          in ``freelance_kernel/selectors/``.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        auto_commit: bool = True,
        lock_rows: bool = True,
    ):
        """
        Initialize the service.

        Args:
            session: SQLAlchemy session for database operations.
            clock: Time source for recorded timestamps.
            auto_commit: Commit/rollback per operation (see module docstring).
            lock_rows: Take SELECT ... FOR UPDATE locks on rows that will be
                mutated.  Dialects without row locks ignore the clause.
        """
        self.session = session
        self._clock = clock or SystemClock()
        self._auto_commit = auto_commit
        self._lock_rows = lock_rows

    def _locking(self, stmt, **kwargs):
        """Apply FOR UPDATE to a select when row locking is enabled."""
        if self._lock_rows:
            return stmt.with_for_update(**kwargs)
        return stmt

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[None]:
        """Unit-of-work scope for one ledger operation."""
        t0 = time.monotonic()
        try:
            yield
            if self._auto_commit:
                self.session.commit()
            else:
                self.session.flush()
        except SQLAlchemyError as exc:
            self._rollback(operation, t0)
            raise TransactionFailureError(operation, type(exc).__name__) from exc
        except Exception:
            self._rollback(operation, t0)
            raise

    def _rollback(self, operation: str, t0: float) -> None:
        if not self._auto_commit:
            return
        self.session.rollback()
        logger.warning(
            "transaction_rolled_back",
            extra={
                "operation": operation,
                "duration_ms": elapsed_ms(t0),
            },
        )
