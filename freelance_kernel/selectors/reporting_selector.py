"""
Module: freelance_kernel.selectors.reporting_selector
Responsibility: Earnings reports over paid jobs of terminated contracts.
Architecture position: Kernel > Selectors.  Read-only.

Both reports share one filter:
    job paid  AND  payment_date inside the ReportWindow  AND
    owning contract terminated

Totals are summed in whole cents.  SQLite hands Numeric sums back as
floats (0.1 + 0.2 > 0.3), so comparing summed prices directly would let
rounding noise override the tie-breaks.

Ordering is total so results never depend on store row order:
    best_profession -- total DESC, profession ASC, first row
    best_clients    -- total DESC, client id ASC, first ``limit`` rows

Failure modes:
    - InvalidDateRangeError from ReportWindow.between().
    - InvalidLimitError for limit < 1.
    - NoDataInRangeError when the window matches nothing.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Integer, cast, func, select

from freelance_kernel.domain.amounts import CENT
from freelance_kernel.domain.dtos import (
    ClientPaymentTotal,
    ContractStatus,
    ProfessionEarnings,
)
from freelance_kernel.domain.report_window import ReportWindow
from freelance_kernel.exceptions import InvalidLimitError, NoDataInRangeError
from freelance_kernel.logging_config import get_logger
from freelance_kernel.models.contract import Contract
from freelance_kernel.models.job import Job
from freelance_kernel.models.profile import Profile
from freelance_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.reporting")

DEFAULT_BEST_CLIENTS_LIMIT = 2


def _paid_cents():
    return func.sum(cast(func.round(Job.price * 100), Integer))


def _money(cents) -> Decimal:
    return (Decimal(int(cents)) / 100).quantize(CENT)


class ReportingSelector(BaseSelector[Job]):
    """Aggregations for the admin reports."""

    def _settled_in(self, stmt, window: ReportWindow):
        stmt = stmt.where(
            Job.paid_clause(),
            Contract.status == ContractStatus.TERMINATED.value,
            Job.payment_date >= window.lower,
        )
        if window.upper_inclusive:
            return stmt.where(Job.payment_date <= window.upper)
        return stmt.where(Job.payment_date < window.upper)

    def best_profession(self, start: date, end: date) -> ProfessionEarnings:
        """
        Contractor profession with the highest paid total in the window.

        Raises:
            InvalidDateRangeError, NoDataInRangeError.
        """
        window = ReportWindow.between(start, end)
        total = _paid_cents().label("total")
        stmt = (
            select(Profile.profession, total)
            .select_from(Job)
            .join(Contract, Job.contract_id == Contract.id)
            .join(Profile, Contract.contractor_id == Profile.id)
            .group_by(Profile.profession)
            .order_by(total.desc(), Profile.profession.asc())
            .limit(1)
        )
        row = self.session.execute(self._settled_in(stmt, window)).first()
        if row is None:
            raise NoDataInRangeError(window.start_label, window.end_label)

        logger.debug(
            "best_profession_computed",
            extra={"profession": row.profession, "total": str(_money(row.total))},
        )
        return ProfessionEarnings(profession=row.profession, total=_money(row.total))

    def best_clients(
        self,
        start: date,
        end: date,
        limit: int = DEFAULT_BEST_CLIENTS_LIMIT,
    ) -> list[ClientPaymentTotal]:
        """
        Clients who paid the most in the window, highest first.

        Raises:
            InvalidDateRangeError, InvalidLimitError, NoDataInRangeError.
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise InvalidLimitError(limit)
        window = ReportWindow.between(start, end)

        paid = _paid_cents().label("paid")
        stmt = (
            select(Profile.id, Profile.first_name, Profile.last_name, paid)
            .select_from(Job)
            .join(Contract, Job.contract_id == Contract.id)
            .join(Profile, Contract.client_id == Profile.id)
            .group_by(Profile.id, Profile.first_name, Profile.last_name)
            .order_by(paid.desc(), Profile.id.asc())
            .limit(limit)
        )
        rows = self.session.execute(self._settled_in(stmt, window)).all()
        if not rows:
            raise NoDataInRangeError(window.start_label, window.end_label)

        return [
            ClientPaymentTotal(
                id=row.id,
                full_name=f"{row.first_name} {row.last_name}",
                paid=_money(row.paid),
            )
            for row in rows
        ]
