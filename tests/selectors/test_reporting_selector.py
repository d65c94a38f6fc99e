"""
Tests for the earnings reports.

Scenario (all paid in August 2020 unless noted):

    client   contractor (profession)  contract     jobs
    c1       prog  (Programmer)       terminated   200 @ 08-10, 100 @ 08-15
    c2       mus   (Musician)         terminated   250 @ 08-12
    c3       prog2 (Programmer)       terminated    50 @ 08-14
    c2       fight (Fighter)          in_progress 5000 @ 08-12   (ignored)
    c3       fight (Fighter)          terminated   900 unpaid    (ignored)
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from freelance_kernel.domain.dtos import ContractStatus, ProfileType
from freelance_kernel.exceptions import (
    InvalidDateRangeError,
    InvalidLimitError,
    NoDataInRangeError,
)
from freelance_kernel.selectors.reporting_selector import ReportingSelector

TERMINATED = ContractStatus.TERMINATED
AUG_START = date(2020, 8, 1)
AUG_END = date(2020, 8, 31)


def paid(day: int, hour: int = 19) -> datetime:
    return datetime(2020, 8, day, hour, 11, 26, tzinfo=timezone.utc)


@pytest.fixture
def reports(session) -> ReportingSelector:
    return ReportingSelector(session)


@pytest.fixture
def scenario(create_profile, create_contract, create_job):
    c1 = create_profile(ProfileType.CLIENT, first_name="Harry", last_name="Potter")
    c2 = create_profile(ProfileType.CLIENT, first_name="Mr", last_name="Robot")
    c3 = create_profile(ProfileType.CLIENT, first_name="John", last_name="Snow")
    prog = create_profile(ProfileType.CONTRACTOR, profession="Programmer")
    prog2 = create_profile(ProfileType.CONTRACTOR, profession="Programmer")
    mus = create_profile(ProfileType.CONTRACTOR, profession="Musician")
    fight = create_profile(ProfileType.CONTRACTOR, profession="Fighter")

    k1 = create_contract(c1, prog, TERMINATED)
    create_job(k1, price="200", paid_at=paid(10))
    create_job(k1, price="100", paid_at=paid(15))
    k2 = create_contract(c2, mus, TERMINATED)
    create_job(k2, price="250", paid_at=paid(12))
    k3 = create_contract(c3, prog2, TERMINATED)
    create_job(k3, price="50", paid_at=paid(14))
    k4 = create_contract(c2, fight, ContractStatus.IN_PROGRESS)
    create_job(k4, price="5000", paid_at=paid(12))
    k5 = create_contract(c3, fight, TERMINATED)
    create_job(k5, price="900")

    return {"c1": c1, "c2": c2, "c3": c3}


class TestBestProfession:

    def test_sums_across_contractors_of_a_profession(self, reports, scenario):
        best = reports.best_profession(AUG_START, AUG_END)
        assert best.profession == "Programmer"
        assert best.total == Decimal("350")

    def test_narrow_window(self, reports, scenario):
        best = reports.best_profession(date(2020, 8, 11), date(2020, 8, 14))
        assert best.profession == "Musician"
        assert best.total == Decimal("250")

    def test_end_date_covers_whole_day(self, reports, scenario):
        best = reports.best_profession(date(2020, 8, 15), date(2020, 8, 15))
        assert best.profession == "Programmer"
        assert best.total == Decimal("100")

    def test_datetime_bounds_are_inclusive(self, reports, scenario):
        best = reports.best_profession(paid(15), paid(15))
        assert best.total == Decimal("100")

    def test_ignores_active_contracts(self, reports, scenario):
        """The Fighter's 5000 is on an in-progress contract."""
        assert reports.best_profession(AUG_START, AUG_END).profession != "Fighter"

    def test_tie_goes_to_smallest_profession(
        self, reports, create_profile, create_contract, create_job,
    ):
        client = create_profile(ProfileType.CLIENT)
        for profession in ("Zookeeper", "Accountant", "Musician"):
            contractor = create_profile(ProfileType.CONTRACTOR, profession=profession)
            contract = create_contract(client, contractor, TERMINATED)
            create_job(contract, price="75", paid_at=paid(3))

        assert reports.best_profession(AUG_START, AUG_END).profession == "Accountant"

    def test_fractional_totals_tie_exactly(
        self, reports, create_profile, create_contract, create_job,
    ):
        """0.30 in one job and 0.10 + 0.20 in two are the same total."""
        client = create_profile(ProfileType.CLIENT)
        beta = create_profile(ProfileType.CONTRACTOR, profession="Beta")
        contract = create_contract(client, beta, TERMINATED)
        create_job(contract, price="0.1", paid_at=paid(3))
        create_job(contract, price="0.2", paid_at=paid(3))
        alpha = create_profile(ProfileType.CONTRACTOR, profession="Alpha")
        create_job(create_contract(client, alpha, TERMINATED), price="0.3", paid_at=paid(3))

        best = reports.best_profession(AUG_START, AUG_END)
        assert best.profession == "Alpha"
        assert best.total == Decimal("0.30")

    def test_empty_window(self, reports, scenario):
        with pytest.raises(NoDataInRangeError) as exc_info:
            reports.best_profession(date(2021, 1, 1), date(2021, 12, 31))
        assert exc_info.value.start == "2021-01-01"
        assert exc_info.value.end == "2021-12-31"
        assert "No data found for this period" in str(exc_info.value)

    def test_start_after_end(self, reports, scenario):
        with pytest.raises(InvalidDateRangeError):
            reports.best_profession(AUG_END, AUG_START)


class TestBestClients:

    def test_default_limit_is_two(self, reports, scenario):
        rows = reports.best_clients(AUG_START, AUG_END)
        assert [(r.id, r.paid) for r in rows] == [
            (scenario["c1"].id, Decimal("300")),
            (scenario["c2"].id, Decimal("250")),
        ]
        assert rows[0].full_name == "Harry Potter"
        assert rows[1].full_name == "Mr Robot"

    def test_limit(self, reports, scenario):
        rows = reports.best_clients(AUG_START, AUG_END, limit=10)
        assert [r.full_name for r in rows] == ["Harry Potter", "Mr Robot", "John Snow"]
        assert reports.best_clients(AUG_START, AUG_END, limit=1)[0].full_name == "Harry Potter"

    def test_descending_order(self, reports, scenario):
        rows = reports.best_clients(AUG_START, AUG_END, limit=3)
        totals = [r.paid for r in rows]
        assert totals == sorted(totals, reverse=True)

    def test_ties_broken_by_client_id(self, reports, create_profile, create_contract, create_job):
        contractor = create_profile(ProfileType.CONTRACTOR)
        clients = [create_profile(ProfileType.CLIENT) for _ in range(3)]
        for c in reversed(clients):
            contract = create_contract(c, contractor, TERMINATED)
            create_job(contract, price="10", paid_at=paid(2))

        rows = reports.best_clients(AUG_START, AUG_END, limit=3)
        assert [r.id for r in rows] == sorted(c.id for c in clients)

    def test_fractional_totals_tie_by_client_id(
        self, reports, create_profile, create_contract, create_job,
    ):
        contractor = create_profile(ProfileType.CONTRACTOR)
        first = create_profile(ProfileType.CLIENT)
        second = create_profile(ProfileType.CLIENT)
        create_job(create_contract(first, contractor, TERMINATED), price="0.3", paid_at=paid(4))
        split = create_contract(second, contractor, TERMINATED)
        create_job(split, price="0.1", paid_at=paid(4))
        create_job(split, price="0.2", paid_at=paid(4))

        rows = reports.best_clients(AUG_START, AUG_END, limit=2)
        assert [(r.id, r.paid) for r in rows] == [
            (first.id, Decimal("0.30")),
            (second.id, Decimal("0.30")),
        ]
        assert reports.best_clients(AUG_START, AUG_END, limit=1)[0].id == first.id

    @pytest.mark.parametrize("limit", [0, -1, True, 1.5])
    def test_invalid_limit(self, reports, scenario, limit):
        with pytest.raises(InvalidLimitError):
            reports.best_clients(AUG_START, AUG_END, limit=limit)

    def test_empty_window(self, reports, scenario):
        with pytest.raises(NoDataInRangeError):
            reports.best_clients(date(2019, 1, 1), date(2019, 1, 2))
