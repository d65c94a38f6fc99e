"""
Reference marketplace data set used by `marketplace_cli.py seed`.

Inserts 4 clients, 4 contractors, 9 contracts and their jobs (some
already paid).  Profiles 1-4 are clients and 5-8 contractors.
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.orm import Session

from freelance_kernel.domain.dtos import ContractStatus, ProfileType
from freelance_kernel.models import Contract, Job, Profile

CLIENT = ProfileType.CLIENT.value
CONTRACTOR = ProfileType.CONTRACTOR.value
NEW = ContractStatus.NEW.value
IN_PROGRESS = ContractStatus.IN_PROGRESS.value
TERMINATED = ContractStatus.TERMINATED.value

# (id, first_name, last_name, profession, balance, type)
PROFILES = [
    (1, "Harry", "Potter", "Wizard", "1150", CLIENT),
    (2, "Mr", "Robot", "Hacker", "231.11", CLIENT),
    (3, "John", "Snow", "Knows nothing", "451.3", CLIENT),
    (4, "Ash", "Kethcum", "Pokemon master", "1.3", CLIENT),
    (5, "John", "Lenon", "Musician", "64", CONTRACTOR),
    (6, "Linus", "Torvalds", "Programmer", "1214", CONTRACTOR),
    (7, "Alan", "Turing", "Programmer", "22", CONTRACTOR),
    (8, "Aragorn", "II Elessar Telcontarion", "Fighter", "314", CONTRACTOR),
]

# (id, terms, status, client_id, contractor_id)
CONTRACTS = [
    (1, "bla bla bla", TERMINATED, 1, 5),
    (2, "bla bla bla", IN_PROGRESS, 1, 6),
    (3, "bla bla bla", IN_PROGRESS, 2, 6),
    (4, "bla bla bla", IN_PROGRESS, 2, 7),
    (5, "bla bla bla", NEW, 3, 8),
    (6, "bla bla bla", IN_PROGRESS, 3, 7),
    (7, "bla bla bla", IN_PROGRESS, 4, 7),
    (8, "bla bla bla", IN_PROGRESS, 4, 6),
    (9, "bla bla bla", IN_PROGRESS, 4, 8),
]

# Tables seeded with explicit ids
EXPLICIT_ID_TABLES = ("profiles", "contracts")


def _paid(day: int, hour: int = 19) -> datetime:
    return datetime(2020, 8, day, hour, 11, 26, tzinfo=UTC)


# (description, price, contract_id, paid_at or None)
JOBS = [
    ("work", "200", 1, None),
    ("work", "201", 2, None),
    ("work", "202", 3, None),
    ("work", "200", 4, None),
    ("work", "200", 7, None),
    ("work", "2020", 7, _paid(15)),
    ("work", "200", 2, _paid(15)),
    ("work", "200", 3, _paid(15)),
    ("work", "200", 1, _paid(17)),
    ("work", "200", 5, _paid(17)),
    ("work", "21", 1, _paid(10)),
    ("work", "21", 2, _paid(15)),
    ("work", "121", 3, _paid(15)),
    ("work", "121", 3, _paid(14, hour=23)),
]


def _advance_id_sequences(session: Session) -> None:
    """Move PostgreSQL id sequences past the explicitly inserted ids.

    SQLite picks the next rowid from MAX(id) on its own.
    """
    if session.get_bind().dialect.name != "postgresql":
        return
    for table in EXPLICIT_ID_TABLES:
        session.execute(
            text(
                f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
                f"(SELECT MAX(id) FROM {table}))"
            )
        )


def seed(session: Session) -> dict[str, int]:
    """Insert the reference data set and flush.  Returns row counts."""
    for pid, first, last, profession, balance, ptype in PROFILES:
        session.add(
            Profile(
                id=pid,
                first_name=first,
                last_name=last,
                profession=profession,
                balance=Decimal(balance),
                type=ptype,
            )
        )
    session.flush()

    for cid, terms, status, client_id, contractor_id in CONTRACTS:
        session.add(
            Contract(
                id=cid,
                terms=terms,
                status=status,
                client_id=client_id,
                contractor_id=contractor_id,
            )
        )
    session.flush()
    _advance_id_sequences(session)

    for description, price, contract_id, paid_at in JOBS:
        session.add(
            Job(
                description=description,
                price=Decimal(price),
                contract_id=contract_id,
                paid=True if paid_at else None,
                payment_date=paid_at,
            )
        )
    session.flush()

    return {"profiles": len(PROFILES), "contracts": len(CONTRACTS), "jobs": len(JOBS)}

