"""
Module: freelance_kernel.db.types
Responsibility: Column types shared by the marketplace models.  Money
    precision and timestamp handling are defined once here so profiles,
    contracts and jobs store them identically.
Architecture position: Kernel > DB.  May be imported by models/ and
    db/base.py.  MUST NOT import from models/, services/ or selectors/.

Invariants enforced:
    - Money is Numeric(12, 2): whole cents, no floats.
    - Timestamps go in and come out as aware UTC datetimes.  SQLite has no
      time zone storage and returns naive values; PostgreSQL returns the
      session time zone.  UTCDateTime normalizes both directions.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated

from sqlalchemy import DateTime, Numeric, String
from sqlalchemy.types import TypeDecorator

MONEY_DECIMAL_PLACES = 2

# Balances and job prices
Money = Annotated[Decimal, Numeric(12, MONEY_DECIMAL_PLACES)]

# First/last name and profession
PersonName = Annotated[str, String(100)]


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator):
    """DateTime(timezone=True) that always yields aware UTC values."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return _to_utc(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return _to_utc(value)
