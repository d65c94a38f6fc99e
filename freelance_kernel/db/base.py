"""
Module: freelance_kernel.db.base
Responsibility: Declarative base for the marketplace models: integer
    primary keys, the annotation map that turns ``Mapped[Decimal]`` and
    ``Mapped[datetime]`` into the shared column types, and row timestamps.
Architecture position: Kernel > DB.  ALL model files import from here.
    This module MUST NOT import from models/, services/, selectors/ or
    domain/.

Invariants enforced:
    - Profile, contract and job ids are small integers; they are the public
      identifiers the request layer passes around.
    - Any ``Mapped[Decimal]`` column is Money (see db/types.py).
    - Any ``Mapped[datetime]`` column is UTCDateTime.
"""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar

from sqlalchemy import Integer, Numeric, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from freelance_kernel.db.types import (
    MONEY_DECIMAL_PLACES,
    Money,
    PersonName,
    UTCDateTime,
)


class Base(DeclarativeBase):
    """Declarative base for all marketplace models."""

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(12, MONEY_DECIMAL_PLACES),
        Money: Numeric(12, MONEY_DECIMAL_PLACES),
        PersonName: String(100),
        datetime: UTCDateTime(),
    }

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class TrackedBase(Base):
    """
    Abstract base adding store-maintained row timestamps.

    created_at is filled by the store on INSERT.  updated_at is refreshed on
    every ORM UPDATE, so a balance change or a payment shows up there.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
    )
