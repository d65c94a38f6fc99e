"""Database layer - engine, base classes, and immutability listeners."""

from freelance_kernel.db.base import Base, TrackedBase
from freelance_kernel.db.types import Money, PersonName, UTCDateTime
from freelance_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    get_session_factory,
    init_engine_from_url,
    session_scope,
)

__all__ = [
    "Base",
    "TrackedBase",
    "UTCDateTime",
    "Money",
    "PersonName",
    "create_tables",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_engine_from_url",
    "session_scope",
]
