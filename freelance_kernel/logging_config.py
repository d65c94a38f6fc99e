"""
Structured JSON logging for the freelance kernel.

Every record is one JSON object per line.  Fields come from three places:

    base          ts, level, logger, message
    LogContext    correlation_id, actor_id, operation, job_id
    extra={...}   whatever the call site passes (amounts as strings)

A record logged with ``exc_info`` also carries the exception type and
message.  For marketplace errors it adds the error ``code`` and every
structured attribute, prefixed ``exc_`` (``exc_cap``, ``exc_profile_id``).

Usage:
    logger = get_logger("services.ledger")
    with LogContext.bind(correlation_id=cid, actor_id=str(caller.id)):
        logger.info("job_payment_completed", extra={"amount": "40.00"})
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "elapsed_ms",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
import time
from contextvars import ContextVar, Token
from datetime import UTC, datetime
from typing import Any

_LOGGER_PREFIX = "freelance_kernel"


# ---------------------------------------------------------------------------
# Request-scoped context
# ---------------------------------------------------------------------------


class LogContext:
    """Per-request log fields, held in contextvars so threads never mix."""

    FIELDS = ("correlation_id", "actor_id", "operation", "job_id")

    _vars: dict[str, ContextVar[str | None]] = {
        name: ContextVar(f"log_{name}", default=None) for name in FIELDS
    }

    @classmethod
    def set(
        cls,
        *,
        correlation_id: str | None = None,
        actor_id: str | None = None,
        operation: str | None = None,
        job_id: str | None = None,
    ) -> None:
        """Set fields; None leaves a field as it was."""
        cls._set_many(
            correlation_id=correlation_id,
            actor_id=actor_id,
            operation=operation,
            job_id=job_id,
        )

    @classmethod
    def get_all(cls) -> dict[str, str]:
        return {
            name: value
            for name, var in cls._vars.items()
            if (value := var.get()) is not None
        }

    @classmethod
    def clear(cls) -> None:
        for var in cls._vars.values():
            var.set(None)

    @classmethod
    def bind(cls, **fields: str | None) -> "_BoundContext":
        """Set fields for the duration of a ``with`` block.

        Unknown names are ignored so call sites can pass optional ids freely.
        """
        return _BoundContext(fields)

    @classmethod
    def _set_many(cls, **fields: str | None) -> dict[str, Token]:
        tokens: dict[str, Token] = {}
        for name, value in fields.items():
            var = cls._vars.get(name)
            if var is not None and value is not None:
                tokens[name] = var.set(value)
        return tokens


class _BoundContext:
    def __init__(self, fields: dict[str, str | None]):
        self._fields = fields
        self._tokens: dict[str, Token] = {}

    def __enter__(self) -> type[LogContext]:
        self._tokens = LogContext._set_many(**self._fields)
        return LogContext

    def __exit__(self, *exc: Any) -> None:
        for name, token in self._tokens.items():
            LogContext._vars[name].reset(token)


def elapsed_ms(started: float) -> float:
    """Milliseconds since a ``time.monotonic()`` reading, to 2 places."""
    return round((time.monotonic() - started) * 1000, 2)


# ---------------------------------------------------------------------------
# Formatter
# ---------------------------------------------------------------------------

_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "taskName",
}


def _json_default(obj: Any) -> str:
    # Decimal, UUID, enums: their str() is the wire form
    if isinstance(obj, datetime):
        return obj.isoformat()
    return str(obj)


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    code = getattr(exc, "code", None)
    if code is not None:
        fields["exc_code"] = code
    for name, value in vars(exc).items():
        if not name.startswith("_") and name != "code":
            fields[f"exc_{name}"] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.get_all(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and key not in payload:
                payload[key] = value

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_json_default)


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

_configured = False
_lock = threading.Lock()


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``freelance_kernel`` namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """Attach one JSON handler to the kernel's root logger.

    Only the first call has an effect until ``reset_logging()``.
    """
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    root = logging.getLogger(_LOGGER_PREFIX)
    root.setLevel(level)
    root.propagate = False

    h = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
    h.setFormatter(StructuredFormatter())
    root.addHandler(h)


def reset_logging() -> None:
    """Undo ``configure_logging()``.  Tests only."""
    global _configured
    with _lock:
        _configured = False
    root = logging.getLogger(_LOGGER_PREFIX)
    root.handlers.clear()
    root.setLevel(logging.WARNING)
