"""
ORM-Level Immutability Enforcement for settled jobs.

A paid job is a settled financial record: the amount that moved, the fact
that it moved and when it moved must never change afterwards, and the row
must never disappear.  The ledger service only ever writes a job once
(Unpaid -> Paid); these listeners stop any other code path from touching
it through the ORM.

    session.flush()
         |
         v
    [before_update] --> _check_job_immutability() --> ImmutabilityViolationError
    [before_delete] --> _check_job_delete() ----------^

Profiles are never deleted within the kernel either; their balances stay
mutable (that is the ledger's job).

Usage:
    from freelance_kernel.db.immutability import register_immutability_listeners
    register_immutability_listeners()  # Called once at startup
"""

from sqlalchemy import event, inspect
from sqlalchemy.orm.attributes import get_history

from freelance_kernel.exceptions import ImmutabilityViolationError
from freelance_kernel.logging_config import get_logger

logger = get_logger("db.immutability")

_SETTLED_FIELDS = ("price", "paid", "payment_date", "contract_id")


def _was_paid_before_flush(target) -> bool:
    paid_history = get_history(target, "paid")
    if paid_history.deleted:
        # paid is changing; the old value tells us if it was settled
        return paid_history.deleted[0] is not None
    if paid_history.added:
        # None -> True is the payment itself
        return False
    return target.paid is not None


def _check_job_immutability(mapper, connection, target):
    """Block changes to settled fields of an already paid job."""
    if not _was_paid_before_flush(target):
        return

    insp = inspect(target)
    for field in _SETTLED_FIELDS:
        if insp.attrs[field].history.has_changes():
            logger.error(
                "immutability_violation_blocked",
                extra={
                    "entity_type": "Job",
                    "entity_id": str(target.id),
                    "operation": "UPDATE",
                    "field": field,
                },
            )
            raise ImmutabilityViolationError(
                entity_type="Job",
                entity_id=str(target.id),
                reason=f"Cannot modify field '{field}' on a paid job",
            )


def _check_job_delete(mapper, connection, target):
    """Block deletion of a paid job."""
    if _was_paid_before_flush(target) or target.paid is not None:
        raise ImmutabilityViolationError(
            entity_type="Job",
            entity_id=str(target.id),
            reason="Cannot delete a paid job",
        )


def _check_profile_delete(mapper, connection, target):
    """Block deletion of any profile."""
    raise ImmutabilityViolationError(
        entity_type="Profile",
        entity_id=str(target.id),
        reason="Profiles are never deleted",
    )


def register_immutability_listeners():
    """
    Register the immutability listeners (idempotent).

    Call after models are imported and before any write happens.
    """
    from freelance_kernel.models.job import Job
    from freelance_kernel.models.profile import Profile

    for target, name, fn in _listeners(Job, Profile):
        if not event.contains(target, name, fn):
            event.listen(target, name, fn)


def unregister_immutability_listeners():
    """
    Remove the immutability listeners.

    WARNING: Only use this in tests that need to bypass the rules.
    """
    from freelance_kernel.models.job import Job
    from freelance_kernel.models.profile import Profile

    for target, name, fn in _listeners(Job, Profile):
        if event.contains(target, name, fn):
            event.remove(target, name, fn)


def _listeners(job_cls, profile_cls):
    return (
        (job_cls, "before_update", _check_job_immutability),
        (job_cls, "before_delete", _check_job_delete),
        (profile_cls, "before_delete", _check_profile_delete),
    )
