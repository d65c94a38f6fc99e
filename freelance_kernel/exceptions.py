"""
Typed Exception Hierarchy for the Freelance Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the ledger must react to failures programmatically: a rejected
payment is retried with a different job, an unauthorized deposit is shown
to the user, a store fault is alerted on. Parsing message strings for that
is fragile, so:

  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable, API-safe)
  3. Every exception has a CATEGORY (unauthorized / not found / rejected /
     invalid input / fault) that the outer layer maps to a stable status
  4. Exceptions carry structured DATA (not just a message string)

Example:
    try:
        orchestrator.deposit(caller, caller.id, amount)
    except DepositCapExceededError as e:
        api_response(status=STATUS_BY_CATEGORY[e.category], code=e.code, cap=e.cap)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    MarketplaceError (base)
    |
    +-- UnauthorizedError
    |
    +-- NotFoundError
    |   +-- ProfileNotFoundError
    |   +-- ContractNotFoundError
    |   +-- EmptyResultError
    |   +-- NoDataInRangeError
    |
    +-- ValidationError
    |   +-- InvalidAmountError
    |   +-- NegativeAmountError
    |   +-- InvalidDateRangeError
    |   +-- InvalidLimitError
    |
    +-- BusinessRuleError
    |   +-- InvalidJobError
    |   +-- InsufficientFundsError
    |   +-- DepositCapExceededError
    |
    +-- ImmutabilityViolationError
    |
    +-- TransactionFailureError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category      | Code                  | When Raised
--------------|-----------------------|--------------------------------------------
unauthorized  | UNAUTHORIZED          | Caller lacks role or ownership
not_found     | PROFILE_NOT_FOUND     | Profile id does not exist
              | CONTRACT_NOT_FOUND    | Contract absent or not the caller's
              | EMPTY_RESULT          | Listing matched nothing
              | NO_DATA_IN_RANGE      | Report window matched no paid job
invalid       | INVALID_AMOUNT        | Amount does not parse as a finite number
              | NEGATIVE_AMOUNT       | Amount below zero
              | INVALID_DATE_RANGE    | start after end
              | INVALID_LIMIT         | limit below one
rejected      | INVALID_JOB           | Job missing, paid, inactive or not caller's
              | INSUFFICIENT_FUNDS    | Balance below job price
              | DEPOSIT_CAP_EXCEEDED  | Deposit above the outstanding-work cap
fault         | IMMUTABILITY_VIOLATION| Write to a paid job's settled fields
              | TRANSACTION_FAILURE   | Store error; transaction rolled back

===============================================================================
"""

from decimal import Decimal
from enum import Enum


class ErrorCategory(str, Enum):
    """Coarse classification a caller can branch on."""

    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    REJECTED = "rejected"
    FAULT = "fault"


# Stable status per category for the external request layer.
STATUS_BY_CATEGORY: dict[ErrorCategory, int] = {
    ErrorCategory.UNAUTHORIZED: 401,
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.REJECTED: 409,
    ErrorCategory.INVALID: 422,
    ErrorCategory.FAULT: 500,
}


class MarketplaceError(Exception):
    """
    Base exception for all freelance kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification and a `category` for status mapping.
    """

    code: str = "MARKETPLACE_ERROR"
    category: ErrorCategory = ErrorCategory.FAULT

    @property
    def status(self) -> int:
        """Stable status for this error's category."""
        return STATUS_BY_CATEGORY[self.category]


# Authorization


class UnauthorizedError(MarketplaceError):
    """Caller lacks the role or ownership the operation requires."""

    code: str = "UNAUTHORIZED"
    category: ErrorCategory = ErrorCategory.UNAUTHORIZED

    def __init__(self, profile_id: int | None, action: str):
        self.profile_id = profile_id
        self.action = action
        super().__init__(f"Profile {profile_id} is not authorized to {action}")


# Lookups


class NotFoundError(MarketplaceError):
    """Base exception for lookups that matched nothing."""

    code: str = "NOT_FOUND"
    category: ErrorCategory = ErrorCategory.NOT_FOUND


class ProfileNotFoundError(NotFoundError):
    """Profile with given ID was not found."""

    code: str = "PROFILE_NOT_FOUND"

    def __init__(self, profile_id: int):
        self.profile_id = profile_id
        super().__init__(f"Profile not found: {profile_id}")


class ContractNotFoundError(NotFoundError):
    """Contract absent, or not visible to the requesting profile."""

    code: str = "CONTRACT_NOT_FOUND"

    def __init__(self, contract_id: int, profile_id: int):
        self.contract_id = contract_id
        self.profile_id = profile_id
        super().__init__(
            f"Contract with id {contract_id} not found for profile {profile_id}"
        )


class EmptyResultError(NotFoundError):
    """A listing for the profile returned no rows."""

    code: str = "EMPTY_RESULT"

    def __init__(self, resource: str, profile_id: int):
        self.resource = resource
        self.profile_id = profile_id
        super().__init__(f"No {resource} found for profile {profile_id}")


class NoDataInRangeError(NotFoundError):
    """Report window contains no qualifying paid job."""

    code: str = "NO_DATA_IN_RANGE"

    def __init__(self, start: str, end: str):
        self.start = start
        self.end = end
        super().__init__(f"No data found for this period {start} - {end}")


# Input validation


class ValidationError(MarketplaceError):
    """Base exception for rejected input parameters."""

    code: str = "VALIDATION_ERROR"
    category: ErrorCategory = ErrorCategory.INVALID


class InvalidAmountError(ValidationError):
    """Amount does not parse as a finite number."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, raw_value: str):
        self.raw_value = raw_value
        super().__init__(f"Incorrect value for amount: {raw_value!r}")


class NegativeAmountError(ValidationError):
    """Amount is below zero."""

    code: str = "NEGATIVE_AMOUNT"

    def __init__(self, amount: Decimal):
        self.amount = amount
        super().__init__(f"Cannot deposit negative amount {amount}")


class InvalidDateRangeError(ValidationError):
    """Report window start lies after its end."""

    code: str = "INVALID_DATE_RANGE"

    def __init__(self, start: str, end: str):
        self.start = start
        self.end = end
        super().__init__(f"Invalid date range: start {start} is after end {end}")


class InvalidLimitError(ValidationError):
    """Row limit for a ranked report is not a positive integer."""

    code: str = "INVALID_LIMIT"

    def __init__(self, limit: object):
        self.limit = limit
        super().__init__(f"Limit must be a positive integer, got {limit!r}")


# Business rules


class BusinessRuleError(MarketplaceError):
    """Base exception for operations refused by a ledger rule."""

    code: str = "BUSINESS_RULE_ERROR"
    category: ErrorCategory = ErrorCategory.REJECTED


class InvalidJobError(BusinessRuleError):
    """
    Job cannot be paid by this caller.

    Covers a missing job, an already paid job, a contract that is not
    in progress, and a caller who is not the contract's client.
    """

    code: str = "INVALID_JOB"

    def __init__(self, job_id: int, profile_id: int):
        self.job_id = job_id
        self.profile_id = profile_id
        super().__init__(f"Job {job_id} is not valid to get paid by profile {profile_id}")


class InsufficientFundsError(BusinessRuleError):
    """Client balance is below the job price."""

    code: str = "INSUFFICIENT_FUNDS"

    def __init__(self, profile_id: int, balance: Decimal, required: Decimal):
        self.profile_id = profile_id
        self.balance = balance
        self.required = required
        super().__init__(
            f"Balance {balance} of profile {profile_id} is not enough "
            f"for a payment of {required}"
        )


class DepositCapExceededError(BusinessRuleError):
    """Deposit exceeds the share of outstanding work a client may pre-fund."""

    code: str = "DEPOSIT_CAP_EXCEEDED"

    def __init__(
        self,
        profile_id: int,
        amount: Decimal,
        cap: Decimal,
        outstanding: Decimal,
    ):
        self.profile_id = profile_id
        self.amount = amount
        self.cap = cap
        self.outstanding = outstanding
        super().__init__(
            f"Deposit of {amount} exceeds the allowed maximum. Max amount: {cap}"
        )


# Persistence


class ImmutabilityViolationError(MarketplaceError):
    """Attempted to change the settled fields of a paid job."""

    code: str = "IMMUTABILITY_VIOLATION"
    category: ErrorCategory = ErrorCategory.FAULT

    def __init__(self, entity_type: str, entity_id: str, reason: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(
            f"Immutability violation on {entity_type} {entity_id}: {reason}"
        )


class TransactionFailureError(MarketplaceError):
    """
    Store-level fault inside a ledger transaction.

    The transaction has been rolled back; the original store exception is
    chained as __cause__.
    """

    code: str = "TRANSACTION_FAILURE"
    category: ErrorCategory = ErrorCategory.FAULT

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Transaction for {operation} failed: {reason}")
