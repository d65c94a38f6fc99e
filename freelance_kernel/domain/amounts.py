"""
Amount parsing and the deposit cap rule.

The request layer forwards the raw amount; this module decides whether it
is a usable non-negative Decimal.  Floats are converted through their
string form so 0.1 stays 0.1.  Balances are stored in cents, so finer
amounts are refused rather than silently rounded.
"""

from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import Any

from freelance_kernel.exceptions import InvalidAmountError, NegativeAmountError

CENT = Decimal("0.01")


def parse_amount(raw: Any) -> Decimal:
    """
    Parse a deposit amount.

    Raises:
        InvalidAmountError: raw is not a finite number with at most two
            decimal places (bools, None, NaN, infinities and non-numeric
            strings included).
        NegativeAmountError: raw parses below zero.
    """
    if isinstance(raw, bool) or raw is None:
        raise InvalidAmountError(str(raw))

    if isinstance(raw, Decimal):
        amount = raw
    elif isinstance(raw, (int, float)):
        amount = Decimal(str(raw))
    elif isinstance(raw, str):
        try:
            amount = Decimal(raw.strip())
        except InvalidOperation:
            raise InvalidAmountError(raw) from None
    else:
        raise InvalidAmountError(repr(raw))

    if not amount.is_finite():
        raise InvalidAmountError(str(raw))
    if amount < 0:
        raise NegativeAmountError(amount)
    if amount != amount.quantize(CENT):
        raise InvalidAmountError(str(raw))
    return amount


def deposit_cap(outstanding: Decimal, ratio: Decimal) -> Decimal:
    """Largest deposit allowed against ``outstanding`` unpaid work.

    Rounded down to the cent so an accepted deposit never exceeds
    ``ratio * outstanding``.
    """
    return (outstanding * ratio).quantize(CENT, rounding=ROUND_DOWN)
