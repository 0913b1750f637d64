"""
Input checks for payment requests.

Every check runs before a session is opened and raises
``InvalidArgumentError`` on the first bad field.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Union

from estate_ledger.app.core.exceptions import InvalidArgumentError
from estate_ledger.app.models.payee_enums import PayeeKind

CENT = Decimal("0.01")
# payment_entries.amount is Numeric(10, 2)
MAX_AMOUNT = Decimal("99999999.99")
# payees.id is a 32-bit Integer primary key
MAX_PAYEE_ID = 2**31 - 1


def validate_kind(kind: Union[PayeeKind, str]) -> PayeeKind:
    if isinstance(kind, PayeeKind):
        return kind
    try:
        return PayeeKind(str(kind).upper())
    except ValueError:
        raise InvalidArgumentError("kind", f"Unknown payee kind: {kind!r}")


def validate_payee_id(payee_id: Any) -> int:
    """Accept a positive integer, or a string of digits."""
    if isinstance(payee_id, bool):
        raise InvalidArgumentError("payee_id", "Payee id must be an integer")
    if isinstance(payee_id, str) and payee_id.strip().isdigit():
        payee_id = int(payee_id.strip())
    if not isinstance(payee_id, int) or payee_id <= 0:
        raise InvalidArgumentError("payee_id", f"Invalid payee id: {payee_id!r}")
    if payee_id > MAX_PAYEE_ID:
        raise InvalidArgumentError("payee_id", f"Payee id exceeds {MAX_PAYEE_ID}")
    return payee_id


def validate_amount(amount: Any) -> Decimal:
    """
    Normalize a payment amount to a two-place Decimal.
    
    Floats go through ``str`` so 250.5 becomes Decimal("250.5"), not its
    binary expansion. More than two fractional digits is rejected rather
    than rounded.
    """
    if isinstance(amount, bool) or amount is None:
        raise InvalidArgumentError("amount", "Amount must be a number")
    try:
        value = Decimal(str(amount)) if isinstance(amount, float) else Decimal(amount)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidArgumentError("amount", f"Amount is not a number: {amount!r}")

    if not value.is_finite():
        raise InvalidArgumentError("amount", "Amount must be finite")
    if value <= 0:
        raise InvalidArgumentError("amount", "Amount must be greater than zero")
    if value > MAX_AMOUNT:
        raise InvalidArgumentError("amount", f"Amount exceeds {MAX_AMOUNT}")
    if value != value.quantize(CENT):
        raise InvalidArgumentError("amount", "Amount supports at most two decimal places")
    return value.quantize(CENT)


def validate_payment_date(payment_date: Any) -> date:
    if isinstance(payment_date, datetime):
        return payment_date.date()
    if isinstance(payment_date, date):
        return payment_date
    if isinstance(payment_date, str):
        try:
            return date.fromisoformat(payment_date.strip())
        except ValueError:
            pass
    raise InvalidArgumentError("payment_date", f"Invalid calendar date: {payment_date!r}")
