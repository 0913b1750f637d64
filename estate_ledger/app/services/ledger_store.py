"""
Ledger store service.

Append and read access to payment entries. Appending is only ever done
inside the payment coordinator's unit of work.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from estate_ledger.app.core.exceptions import PayeeNotFoundError
from estate_ledger.app.domain.payments.validation import (
    validate_amount,
    validate_payee_id,
    validate_payment_date,
)
from estate_ledger.app.models.ledger_entry import LedgerEntry
from estate_ledger.app.models.payee import Payee
from estate_ledger.app.models.payee_enums import PayeeKind


async def append(
    db: AsyncSession,
    kind: PayeeKind,
    payee_id: int,
    amount: Decimal,
    payment_date: date,
    description: Optional[str] = None,
) -> LedgerEntry:
    """
    Insert a new immutable ledger entry.
    
    Args:
        db: Database session (transaction managed by caller)
        kind: Kind the payee must have
        payee_id: Owning payee
        amount: Positive amount, two decimal places
        payment_date: Calendar date of the payment
        description: Optional free text
    
    Returns:
        The flushed entry, with id and created_at loaded
    
    Raises:
        InvalidArgumentError: If amount or date is malformed
        PayeeNotFoundError: If the payee does not exist as ``kind``
    """
    amount = validate_amount(amount)
    payment_date = validate_payment_date(payment_date)
    payee_id = validate_payee_id(payee_id)

    # Lock the payee row before the entry id is assigned, so same-payee
    # writers apply their aggregate updates in entry id order.
    result = await db.execute(
        select(Payee.id)
        .where(Payee.id == payee_id, Payee.kind == kind)
        .with_for_update()
    )
    if result.scalar_one_or_none() is None:
        raise PayeeNotFoundError(kind.label, payee_id)

    entry = LedgerEntry(
        payee_id=payee_id,
        amount=amount,
        payment_date=payment_date,
        description=description,
    )
    db.add(entry)
    try:
        await db.flush()  # Raises IntegrityError if the payee vanished since the check
    except IntegrityError as exc:
        raise PayeeNotFoundError(kind.label, payee_id) from exc

    await db.refresh(entry)
    return entry


async def list_by_payee(db: AsyncSession, payee_id: int) -> List[LedgerEntry]:
    """
    Return a payee's entries, latest payment date first.
    
    Entries sharing a payment date come most recently inserted first.
    An unknown payee yields an empty list.
    """
    result = await db.execute(
        select(LedgerEntry)
        .where(LedgerEntry.payee_id == payee_id)
        .order_by(LedgerEntry.payment_date.desc(), LedgerEntry.id.desc())
    )
    return list(result.scalars().all())


async def delete_all_for_payee(db: AsyncSession, payee_id: int) -> int:
    """
    Remove every entry owned by a payee (part of payee deletion only).
    
    Returns:
        Number of entries removed; 0 when there were none
    """
    result = await db.execute(
        delete(LedgerEntry)
        .where(LedgerEntry.payee_id == payee_id)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount or 0
