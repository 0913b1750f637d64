"""
Payee aggregate service.

Maintains the running ``total_paid`` / ``last_payment_date`` pair on a payee.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession

from estate_ledger.app.core.exceptions import PayeeNotFoundError
from estate_ledger.app.models.payee import Payee
from estate_ledger.app.models.payee_enums import PayeeKind


async def apply_payment(
    db: AsyncSession,
    kind: PayeeKind,
    payee_id: int,
    amount: Decimal,
    payment_date: date,
) -> None:
    """
    Add a payment to the payee's running totals.
    
    The addition happens in a single UPDATE so concurrent payments to the
    same payee cannot lose one another's amount. ``last_payment_date`` is
    overwritten unconditionally: the last applied payment wins, even when
    its date is earlier than the stored one.
    
    Args:
        db: Database session (transaction managed by caller)
        kind: Kind the payee must have
        payee_id: Payee to update
        amount: Amount to add
        payment_date: New last payment date
    
    Raises:
        PayeeNotFoundError: If no payee of ``kind`` has this id
    """
    result = await db.execute(
        update(Payee)
        .where(Payee.id == payee_id, Payee.kind == kind)
        .values(
            total_paid=func.coalesce(Payee.total_paid, 0) + amount,
            last_payment_date=payment_date,
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise PayeeNotFoundError(kind.label, payee_id)
