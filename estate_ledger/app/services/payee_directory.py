"""
Payee directory service.

Lookup and removal of workers/vendors shared by the API endpoints.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from estate_ledger.app.core.exceptions import PayeeNotFoundError
from estate_ledger.app.domain.payments.validation import validate_payee_id
from estate_ledger.app.models.payee import Payee
from estate_ledger.app.models.payee_enums import PayeeKind
from estate_ledger.app.services import ledger_store


async def get_payee(db: AsyncSession, kind: PayeeKind, payee_id: int) -> Payee:
    """
    Fetch a payee of the given kind.
    
    Raises:
        InvalidArgumentError: If the id is not a storable positive integer
        PayeeNotFoundError: If absent, or if the id belongs to the other kind
    """
    payee_id = validate_payee_id(payee_id)
    result = await db.execute(
        select(Payee).where(Payee.id == payee_id, Payee.kind == kind)
    )
    payee = result.scalar_one_or_none()
    if payee is None:
        raise PayeeNotFoundError(kind.label, payee_id)
    return payee


async def delete_payee(db: AsyncSession, kind: PayeeKind, payee_id: int) -> int:
    """
    Delete a payee together with its ledger, in one transaction.
    
    The FK is also ``ON DELETE CASCADE``; clearing the ledger explicitly
    keeps the guarantee on stores that do not enforce foreign keys.
    
    Returns:
        Number of ledger entries removed
    """
    await get_payee(db, kind, payee_id)

    removed = await ledger_store.delete_all_for_payee(db, payee_id)
    await db.execute(
        delete(Payee)
        .where(Payee.id == payee_id, Payee.kind == kind)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    return removed
