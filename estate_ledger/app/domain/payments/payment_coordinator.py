"""
Payment Coordinator (Domain Logic).

The single entry point that records a payment. A ledger entry and the
matching update to the payee's running totals are written in one
transaction: both land or neither does.
"""

import logging
from datetime import date
from typing import Any, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from estate_ledger.app.core.exceptions import (
    AppException,
    StorageFaultError,
    TransactionFailedError,
)
from estate_ledger.app.domain.payments.validation import (
    validate_amount,
    validate_kind,
    validate_payee_id,
    validate_payment_date,
)
from estate_ledger.app.models.ledger_entry import LedgerEntry
from estate_ledger.app.models.payee_enums import PayeeKind
from estate_ledger.app.services import ledger_store, payee_aggregate

logger = logging.getLogger("estate_ledger.payments")


class PaymentCoordinator:
    """
    Records payments for workers and vendors alike.
    
    Each call opens its own session from the injected factory, so calls for
    different payees never share a lock in-process; the store's own
    transaction manager is the only thing they can wait on.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def record_payment(
        self,
        kind: Union[PayeeKind, str],
        payee_id: Any,
        amount: Any,
        payment_date: Union[date, str],
        description: Optional[str] = None,
    ) -> LedgerEntry:
        """
        Record a payment against a payee.
        
        Flow:
        1. Validate inputs (no storage access on failure)
        2. Begin transaction
        3. Append ledger entry, then apply it to the payee aggregate
        4. Commit, or roll back everything
        
        Args:
            kind: WORKER or VENDOR
            payee_id: Id of the worker/vendor being paid
            amount: Positive amount with at most two decimal places
            payment_date: Date object or ISO-8601 string
            description: Optional free text
            
        Returns:
            The created LedgerEntry
            
        Raises:
            InvalidArgumentError: Malformed input, nothing was attempted
            TransactionFailedError: Rolled back; ``cause`` is a
                PayeeNotFoundError or StorageFaultError
        """
        # 1. Validate
        kind = validate_kind(kind)
        payee_id = validate_payee_id(payee_id)
        amount = validate_amount(amount)
        payment_date = validate_payment_date(payment_date)

        # 2-4. Atomic unit; session.begin() rolls back on any exit path,
        # cancellation included.
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    entry = await ledger_store.append(
                        session, kind, payee_id, amount, payment_date, description
                    )
                    await payee_aggregate.apply_payment(
                        session, kind, payee_id, amount, payment_date
                    )
        except AppException as exc:
            logger.warning(
                "Payment rolled back: kind=%s payee_id=%s amount=%s cause=%s",
                kind.value, payee_id, amount, exc.error_code,
            )
            raise TransactionFailedError(exc) from exc
        except (SQLAlchemyError, OSError) as exc:
            logger.error(
                "Payment rolled back on storage error: kind=%s payee_id=%s amount=%s error=%s",
                kind.value, payee_id, amount, type(exc).__name__,
            )
            fault = StorageFaultError(f"Storage error: {type(exc).__name__}")
            raise TransactionFailedError(fault) from exc

        logger.info(
            "Payment recorded: entry_id=%s kind=%s payee_id=%s amount=%s date=%s",
            entry.id, kind.value, payee_id, amount, payment_date.isoformat(),
        )
        return entry
