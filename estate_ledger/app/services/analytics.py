"""
Analytics Service.

Handles data aggregation for dashboards and ledger reconciliation.
Focused on READ-ONLY operations.
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from estate_ledger.app.core.config import settings
from estate_ledger.app.models.ledger_entry import LedgerEntry
from estate_ledger.app.models.payee import Payee
from estate_ledger.app.models.payee_enums import PayeeKind
from estate_ledger.app.schemas.analytics import (
    AnalyticsSummary, PayeeMismatch, ReconciliationReport
)

ZERO = Decimal("0.00")


class AnalyticsService:

    @staticmethod
    async def get_summary(db: AsyncSession) -> AnalyticsSummary:
        """Counts and payment totals across all payees."""
        
        # 1. Payee counts and aggregate totals per kind
        per_kind = await db.execute(
            select(
                Payee.kind,
                func.count(Payee.id).label("payees"),
                func.coalesce(func.sum(Payee.total_paid), 0).label("total_paid"),
            ).group_by(Payee.kind)
        )
        counts = {kind: 0 for kind in PayeeKind}
        totals = {kind: ZERO for kind in PayeeKind}
        for row in per_kind:
            counts[row.kind] = row.payees
            totals[row.kind] = Decimal(row.total_paid or 0).quantize(ZERO)
        
        # 2. Ledger size
        entries = (await db.execute(select(func.count(LedgerEntry.id)))).scalar() or 0
        
        return AnalyticsSummary(
            workers=counts[PayeeKind.WORKER],
            vendors=counts[PayeeKind.VENDOR],
            payment_entries=entries,
            total_worker_payments=totals[PayeeKind.WORKER],
            total_vendor_payments=totals[PayeeKind.VENDOR],
            currency=settings.currency,
        )

    @staticmethod
    async def get_reconciliation(db: AsyncSession) -> ReconciliationReport:
        """
        Compare every payee's running aggregate with its ledger.
        
        ``total_paid`` must equal the sum of the payee's entries, and
        ``last_payment_date`` the date of its most recently inserted entry.
        """
        ledger_totals = (
            select(
                LedgerEntry.payee_id.label("payee_id"),
                func.sum(LedgerEntry.amount).label("ledger_total"),
                func.max(LedgerEntry.id).label("last_entry_id"),
            )
            .group_by(LedgerEntry.payee_id)
            .subquery()
        )
        last_entry = LedgerEntry.__table__.alias("last_entry")
        
        stmt = (
            select(
                Payee.id,
                Payee.kind,
                Payee.total_paid,
                Payee.last_payment_date,
                ledger_totals.c.ledger_total,
                last_entry.c.payment_date.label("ledger_last_payment_date"),
            )
            .outerjoin(ledger_totals, ledger_totals.c.payee_id == Payee.id)
            .outerjoin(last_entry, last_entry.c.id == ledger_totals.c.last_entry_id)
            .order_by(Payee.id)
        )
        rows = (await db.execute(stmt)).all()
        
        mismatches = []
        for row in rows:
            total_paid = Decimal(row.total_paid or 0).quantize(ZERO)
            ledger_total = Decimal(row.ledger_total or 0).quantize(ZERO)
            if total_paid != ledger_total or row.last_payment_date != row.ledger_last_payment_date:
                mismatches.append(PayeeMismatch(
                    payee_id=row.id,
                    kind=row.kind,
                    total_paid=total_paid,
                    ledger_total=ledger_total,
                    last_payment_date=row.last_payment_date,
                    ledger_last_payment_date=row.ledger_last_payment_date,
                ))
        
        return ReconciliationReport(
            checked=len(rows),
            mismatched=len(mismatches),
            mismatches=mismatches,
        )
