"""
Analytics Schemas.
"""

from pydantic import BaseModel
from datetime import date
from typing import List, Optional

from estate_ledger.app.models.payee_enums import PayeeKind
from estate_ledger.app.schemas.payment import Money


class AnalyticsSummary(BaseModel):
    """Dashboard rollup across payees and the ledger."""
    workers: int
    vendors: int
    payment_entries: int
    total_worker_payments: Money
    total_vendor_payments: Money
    currency: str


class PayeeMismatch(BaseModel):
    """A payee whose running aggregate disagrees with its ledger."""
    payee_id: int
    kind: PayeeKind
    total_paid: Money
    ledger_total: Money
    last_payment_date: Optional[date]
    ledger_last_payment_date: Optional[date]


class ReconciliationReport(BaseModel):
    """Result of checking every payee aggregate against the ledger."""
    checked: int
    mismatched: int
    mismatches: List[PayeeMismatch]
