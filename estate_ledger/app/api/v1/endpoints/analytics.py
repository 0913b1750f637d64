"""
Analytics API Endpoints.

Read-only dashboard data and ledger reconciliation.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from estate_ledger.app.db.session import get_db
from estate_ledger.app.services.analytics import AnalyticsService
from estate_ledger.app.schemas.analytics import AnalyticsSummary, ReconciliationReport

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("", response_model=AnalyticsSummary)
async def get_analytics_summary(db: AsyncSession = Depends(get_db)):
    """Get payee counts and payment totals."""
    return await AnalyticsService.get_summary(db)


@router.get("/reconciliation", response_model=ReconciliationReport)
async def get_reconciliation(db: AsyncSession = Depends(get_db)):
    """Check every payee's running totals against its ledger."""
    return await AnalyticsService.get_reconciliation(db)
