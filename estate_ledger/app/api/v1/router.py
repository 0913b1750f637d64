"""
API v1 Router.

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter
from estate_ledger.app.api.v1.endpoints import analytics, payees

router = APIRouter()

# Worker and vendor directories with their payment ledgers
router.include_router(payees.worker_router)
router.include_router(payees.vendor_router)

# Dashboards
router.include_router(analytics.router)
