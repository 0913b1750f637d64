"""
Service dependencies for FastAPI.

This module wires domain services to the request-scoped store handles.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import async_sessionmaker

from estate_ledger.app.db.session import get_session_factory
from estate_ledger.app.domain.payments.payment_coordinator import PaymentCoordinator


async def get_payment_coordinator(
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> PaymentCoordinator:
    """
    FastAPI dependency for the payment coordinator.
    
    The coordinator receives the session factory rather than a session
    because it runs its own transaction.
    """
    return PaymentCoordinator(session_factory)
