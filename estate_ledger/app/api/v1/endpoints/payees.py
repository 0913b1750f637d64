"""
Worker and Vendor API Endpoints.

Directory management plus the payment ledger for each payee. Both kinds
share one set of handlers, bound to a kind when the router is built.
"""

from typing import Type

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from estate_ledger.app.core.dependencies import get_payment_coordinator
from estate_ledger.app.db.session import get_db
from estate_ledger.app.domain.payments.payment_coordinator import PaymentCoordinator
from estate_ledger.app.models.payee import Payee
from estate_ledger.app.models.payee_enums import PayeeKind
from estate_ledger.app.schemas.payee import (
    PayeeDeletedResponse, PayeeListResponse, PayeeResponse,
    VendorCreate, VendorUpdate, WorkerCreate, WorkerUpdate,
)
from estate_ledger.app.schemas.payment import PaymentCreate, PaymentListResponse, PaymentResponse
from estate_ledger.app.services import ledger_store
from estate_ledger.app.services.payee_directory import delete_payee, get_payee


def build_payee_router(
    kind: PayeeKind,
    prefix: str,
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
) -> APIRouter:
    """Build the CRUD + payments router for one payee kind."""
    router = APIRouter(prefix=prefix, tags=[f"{kind.label}s"])

    @router.get("", response_model=PayeeListResponse)
    async def list_payees(db: AsyncSession = Depends(get_db)):
        """List all payees of this kind, newest first."""
        result = await db.execute(
            select(Payee)
            .where(Payee.kind == kind)
            .order_by(Payee.created_at.desc(), Payee.id.desc())
        )
        payees = result.scalars().all()
        
        return PayeeListResponse(
            payees=[PayeeResponse.model_validate(payee) for payee in payees],
            total=len(payees),
        )

    @router.post("", response_model=PayeeResponse, status_code=status.HTTP_201_CREATED)
    async def create_payee(payee_data: create_schema, db: AsyncSession = Depends(get_db)):
        """
        Create a new payee.
        
        Starts with nothing paid and no last payment date.
        """
        new_payee = Payee(kind=kind, **payee_data.model_dump())
        
        db.add(new_payee)
        await db.commit()
        await db.refresh(new_payee)
        
        return PayeeResponse.model_validate(new_payee)

    @router.get("/{payee_id}", response_model=PayeeResponse)
    async def read_payee(payee_id: int, db: AsyncSession = Depends(get_db)):
        """Get one payee, including its running totals."""
        payee = await get_payee(db, kind, payee_id)
        return PayeeResponse.model_validate(payee)

    @router.put("/{payee_id}", response_model=PayeeResponse)
    async def update_payee(
        payee_id: int,
        payee_data: update_schema,
        db: AsyncSession = Depends(get_db),
    ):
        """
        Update directory fields (only those provided).
        
        Payment totals are not editable here.
        """
        payee = await get_payee(db, kind, payee_id)
        
        update_data = payee_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(payee, field, value)
        
        await db.commit()
        await db.refresh(payee)
        
        return PayeeResponse.model_validate(payee)

    @router.delete("/{payee_id}", response_model=PayeeDeletedResponse)
    async def remove_payee(payee_id: int, db: AsyncSession = Depends(get_db)):
        """Delete a payee and every payment recorded against it."""
        await delete_payee(db, kind, payee_id)
        return PayeeDeletedResponse(
            id=payee_id,
            kind=kind,
            message=f"{kind.label} deleted successfully",
        )

    @router.get("/{payee_id}/payments", response_model=PaymentListResponse)
    async def list_payments(payee_id: int, db: AsyncSession = Depends(get_db)):
        """List payments, latest payment date first."""
        await get_payee(db, kind, payee_id)
        entries = await ledger_store.list_by_payee(db, payee_id)
        
        return PaymentListResponse(
            payee_id=payee_id,
            payments=[PaymentResponse.model_validate(entry) for entry in entries],
            total=len(entries),
        )

    @router.post(
        "/{payee_id}/payments",
        response_model=PaymentResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def record_payment(
        payee_id: int,
        payment: PaymentCreate,
        coordinator: PaymentCoordinator = Depends(get_payment_coordinator),
    ):
        """
        Record a payment.
        
        The ledger entry and the payee's totals are updated atomically.
        """
        entry = await coordinator.record_payment(
            kind,
            payee_id,
            payment.amount,
            payment.payment_date,
            payment.description,
        )
        return PaymentResponse.model_validate(entry)

    return router


worker_router = build_payee_router(PayeeKind.WORKER, "/workers", WorkerCreate, WorkerUpdate)
vendor_router = build_payee_router(PayeeKind.VENDOR, "/vendors", VendorCreate, VendorUpdate)
