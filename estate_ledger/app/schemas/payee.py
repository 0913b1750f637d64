"""
Payee Pydantic schemas.

Defines request and response models for worker and vendor management.
Create/update schemas deliberately omit ``total_paid`` and
``last_payment_date``; those only change when a payment is recorded.
"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List

from estate_ledger.app.models.payee_enums import PayeeKind
from estate_ledger.app.schemas.payment import Money


class WorkerCreate(BaseModel):
    """Schema for creating a new worker."""
    name: str = Field(..., min_length=1, max_length=255, description="Worker name")
    role: Optional[str] = Field(None, max_length=100, description="Trade or site role")
    hourly_rate: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    contact: Optional[str] = Field(None, max_length=255)


class WorkerUpdate(BaseModel):
    """Schema for updating an existing worker."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[str] = Field(None, max_length=100)
    hourly_rate: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    contact: Optional[str] = Field(None, max_length=255)


class VendorCreate(BaseModel):
    """Schema for creating a new vendor."""
    name: str = Field(..., min_length=1, max_length=255, description="Vendor name")
    category: Optional[str] = Field(None, max_length=100, description="Supply category")
    contact: Optional[str] = Field(None, max_length=255)
    rating: int = Field(5, ge=1, le=5)


class VendorUpdate(BaseModel):
    """Schema for updating an existing vendor."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, max_length=100)
    contact: Optional[str] = Field(None, max_length=255)
    rating: Optional[int] = Field(None, ge=1, le=5)


class PayeeResponse(BaseModel):
    """Schema for worker/vendor response."""
    id: int
    kind: PayeeKind
    name: str
    role: Optional[str] = None
    category: Optional[str] = None
    contact: Optional[str] = None
    hourly_rate: Optional[Money] = None
    rating: Optional[int] = None
    total_paid: Money
    last_payment_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class PayeeListResponse(BaseModel):
    """Schema for payee list."""
    payees: List[PayeeResponse]
    total: int


class PayeeDeletedResponse(BaseModel):
    id: int
    kind: PayeeKind
    message: str
