"""
Payment Pydantic schemas.

Defines request and response models for ledger entries.
"""

from pydantic import BaseModel, Field, PlainSerializer
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Optional, List, Union

# Amounts travel as JSON numbers, not strings
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class PaymentCreate(BaseModel):
    """
    Schema for recording a payment against a worker or vendor.
    
    Amount and date are range-checked by the payment coordinator, so a bad
    value is reported as ERR_INVALID_ARGUMENT rather than a schema error.
    """
    amount: Union[Decimal, str] = Field(..., description="Amount paid, at most two decimal places")
    payment_date: Union[date, str] = Field(..., description="ISO-8601 calendar date of the payment")
    description: Optional[str] = Field(None, max_length=2000)


class PaymentResponse(BaseModel):
    """Schema for a recorded ledger entry."""
    id: int
    payee_id: int
    amount: Money
    payment_date: date
    description: Optional[str]
    created_at: datetime
    
    class Config:
        from_attributes = True


class PaymentListResponse(BaseModel):
    """Schema for the ledger of one payee."""
    payee_id: int
    payments: List[PaymentResponse]
    total: int
