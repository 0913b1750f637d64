"""
Ledger Entry database model.

Immutable record of a single payment made to a payee.
"""

from sqlalchemy import Column, Integer, ForeignKey, Date, DateTime, Numeric, Text, CheckConstraint, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from estate_ledger.app.db.session import Base


class LedgerEntry(Base):
    """
    Ledger Entry model.
    
    Append-only: corrections are recorded as new entries.
    NO updates allowed. Entries are removed only together with their payee.
    """
    __tablename__ = "payment_entries"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_payment_entries_amount_positive"),
        Index("ix_payment_entries_payee_date", "payee_id", "payment_date"),
    )
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    
    # Linkage
    payee_id = Column(Integer, ForeignKey("payees.id", ondelete="CASCADE"), nullable=False)
    
    # Financials
    amount = Column(Numeric(10, 2), nullable=False)
    payment_date = Column(Date, nullable=False)
    description = Column(Text, nullable=True)
    
    # Timestamps (Immutable - no updated_at)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    payee = relationship("Payee", back_populates="payments")
    
    def __repr__(self):
        return f"<LedgerEntry(id={self.id}, payee_id={self.payee_id}, amount={self.amount}, date={self.payment_date})>"
