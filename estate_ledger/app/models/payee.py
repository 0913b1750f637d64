"""
Payee database model.

Workers and vendors share one table, told apart by ``kind``.
"""

from sqlalchemy import Column, Integer, String, Date, DateTime, Enum, Numeric, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from estate_ledger.app.db.session import Base
from estate_ledger.app.models.payee_enums import PayeeKind


class Payee(Base):
    """
    Payee model.
    
    A worker or vendor who receives payments on a construction project.
    ``total_paid`` and ``last_payment_date`` are a denormalized view of the
    payee's ledger; only the payment coordinator writes them.
    """
    __tablename__ = "payees"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    kind = Column(Enum(PayeeKind), nullable=False, index=True)
    
    # Directory details
    name = Column(String(255), nullable=False)
    role = Column(String(100), nullable=True)  # Workers
    category = Column(String(100), nullable=True)  # Vendors
    contact = Column(String(255), nullable=True)
    hourly_rate = Column(Numeric(10, 2), nullable=True)  # Workers
    rating = Column(Integer, nullable=True)  # Vendors
    
    # Running aggregate
    total_paid = Column(Numeric(15, 2), nullable=False, default=0, server_default=text("0"))
    last_payment_date = Column(Date, nullable=True)
    
    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    payments = relationship(
        "LedgerEntry",
        back_populates="payee",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    
    def __repr__(self):
        return f"<Payee(id={self.id}, kind='{self.kind.value}', name='{self.name}', total_paid={self.total_paid})>"
