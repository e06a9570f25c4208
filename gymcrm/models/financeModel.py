"""
Invoice and transaction models
"""
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional
from sqlalchemy import (
    BigInteger, Date, ForeignKey, Numeric, String, Text, JSON, CheckConstraint, Index
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import TIMESTAMP

from gymcrm.db.postgresql import Base, BigIntPK

INVOICE_STATUSES = ("Paid", "Pending", "Overdue")
TRANSACTION_TYPES = (
    "MEMBERSHIP_JOINING", "MEMBERSHIP_RENEWAL", "INVOICE_PAYMENT", "PERSONAL_TRAINING", "OTHER",
)
PAYMENT_MODES = ("cash", "card", "upi", "bank_transfer", "other")
TRANSACTION_STATUSES = ("PENDING", "SUCCESS", "FAILED", "CANCELLED")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Invoice(Base):
    """Invoice with an embedded customer snapshot and line items"""

    __tablename__ = "invoices"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    gym_id: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("gyms.id"))
    customer_id: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("customers.id", ondelete="SET NULL"))
    invoice_number: Mapped[str] = mapped_column(String(40), nullable=False)
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(200), nullable=False)
    customer_phone: Mapped[Optional[str]] = mapped_column(String(32))
    customer_address: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(10), nullable=False, default="Pending")
    items: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    tax: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    discount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    due_date: Mapped[Optional[date]] = mapped_column(Date)
    issue_date: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now)

    __table_args__ = (
        CheckConstraint("status IN ('Paid','Pending','Overdue')", name="ck_invoice_status"),
        Index("idx_invoices_user_number", "user_id", "invoice_number", unique=True),
    )


class Transaction(Base):
    """Money received from a customer"""

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    gym_id: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("gyms.id"))
    customer_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False)
    invoice_id: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("invoices.id", ondelete="SET NULL"))
    transaction_type: Mapped[str] = mapped_column(String(30), nullable=False)
    transaction_date: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    membership_type: Mapped[str] = mapped_column(String(50), nullable=False, default="none")
    payment_mode: Mapped[str] = mapped_column(String(20), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(12), nullable=False, default="SUCCESS")
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now)

    __table_args__ = (
        CheckConstraint(
            "payment_mode IN ('cash','card','upi','bank_transfer','other')", name="ck_transaction_payment_mode"
        ),
        CheckConstraint(
            "status IN ('PENDING','SUCCESS','FAILED','CANCELLED')", name="ck_transaction_status"
        ),
        Index("idx_transactions_customer_date", "customer_id", "transaction_date"),
        Index("idx_transactions_gym_date", "gym_id", "transaction_date"),
        Index("idx_transactions_type", "transaction_type"),
    )
