"""
Customer (gym member) model with the current membership period
"""
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional
from sqlalchemy import BigInteger, Date, ForeignKey, Integer, Numeric, String, Text, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import TIMESTAMP

from gymcrm.db.postgresql import Base, BigIntPK


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Customer(Base):
    """End member of a tenant, owned by the CRM account that created it"""

    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    gym_id: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("gyms.id"))
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(32))
    address: Mapped[Optional[str]] = mapped_column(Text)
    source: Mapped[Optional[str]] = mapped_column(String(50))
    notes: Mapped[Optional[str]] = mapped_column(Text)
    birthday: Mapped[Optional[date]] = mapped_column(Date)
    join_date: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)

    membership_type: Mapped[Optional[str]] = mapped_column(String(50))
    membership_fees: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    membership_duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    membership_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    membership_start_date: Mapped[Optional[date]] = mapped_column(Date)
    membership_end_date: Mapped[Optional[date]] = mapped_column(Date)
    transaction_date: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True))
    payment_mode: Mapped[Optional[str]] = mapped_column(String(20))

    total_spent: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    last_visit: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True))
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now)

    __table_args__ = (
        Index("idx_customers_user_name", "user_id", "name"),
    )
