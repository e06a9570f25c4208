from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from sqlalchemy import BigInteger, ForeignKey, Integer, Numeric, String, Text, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import TIMESTAMP

from gymcrm.db.postgresql import Base, BigIntPK

BOOKING_STATUSES = ("Confirmed", "Pending", "Cancelled", "Completed", "No-show")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Booking(Base):
    """Appointment for a service, with customer and staff snapshots"""

    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    customer_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False)
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    customer_email: Mapped[Optional[str]] = mapped_column(String(200))
    customer_phone: Mapped[Optional[str]] = mapped_column(String(32))
    service_name: Mapped[str] = mapped_column(String(200), nullable=False)
    service_duration: Mapped[Optional[int]] = mapped_column(Integer)
    service_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    staff_id: Mapped[Optional[int]] = mapped_column(BigInteger)
    staff_name: Mapped[Optional[str]] = mapped_column(String(200))
    date: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)
    start_time: Mapped[str] = mapped_column(String(10), nullable=False)
    end_time: Mapped[str] = mapped_column(String(10), nullable=False)
    status: Mapped[str] = mapped_column(String(12), nullable=False, default="Pending")
    notes: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now)

    __table_args__ = (
        CheckConstraint(
            "status IN ('Confirmed','Pending','Cancelled','Completed','No-show')", name="ck_booking_status"
        ),
        Index("idx_bookings_user_date", "user_id", "date", "start_time"),
    )
