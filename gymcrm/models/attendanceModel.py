from datetime import datetime, timezone
from typing import Optional, TYPE_CHECKING
from sqlalchemy import BigInteger, ForeignKey, String, Text, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import TIMESTAMP

from gymcrm.db.postgresql import Base, BigIntPK

if TYPE_CHECKING:
    from gymcrm.models.customerModel import Customer

CHECKIN_METHODS = ("QR", "Manual")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Attendance(Base):
    """One visit: open while ``check_out_time`` is NULL"""

    __tablename__ = "attendance"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    gym_id: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("gyms.id"))
    customer_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False)
    check_in_time: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    check_out_time: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True))
    method: Mapped[str] = mapped_column(String(10), nullable=False, default="Manual")
    notes: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now)

    customer: Mapped["Customer"] = relationship()

    __table_args__ = (
        CheckConstraint("method IN ('QR','Manual')", name="ck_attendance_method"),
        Index("idx_attendance_user_checkin", "user_id", "check_in_time"),
        Index("idx_attendance_open", "customer_id", "check_out_time"),
    )
