from datetime import date, datetime, timezone
from typing import Optional
from sqlalchemy import BigInteger, Date, ForeignKey, Integer, String, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import TIMESTAMP

from gymcrm.db.postgresql import Base, BigIntPK

STAFF_STATUSES = ("Active", "Inactive", "On Leave")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Staff(Base):
    """Employee of a gym (trainer, receptionist...)"""

    __tablename__ = "staff"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    gym_id: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("gyms.id"))
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(200))
    phone: Mapped[Optional[str]] = mapped_column(String(32))
    date_of_birth: Mapped[Optional[date]] = mapped_column(Date)
    position: Mapped[str] = mapped_column(String(100), nullable=False)
    hire_date: Mapped[date] = mapped_column(Date, nullable=False, default=lambda: _now().date())
    status: Mapped[str] = mapped_column(String(12), nullable=False, default="Active")
    experience: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now)

    __table_args__ = (
        CheckConstraint("status IN ('Active','Inactive','On Leave')", name="ck_staff_status"),
    )
