"""
Tenant (gym) and CRM subscription plan models
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, List, TYPE_CHECKING
from sqlalchemy import Integer, Numeric, String, Text, JSON, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import TIMESTAMP

from gymcrm.db.postgresql import Base, BigIntPK

if TYPE_CHECKING:
    from gymcrm.models.userModel import User


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Gym(Base):
    """Tenant business; its subscription dates drive the subscription gate"""

    __tablename__ = "gyms"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    gym_code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    logo: Mapped[Optional[str]] = mapped_column(Text)
    address: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    contact_info: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    operating_hours: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    subscription_start_date: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True))
    subscription_end_date: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True))
    subscription_duration: Mapped[Optional[str]] = mapped_column(String(20))
    free_trial_counter: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    invoice_counter: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now)

    users: Mapped[List["User"]] = relationship(back_populates="gym")


class SubscriptionPlan(Base):
    """Price list for the CRM subscription itself (Monthly, Yearly)"""

    __tablename__ = "subscription_plans"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    duration: Mapped[str] = mapped_column(String(10), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    __table_args__ = (
        CheckConstraint("duration IN ('monthly','yearly')", name="ck_plan_duration"),
    )
