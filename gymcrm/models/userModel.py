"""
CRM account models: the people who log into the CRM for a tenant
"""
from datetime import datetime, timezone
from typing import Optional, List, TYPE_CHECKING
from sqlalchemy import (
    BigInteger, ForeignKey, String, Text, JSON, CheckConstraint, Index
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import TIMESTAMP

from gymcrm.db.postgresql import Base, BigIntPK

if TYPE_CHECKING:
    from gymcrm.models.gymModel import Gym

INDUSTRIES = ("gym", "spa", "hotel", "club")
ROLES = ("admin", "manager", "staff", "owner")
PERMISSIONS = (
    "view_dashboard", "manage_members", "manage_staff",
    "manage_finance", "manage_attendance", "manage_workouts",
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Login account for a CRM operator (owner, manager, staff...)"""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(32))
    industry: Mapped[str] = mapped_column(String(20), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="staff")
    membership_type: Mapped[Optional[str]] = mapped_column(String(50))
    join_date: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    gym_id: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("gyms.id"))
    permissions: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    profile_image: Mapped[Optional[str]] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now)

    gym: Mapped[Optional["Gym"]] = relationship(back_populates="users")

    __table_args__ = (
        CheckConstraint("industry IN ('gym','spa','hotel','club')", name="ck_user_industry"),
        CheckConstraint("role IN ('admin','manager','staff','owner')", name="ck_user_role"),
        Index("idx_users_gym", "gym_id"),
    )
