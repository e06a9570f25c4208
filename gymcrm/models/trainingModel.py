"""
Workout and nutrition plan models

Plan bodies (weeks/days/exercises, meals/items) are stored as JSON documents;
their shape is validated at the API layer.
"""
from datetime import date, datetime, timezone
from typing import Optional
from sqlalchemy import BigInteger, Date, ForeignKey, Integer, String, Text, JSON, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import TIMESTAMP

from gymcrm.db.postgresql import Base, BigIntPK

WORKOUT_LEVELS = ("beginner", "intermediate", "advanced")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class WorkoutPlan(Base):
    """Workout plan template owned by a gym"""

    __tablename__ = "workout_plans"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    gym_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("gyms.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    goal: Mapped[str] = mapped_column(String(200), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    level: Mapped[str] = mapped_column(String(20), nullable=False)
    weeks: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now)

    __table_args__ = (
        CheckConstraint("level IN ('beginner','intermediate','advanced')", name="ck_workout_level"),
        CheckConstraint("duration >= 1", name="ck_workout_duration"),
        Index("idx_workout_plans_gym", "gym_id"),
    )


class AssignedWorkoutPlan(Base):
    """A workout plan handed to a member"""

    __tablename__ = "assigned_workout_plans"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    gym_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("gyms.id"), nullable=False)
    member_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False)
    member_name: Mapped[str] = mapped_column(String(200), nullable=False)
    plan_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("workout_plans.id", ondelete="CASCADE"), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now)

    plan: Mapped["WorkoutPlan"] = relationship()


class NutritionPlan(Base):
    """Diet plan for a member of a gym"""

    __tablename__ = "nutrition_plans"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    gym_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("gyms.id"), nullable=False)
    member_id: Mapped[str] = mapped_column(String(64), nullable=False)
    plan_name: Mapped[str] = mapped_column(String(200), nullable=False)
    total_calories: Mapped[int] = mapped_column(Integer, nullable=False)
    protein_target: Mapped[int] = mapped_column(Integer, nullable=False)
    carbs_target: Mapped[int] = mapped_column(Integer, nullable=False)
    fat_target: Mapped[int] = mapped_column(Integer, nullable=False)
    meals: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_date: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now)

    __table_args__ = (
        Index("idx_nutrition_plans_gym", "gym_id"),
        Index("idx_nutrition_plans_member", "member_id"),
    )
