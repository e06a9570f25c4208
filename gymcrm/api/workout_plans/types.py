from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import Field

from gymcrm.api.types import CamelModel

Level = Literal["beginner", "intermediate", "advanced"]


class Exercise(CamelModel):
    name: str = Field(min_length=1)
    sets: int = Field(ge=1)
    reps: int = Field(ge=1)
    rest_time: int = Field(default=0, ge=0)
    notes: Optional[str] = None


class WorkoutDay(CamelModel):
    day_number: int = Field(ge=1)
    exercises: List[Exercise] = []


class WorkoutWeek(CamelModel):
    week_number: int = Field(ge=1)
    days: List[WorkoutDay] = []


class WorkoutPlanInput(CamelModel):
    name: str = Field(min_length=1)
    goal: str = Field(min_length=1)
    duration: int = Field(ge=1)
    level: Level
    weeks: List[WorkoutWeek] = []


class WorkoutPlanUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    goal: Optional[str] = Field(default=None, min_length=1)
    duration: Optional[int] = Field(default=None, ge=1)
    level: Optional[Level] = None
    weeks: Optional[List[WorkoutWeek]] = None


class WorkoutPlanOut(CamelModel):
    id: int
    name: str
    goal: str
    duration: int
    level: str
    weeks: list
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AssignInput(CamelModel):
    member_id: Optional[int] = None
    member_name: Optional[str] = None
    plan_id: Optional[int] = None
    start_date: Optional[date] = None
    notes: Optional[str] = None


class AssignedPlanOut(CamelModel):
    id: int
    member_id: int
    member_name: str
    plan_id: int
    plan: Optional[WorkoutPlanOut] = None
    start_date: date
    notes: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
