from datetime import date, datetime
from typing import Literal, Optional

from pydantic import Field

from gymcrm.api.types import CamelModel

StaffStatus = Literal["Active", "Inactive", "On Leave"]


class StaffInput(CamelModel):
    name: str = Field(min_length=1)
    position: str = Field(min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    hire_date: Optional[date] = None
    status: StaffStatus = "Active"
    experience: int = Field(default=0, ge=0)


class StaffUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    position: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    hire_date: Optional[date] = None
    status: Optional[StaffStatus] = None
    experience: Optional[int] = Field(default=None, ge=0)


class StaffOut(CamelModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    position: str
    hire_date: date
    status: str
    experience: int
    created_at: Optional[datetime] = None
