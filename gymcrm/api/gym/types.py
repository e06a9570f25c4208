from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from gymcrm.api.types import CamelModel


class GymRegisterInput(CamelModel):
    name: str = Field(min_length=1)
    address: Optional[Dict[str, Any]] = None
    contact_info: Optional[Dict[str, Any]] = None
    operating_hours: Optional[Dict[str, Any]] = None


class GymUpdateInput(CamelModel):
    name: Optional[str] = None
    address: Optional[Dict[str, Any]] = None
    contact_info: Optional[Dict[str, Any]] = None
    operating_hours: Optional[Dict[str, Any]] = None


class GymOut(CamelModel):
    id: int
    gym_code: str
    name: str
    logo: Optional[str] = None
    address: Dict[str, Any] = {}
    contact_info: Dict[str, Any] = {}
    operating_hours: Dict[str, Any] = {}
    subscription_start_date: Optional[datetime] = None
    subscription_end_date: Optional[datetime] = None
    subscription_duration: Optional[str] = None
    free_trial_counter: int = 0
    created_at: Optional[datetime] = None


class SubscriptionStatusOut(CamelModel):
    active: bool
    subscription_end_date: Optional[datetime] = None
    days_remaining: int = 0
