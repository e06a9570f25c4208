from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from gymcrm.api.types import CamelModel


class MembershipPlanInput(CamelModel):
    name: str = Field(min_length=3)
    description: str = Field(min_length=10)
    price: Decimal = Field(ge=0)
    duration: int = Field(ge=1)
    features: List[str] = Field(default_factory=list)
    is_active: bool = True


class MembershipPlanUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=3)
    description: Optional[str] = Field(default=None, min_length=10)
    price: Optional[Decimal] = Field(default=None, ge=0)
    duration: Optional[int] = Field(default=None, ge=1)
    features: Optional[List[str]] = None
    is_active: Optional[bool] = None


class MembershipPlanOut(CamelModel):
    id: int
    name: str
    description: str
    price: float
    duration: int
    features: List[str] = []
    is_active: bool
    created_at: Optional[datetime] = None
