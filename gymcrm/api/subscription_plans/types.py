from decimal import Decimal
from typing import Literal

from pydantic import Field

from gymcrm.api.types import CamelModel


class PlanInput(CamelModel):
    name: str = Field(min_length=1)
    duration: Literal["monthly", "yearly"]
    price: Decimal = Field(ge=0)


class PlanPriceInput(CamelModel):
    price: Decimal = Field(ge=0)


class PlanOut(CamelModel):
    id: int
    name: str
    duration: str
    price: float
