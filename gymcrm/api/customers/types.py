from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import EmailStr, Field, model_validator

from gymcrm.api.transactions.types import PaymentMode
from gymcrm.api.types import CamelModel


class CustomerCreate(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[str] = None
    source: Optional[str] = None
    notes: Optional[str] = None
    birthday: Optional[date] = None
    membership_type: Optional[str] = None
    membership_fees: Decimal = Field(default=Decimal("0"), ge=0)
    membership_duration: int = Field(default=0, ge=0)
    membership_days: int = Field(default=0, ge=0)
    membership_start_date: Optional[date] = None
    membership_end_date: Optional[date] = None
    transaction_date: Optional[datetime] = None
    payment_mode: Optional[PaymentMode] = None


class CustomerUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    source: Optional[str] = None
    notes: Optional[str] = None
    birthday: Optional[date] = None
    membership_type: Optional[str] = None
    membership_fees: Optional[Decimal] = Field(default=None, ge=0)
    membership_duration: Optional[int] = Field(default=None, ge=0)
    membership_days: Optional[int] = Field(default=None, ge=0)
    membership_start_date: Optional[date] = None
    membership_end_date: Optional[date] = None
    transaction_date: Optional[datetime] = None
    payment_mode: Optional[PaymentMode] = None
    last_visit: Optional[datetime] = None


class CustomerOut(CamelModel):
    id: int
    gym_id: Optional[int] = None
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    source: Optional[str] = None
    notes: Optional[str] = None
    birthday: Optional[date] = None
    join_date: Optional[datetime] = None
    membership_type: Optional[str] = None
    membership_fees: float = 0
    membership_duration: int = 0
    membership_days: int = 0
    membership_start_date: Optional[date] = None
    membership_end_date: Optional[date] = None
    transaction_date: Optional[datetime] = None
    payment_mode: Optional[str] = None
    total_spent: float = 0
    last_visit: Optional[datetime] = None
    created_at: Optional[datetime] = None


class RenewInput(CamelModel):
    membership_type: str = Field(min_length=1)
    membership_fees: Decimal = Field(ge=0)
    membership_duration: int = Field(ge=0)
    membership_days: int = Field(default=0, ge=0)
    membership_start_date: date
    transaction_date: Optional[datetime] = None
    payment_mode: PaymentMode
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _has_period(self):
        if self.membership_duration == 0 and self.membership_days == 0:
            raise ValueError("Renewal needs a membership duration or extra days")
        return self


class RenewalOut(CamelModel):
    will_extend: bool
    new_start_date: date
    new_end_date: date
    current_end_date: Optional[date] = None
