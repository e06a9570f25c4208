from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, Field

from gymcrm.api.types import CamelModel

BookingStatus = Literal["Confirmed", "Pending", "Cancelled", "Completed", "No-show"]


def _zero_pad(value: str) -> str:
    hours, minutes = (int(part) for part in value.split(":"))
    if hours > 23 or minutes > 59:
        raise ValueError("Time must be between 00:00 and 23:59")
    return f"{hours:02d}:{minutes:02d}"


# Stored as HH:MM so the column sorts chronologically
ClockTime = Annotated[str, Field(pattern=r"^\d{1,2}:\d{2}$"), AfterValidator(_zero_pad)]


class BookingCustomer(CamelModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class BookingService(CamelModel):
    name: str = Field(min_length=1)
    duration: Optional[int] = Field(default=None, ge=0)
    price: Optional[Decimal] = Field(default=None, ge=0)


class BookingStaff(CamelModel):
    id: Optional[int] = None
    name: Optional[str] = None


class BookingCreate(CamelModel):
    customer: BookingCustomer
    service: BookingService
    staff: Optional[BookingStaff] = None
    date: datetime
    start_time: ClockTime
    end_time: ClockTime
    status: BookingStatus = "Pending"
    notes: Optional[str] = None


class BookingUpdate(CamelModel):
    service: Optional[BookingService] = None
    staff: Optional[BookingStaff] = None
    date: Optional[datetime] = None
    start_time: Optional[ClockTime] = None
    end_time: Optional[ClockTime] = None
    status: Optional[BookingStatus] = None
    notes: Optional[str] = None


class BookingOut(CamelModel):
    id: int
    customer: dict
    service: dict
    staff: Optional[dict] = None
    date: datetime
    start_time: str
    end_time: str
    status: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_booking(cls, booking) -> dict:
        return cls(
            id=booking.id,
            customer={
                "id": booking.customer_id,
                "name": booking.customer_name,
                "email": booking.customer_email,
                "phone": booking.customer_phone,
            },
            service={
                "name": booking.service_name,
                "duration": booking.service_duration,
                "price": float(booking.service_price) if booking.service_price is not None else None,
            },
            staff={"id": booking.staff_id, "name": booking.staff_name} if booking.staff_name else None,
            date=booking.date,
            start_time=booking.start_time,
            end_time=booking.end_time,
            status=booking.status,
            notes=booking.notes,
            created_at=booking.created_at,
        ).dump()
