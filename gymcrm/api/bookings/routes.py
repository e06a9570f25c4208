from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.bookings.types import BookingCreate, BookingOut, BookingService, BookingStaff, BookingUpdate
from gymcrm.api.deps import check_subscription
from gymcrm.api.types import pagination
from gymcrm.core.conversions import coerce_int, coerce_positive_int
from gymcrm.crud.bookingsCrud import create_booking, delete_booking, get_booking, list_bookings, update_booking
from gymcrm.crud.customersCrud import get_customer
from gymcrm.crud.notificationsCrud import create_notification
from gymcrm.db.postgresql import get_db
from gymcrm.models import User

router = APIRouter(prefix="/bookings", tags=["bookings"])


def _service_columns(service: BookingService) -> dict:
    return {
        "service_name": service.name,
        "service_duration": service.duration,
        "service_price": service.price,
    }


def _staff_columns(staff: Optional[BookingStaff]) -> dict:
    if staff is None:
        return {"staff_id": None, "staff_name": None}
    return {"staff_id": staff.id, "staff_name": staff.name}


async def _load(db: AsyncSession, user: User, booking_id: int):
    booking = await get_booking(db, user.id, booking_id)
    if booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


@router.get("")
async def bookings_list(
    status: Optional[str] = None,
    date: Optional[date] = None,
    customerId: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    page_n = coerce_positive_int(page, 1)
    limit_n = coerce_positive_int(limit, 10)
    rows, total = await list_bookings(
        db,
        user.id,
        status=status,
        day=date,
        customer_id=coerce_int(customerId),
        page=page_n,
        limit=limit_n,
    )
    return {
        "success": True,
        "bookings": [BookingOut.from_booking(row) for row in rows],
        "pagination": pagination(total, page_n, limit_n),
    }


@router.get("/{booking_id}")
async def bookings_get(
    booking_id: int,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    booking = await _load(db, user, booking_id)
    return {"success": True, "booking": BookingOut.from_booking(booking)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def bookings_create(
    data: BookingCreate,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    customer = await get_customer(db, user.id, data.customer.id)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")

    booking = await create_booking(
        db,
        user_id=user.id,
        customer_id=customer.id,
        customer_name=data.customer.name or customer.name,
        customer_email=data.customer.email or customer.email,
        customer_phone=data.customer.phone or customer.phone,
        date=data.date,
        start_time=data.start_time,
        end_time=data.end_time,
        status=data.status,
        notes=data.notes,
        **_service_columns(data.service),
        **_staff_columns(data.staff),
    )
    await create_notification(
        db,
        user_id=user.id,
        gym_id=user.gym_id,
        type="booking_created",
        title="New Booking",
        message=f"{booking.customer_name} booked {booking.service_name} on {booking.date:%Y-%m-%d} at {booking.start_time}",
        data={"bookingId": booking.id},
        link="/bookings",
    )
    return {"success": True, "booking": BookingOut.from_booking(booking)}


@router.put("/{booking_id}")
async def bookings_update(
    booking_id: int,
    data: BookingUpdate,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    booking = await _load(db, user, booking_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"service", "staff"})
    if data.service is not None:
        changes.update(_service_columns(data.service))
    if "staff" in data.model_fields_set:
        changes.update(_staff_columns(data.staff))
    booking = await update_booking(db, booking, **changes)

    cancelled = changes.get("status") == "Cancelled"
    await create_notification(
        db,
        user_id=user.id,
        gym_id=user.gym_id,
        type="booking_cancelled" if cancelled else "booking_updated",
        title="Booking Cancelled" if cancelled else "Booking Updated",
        message=(
            f"Booking for {booking.customer_name} on {booking.date:%Y-%m-%d} was "
            f"{'cancelled' if cancelled else 'updated'}"
        ),
        data={"bookingId": booking.id, "status": booking.status},
        link="/bookings",
    )
    return {"success": True, "booking": BookingOut.from_booking(booking)}


@router.delete("/{booking_id}")
async def bookings_delete(
    booking_id: int,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    if not await delete_booking(db, user.id, booking_id):
        raise HTTPException(status_code=404, detail="Booking not found")
    return {"success": True, "message": "Booking deleted successfully"}
