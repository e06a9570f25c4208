from datetime import date
from typing import Optional, Sequence, Tuple

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.core.dates import day_bounds
from gymcrm.crud.common import apply_changes, commit_or_rollback, paginate, save
from gymcrm.models import Booking


async def list_bookings(
    db: AsyncSession,
    user_id: int,
    *,
    status: Optional[str] = None,
    day: Optional[date] = None,
    customer_id: Optional[int] = None,
    page: int = 1,
    limit: int = 10,
) -> Tuple[Sequence[Booking], int]:
    stmt = select(Booking).where(Booking.user_id == user_id)
    if status and status != "All":
        stmt = stmt.where(Booking.status == status)
    if day is not None:
        start, end = day_bounds(day)
        stmt = stmt.where(Booking.date >= start, Booking.date <= end)
    if customer_id is not None:
        stmt = stmt.where(Booking.customer_id == customer_id)
    stmt = stmt.order_by(Booking.date, Booking.start_time)
    return await paginate(db, stmt, page=page, limit=limit)


async def get_booking(db: AsyncSession, user_id: int, booking_id: int) -> Booking | None:
    res = await db.execute(select(Booking).where(Booking.id == booking_id, Booking.user_id == user_id))
    return res.scalar_one_or_none()


async def create_booking(db: AsyncSession, *, user_id: int, **fields) -> Booking:
    return await save(db, Booking(user_id=user_id, **fields))


async def update_booking(db: AsyncSession, booking: Booking, **changes) -> Booking:
    apply_changes(booking, changes)
    await commit_or_rollback(db)
    await db.refresh(booking)
    return booking


async def delete_booking(db: AsyncSession, user_id: int, booking_id: int) -> bool:
    res = await db.execute(delete(Booking).where(Booking.id == booking_id, Booking.user_id == user_id))
    await commit_or_rollback(db)
    return res.rowcount > 0
