"""
Attendance records: a record is open until it gets a check-out time
"""
from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gymcrm.core.dates import day_bounds, utcnow
from gymcrm.core.logging_config import get_logger
from gymcrm.crud.common import commit_or_rollback, paginate
from gymcrm.models import Attendance, Customer

logger = get_logger("crud.attendance")

CHECKED_IN = "Checked In"
CHECKED_OUT = "Checked Out"


def _base(user_id: int):
    return (
        select(Attendance)
        .options(selectinload(Attendance.customer))
        .where(Attendance.user_id == user_id)
    )


async def list_attendance(
    db: AsyncSession,
    user_id: int,
    *,
    day: Optional[date] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    status: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> Tuple[Sequence[Attendance], int]:
    stmt = _base(user_id)
    if day is not None:
        start, end = day_bounds(day)
        stmt = stmt.where(Attendance.check_in_time >= start, Attendance.check_in_time <= end)
    elif start_date is not None and end_date is not None:
        stmt = stmt.where(
            Attendance.check_in_time >= day_bounds(start_date)[0],
            Attendance.check_in_time <= day_bounds(end_date)[1],
        )
    if status == CHECKED_IN:
        stmt = stmt.where(Attendance.check_out_time.is_(None))
    elif status == CHECKED_OUT:
        stmt = stmt.where(Attendance.check_out_time.is_not(None))
    stmt = stmt.order_by(Attendance.check_in_time.desc(), Attendance.id.desc())
    return await paginate(db, stmt, page=page, limit=limit)


async def list_range(db: AsyncSession, user_id: int, start_date: date, end_date: date) -> List[Attendance]:
    res = await db.execute(
        _base(user_id)
        .where(
            Attendance.check_in_time >= day_bounds(start_date)[0],
            Attendance.check_in_time <= day_bounds(end_date)[1],
        )
        .order_by(Attendance.check_in_time.desc())
    )
    return list(res.scalars().all())


async def list_active(db: AsyncSession, user_id: int) -> List[Attendance]:
    res = await db.execute(
        _base(user_id).where(Attendance.check_out_time.is_(None)).order_by(Attendance.check_in_time.desc())
    )
    return list(res.scalars().all())


async def get_open_record(db: AsyncSession, user_id: int, customer_id: int) -> Attendance | None:
    res = await db.execute(
        select(Attendance).where(
            Attendance.user_id == user_id,
            Attendance.customer_id == customer_id,
            Attendance.check_out_time.is_(None),
        )
    )
    return res.scalars().first()


async def today_stats(db: AsyncSession, user_id: int, today: Optional[date] = None) -> dict:
    start, end = day_bounds(today or utcnow().date())
    today_filter = (
        Attendance.user_id == user_id,
        Attendance.check_in_time >= start,
        Attendance.check_in_time <= end,
    )
    total_today = await db.scalar(select(func.count(Attendance.id)).where(*today_filter))
    members_today = await db.scalar(select(func.count(distinct(Attendance.customer_id))).where(*today_filter))
    currently_in = await db.scalar(
        select(func.count(Attendance.id)).where(
            Attendance.user_id == user_id, Attendance.check_out_time.is_(None)
        )
    )
    return {
        "totalToday": int(total_today or 0),
        "currentlyIn": int(currently_in or 0),
        "membersToday": int(members_today or 0),
    }


async def check_in(
    db: AsyncSession,
    *,
    user_id: int,
    gym_id: Optional[int],
    customer: Customer,
    method: str = "Manual",
    notes: Optional[str] = None,
    when: Optional[datetime] = None,
) -> Attendance:
    """Open a record for ``customer`` and stamp their last visit."""
    when = when or utcnow()
    record = Attendance(
        user_id=user_id,
        gym_id=gym_id,
        customer_id=customer.id,
        check_in_time=when,
        method=method,
        notes=notes,
    )
    db.add(record)
    customer.last_visit = when
    await commit_or_rollback(db)
    logger.info(f"Member {customer.id} checked in via {method}")
    return await get_record(db, user_id, record.id)


async def get_record(db: AsyncSession, user_id: int, attendance_id: int) -> Attendance | None:
    res = await db.execute(
        _base(user_id).where(Attendance.id == attendance_id).execution_options(populate_existing=True)
    )
    return res.scalar_one_or_none()


async def check_out(db: AsyncSession, record: Attendance, when: Optional[datetime] = None) -> Attendance:
    record.check_out_time = when or utcnow()
    await commit_or_rollback(db)
    return await get_record(db, record.user_id, record.id)
