"""
Read-only aggregates behind the dashboard overview
"""
from collections import Counter
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.core.dates import ensure_aware, month_bounds
from gymcrm.models import Booking, Customer, Invoice


async def count_customers(db: AsyncSession, user_id: int, created_before: Optional[datetime] = None) -> int:
    stmt = select(func.count(Customer.id)).where(Customer.user_id == user_id)
    if created_before is not None:
        stmt = stmt.where(Customer.created_at < created_before)
    return int(await db.scalar(stmt) or 0)


async def count_bookings(
    db: AsyncSession, user_id: int, start: datetime, end: datetime, status: Optional[str] = None
) -> int:
    stmt = select(func.count(Booking.id)).where(
        Booking.user_id == user_id, Booking.created_at >= start, Booking.created_at < end
    )
    if status:
        stmt = stmt.where(Booking.status == status)
    return int(await db.scalar(stmt) or 0)


async def paid_revenue(db: AsyncSession, user_id: int, start: datetime, end: datetime) -> Decimal:
    total = await db.scalar(
        select(func.coalesce(func.sum(Invoice.total), 0)).where(
            Invoice.user_id == user_id,
            Invoice.status == "Paid",
            Invoice.issue_date >= start,
            Invoice.issue_date < end,
        )
    )
    return Decimal(str(total or 0))


async def count_active_members(db: AsyncSession, user_id: int, today: date) -> int:
    total = await db.scalar(
        select(func.count(Customer.id)).where(Customer.user_id == user_id, Customer.membership_end_date >= today)
    )
    return int(total or 0)


async def membership_distribution(db: AsyncSession, user_id: int) -> List[Dict]:
    res = await db.execute(
        select(Customer.membership_type, func.count(Customer.id))
        .where(Customer.user_id == user_id)
        .group_by(Customer.membership_type)
    )
    return [{"type": membership_type or "none", "count": count} for membership_type, count in res.all()]


async def recent_bookings(db: AsyncSession, user_id: int, start: datetime, end: datetime, limit: int = 5) -> Sequence[Booking]:
    res = await db.execute(
        select(Booking)
        .where(Booking.user_id == user_id, Booking.created_at >= start, Booking.created_at < end)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .limit(limit)
    )
    return res.scalars().all()


async def revenue_by_month(db: AsyncSession, user_id: int, today: date, months: int = 6) -> List[Dict]:
    """Paid invoice totals per calendar month, oldest first, zero-filled."""
    start, _ = month_bounds(today, months - 1)
    res = await db.execute(
        select(Invoice.issue_date, Invoice.total).where(
            Invoice.user_id == user_id, Invoice.status == "Paid", Invoice.issue_date >= start
        )
    )
    totals: Counter = Counter()
    for issued, total in res.all():
        issued = ensure_aware(issued)
        totals[(issued.year, issued.month)] += Decimal(str(total))

    overview = []
    for back in range(months - 1, -1, -1):
        month_start, _ = month_bounds(today, back)
        key = (month_start.year, month_start.month)
        overview.append({"year": key[0], "month": key[1], "total": float(totals.get(key, 0))})
    return overview


async def expiring_customers(db: AsyncSession, user_id: int, today: date, days: int = 7) -> Sequence[Customer]:
    res = await db.execute(
        select(Customer)
        .where(
            Customer.user_id == user_id,
            Customer.membership_end_date >= today,
            Customer.membership_end_date <= today + timedelta(days=days),
        )
        .order_by(Customer.membership_end_date, Customer.id)
    )
    return res.scalars().all()
