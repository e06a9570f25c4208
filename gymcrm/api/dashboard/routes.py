from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.dashboard.types import (
    DashboardGym, DashboardMetrics, ExpiringCustomer, IndustryStats, RecentActivity,
)
from gymcrm.api.deps import check_subscription
from gymcrm.api.types import dump_list
from gymcrm.core.dates import month_bounds, utcnow
from gymcrm.crud import dashboardCrud
from gymcrm.crud.gymsCrud import get_gym
from gymcrm.db.postgresql import get_db
from gymcrm.models import User

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/overview")
async def dashboard_overview(user: User = Depends(check_subscription), db: AsyncSession = Depends(get_db)):
    today = utcnow().date()
    month_start, month_end = month_bounds(today)
    prev_start, prev_end = month_bounds(today, 1)

    total_customers = await dashboardCrud.count_customers(db, user.id)
    gym = await get_gym(db, user.gym_id) if user.industry == "gym" and user.gym_id else None

    industry_stats = None
    if gym is not None:
        completed = await dashboardCrud.count_bookings(db, user.id, month_start, month_end, status="Completed")
        industry_stats = IndustryStats(
            active_members=await dashboardCrud.count_active_members(db, user.id, today),
            attendance_rate=round(completed / total_customers * 100) if total_customers else 0,
            membership_distribution=await dashboardCrud.membership_distribution(db, user.id),
            operating_hours=gym.operating_hours or {},
        )

    metrics = DashboardMetrics(
        total_customers=total_customers,
        previous_total_customers=await dashboardCrud.count_customers(db, user.id, created_before=month_start),
        monthly_bookings=await dashboardCrud.count_bookings(db, user.id, month_start, month_end),
        previous_monthly_bookings=await dashboardCrud.count_bookings(db, user.id, prev_start, prev_end),
        monthly_revenue=await dashboardCrud.paid_revenue(db, user.id, month_start, month_end),
        previous_monthly_revenue=await dashboardCrud.paid_revenue(db, user.id, prev_start, prev_end),
        industry_stats=industry_stats,
    )
    recent = await dashboardCrud.recent_bookings(db, user.id, month_start, month_end)
    return {
        "success": True,
        "data": {
            "metrics": metrics.dump(),
            "recentActivities": dump_list(RecentActivity, recent),
            "revenueOverview": await dashboardCrud.revenue_by_month(db, user.id, today),
            "gymInfo": DashboardGym.model_validate(gym).dump() if gym is not None else None,
        },
    }


@router.get("/expiring-customers")
async def dashboard_expiring(user: User = Depends(check_subscription), db: AsyncSession = Depends(get_db)):
    customers = await dashboardCrud.expiring_customers(db, user.id, utcnow().date())
    return {"success": True, "customers": dump_list(ExpiringCustomer, customers)}
