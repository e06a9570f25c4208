from datetime import date, datetime
from typing import Any, Dict, List, Optional

from gymcrm.api.types import CamelModel


class IndustryStats(CamelModel):
    active_members: int = 0
    attendance_rate: int = 0
    membership_distribution: List[Dict[str, Any]] = []
    operating_hours: Dict[str, Any] = {}


class DashboardMetrics(CamelModel):
    total_customers: int
    previous_total_customers: int
    monthly_bookings: int
    previous_monthly_bookings: int
    monthly_revenue: float
    previous_monthly_revenue: float
    industry_stats: Optional[IndustryStats] = None


class RecentActivity(CamelModel):
    id: int
    customer_name: str
    service_name: str
    status: str
    created_at: datetime


class DashboardGym(CamelModel):
    name: str
    address: Dict[str, Any] = {}
    contact_info: Dict[str, Any] = {}


class ExpiringCustomer(CamelModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    membership_end_date: date
    membership_type: Optional[str] = None
