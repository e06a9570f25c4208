"""Date helpers shared by memberships, subscriptions and attendance."""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from dateutil.relativedelta import relativedelta


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes (SQLite drops the offset) as UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Return the first and last instant of ``day`` in UTC."""
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    end = datetime.combine(day, time.max, tzinfo=timezone.utc)
    return start, end


def membership_end(start: date, months: int = 0, days: int = 0) -> date:
    """Inclusive end of a membership starting on ``start``."""
    return start + relativedelta(months=months) + timedelta(days=days) - timedelta(days=1)


@dataclass
class RenewalWindow:
    will_extend: bool
    new_start_date: date
    new_end_date: date
    current_end_date: Optional[date]
    # First day the renewal payment covers
    covered_from: date


def renewal_window(
    *,
    current_start: Optional[date],
    current_end: Optional[date],
    current_duration_months: Optional[int],
    requested_start: date,
    months: int,
    days: int,
    today: Optional[date] = None,
) -> RenewalWindow:
    """Work out the new membership period for a renewal.

    An active membership (ending today or later) is extended from the day
    after its current end and keeps its original start date, as long as the
    requested start falls inside it. Anything else restarts the membership
    on the requested start date.
    """
    today = today or utcnow().date()
    if current_end is None and current_start is not None:
        current_end = current_start + relativedelta(months=current_duration_months or 0)

    if current_end is not None and current_end >= today and requested_start <= current_end:
        renewal_from = current_end + timedelta(days=1)
        return RenewalWindow(
            will_extend=True,
            new_start_date=current_start or requested_start,
            new_end_date=membership_end(renewal_from, months, days),
            current_end_date=current_end,
            covered_from=renewal_from,
        )

    return RenewalWindow(
        will_extend=False,
        new_start_date=requested_start,
        new_end_date=membership_end(requested_start, months, days),
        current_end_date=current_end,
        covered_from=requested_start,
    )


def subscription_period(plan_type: Optional[str], now: Optional[datetime] = None) -> tuple[datetime, datetime, str]:
    """Start, end and label of a paid CRM subscription starting ``now``."""
    now = now or utcnow()
    if (plan_type or "").lower() == "yearly":
        return now, now + relativedelta(years=1) - timedelta(days=1), "1 year"
    return now, now + relativedelta(months=1) - timedelta(days=1), "1 month"


def is_subscription_active(end_date: Optional[datetime], now: Optional[datetime] = None) -> bool:
    if end_date is None:
        return False
    return ensure_aware(end_date) >= (now or utcnow())


def format_long_date(value: date) -> str:
    return f"{value:%B} {value.day}, {value.year}"


def month_bounds(day: date, months_back: int = 0) -> tuple[datetime, datetime]:
    """First instant of the month holding ``day`` (shifted back ``months_back``) and of the month after."""
    first = date(day.year, day.month, 1) - relativedelta(months=months_back)
    start = datetime.combine(first, time.min, tzinfo=timezone.utc)
    return start, start + relativedelta(months=1)
