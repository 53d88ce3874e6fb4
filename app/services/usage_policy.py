"""Admission decisions for new vehicles and service requests.

Pure functions: callers read the current counts from the store, ask here, and
create the entity themselves. Nothing is reserved between the check and the
insert.
"""
from datetime import datetime

from app.services.plan_catalog import Tier, UNLIMITED, entitlements_for, is_unlimited
from app.utils.timeutils import to_naive_utc


def _within_limit(limit, used: int) -> bool:
    if used < 0:
        raise ValueError(f"Usage count cannot be negative: {used}")
    if is_unlimited(limit):
        return True
    return used < limit


def can_add_vehicle(tier: "Tier | str", current_vehicle_count: int) -> bool:
    return _within_limit(entitlements_for(tier).max_vehicles, current_vehicle_count)


def can_add_service_request(tier: "Tier | str", requests_this_month: int) -> bool:
    """True if one more request fits in the tier's monthly allowance.

    `requests_this_month` must only count requests created inside the current
    calendar month (see `month_window`).
    """
    return _within_limit(entitlements_for(tier).max_requests_per_month, requests_this_month)


def remaining(limit, used: int):
    if is_unlimited(limit):
        return UNLIMITED
    return max(limit - used, 0)


def month_window(now: datetime) -> tuple[datetime, datetime]:
    """Naive UTC [start, end) bounds of the calendar month containing `now`."""
    start = to_naive_utc(now).replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end
