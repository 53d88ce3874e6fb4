"""Read current usage counters from the store and evaluate them against a tier."""
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.service_request import ServiceRequest
from app.models.subscription import Subscription
from app.models.vehicle import Vehicle
from app.services.plan_catalog import Tier, entitlements_for, limit_to_json
from app.services.subscriptions import effective_tier, get_active_subscription
from app.services.usage_policy import (
    can_add_service_request,
    can_add_vehicle,
    month_window,
    remaining,
)
from app.utils.timeutils import to_iso, utc_now


@dataclass
class UsageSnapshot:
    tier: Tier
    vehicle_count: int
    requests_this_month: int
    subscription: Subscription | None = None

    @property
    def can_add_vehicle(self) -> bool:
        return can_add_vehicle(self.tier, self.vehicle_count)

    @property
    def can_add_service_request(self) -> bool:
        return can_add_service_request(self.tier, self.requests_this_month)

    def to_dict(self) -> dict:
        limits = entitlements_for(self.tier)
        return {
            "tier": self.tier.value,
            "limits": {
                "max_vehicles": limit_to_json(limits.max_vehicles),
                "max_requests_per_month": limit_to_json(limits.max_requests_per_month),
            },
            "usage": {
                "vehicles": self.vehicle_count,
                "requests_this_month": self.requests_this_month,
            },
            "remaining": {
                "vehicles": limit_to_json(remaining(limits.max_vehicles, self.vehicle_count)),
                "requests_this_month": limit_to_json(
                    remaining(limits.max_requests_per_month, self.requests_this_month)
                ),
            },
            "can_add_vehicle": self.can_add_vehicle,
            "can_add_service_request": self.can_add_service_request,
        }


async def count_vehicles(db: AsyncSession, owner_id: str) -> int:
    result = await db.execute(
        select(func.count()).select_from(Vehicle).where(Vehicle.owner_id == owner_id)
    )
    return result.scalar_one()


async def count_requests_in_month(db: AsyncSession, requester_id: str, now: datetime) -> int:
    start, end = month_window(now)
    result = await db.execute(
        select(func.count())
        .select_from(ServiceRequest)
        .where(
            ServiceRequest.requester_id == requester_id,
            ServiceRequest.created_at >= to_iso(start),
            ServiceRequest.created_at < to_iso(end),
        )
    )
    return result.scalar_one()


async def get_usage(db: AsyncSession, user_id: str, now: datetime | None = None) -> UsageSnapshot:
    """Current tier and counters for `user_id`, read in one pass."""
    now = now or utc_now()
    subscription = await get_active_subscription(db, user_id)
    return UsageSnapshot(
        tier=effective_tier(subscription, now),
        vehicle_count=await count_vehicles(db, user_id),
        requests_this_month=await count_requests_in_month(db, user_id, now),
        subscription=subscription,
    )
