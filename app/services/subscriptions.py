"""Subscription bookkeeping.

Rows are never deleted: a billing update deactivates the current row and adds
a new one, so a user has at most one active subscription.
"""
import logging
import uuid
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.subscription import Subscription
from app.services.plan_catalog import Tier, parse_tier
from app.utils.timeutils import from_iso, to_iso, to_naive_utc, utc_now

logger = logging.getLogger(__name__)


def effective_tier(subscription: Subscription | None, now: datetime | None = None) -> Tier:
    """Tier whose entitlements apply right now.

    Falls back to Free when there is no subscription, it is inactive, or its
    paid period has ended.
    """
    if subscription is None or not subscription.is_active:
        return Tier.FREE
    if subscription.period_end:
        now = now or utc_now()
        if from_iso(subscription.period_end) < to_naive_utc(now):
            return Tier.FREE
    return parse_tier(subscription.tier)


async def get_active_subscription(db: AsyncSession, user_id: str) -> Subscription | None:
    result = await db.execute(
        select(Subscription)
        .where(Subscription.user_id == user_id, Subscription.is_active.is_(True))
        .order_by(Subscription.created_at.desc())
    )
    return result.scalars().first()


async def start_free_subscription(db: AsyncSession, user_id: str) -> Subscription:
    subscription = Subscription(
        id=str(uuid.uuid4()),
        user_id=user_id,
        tier=Tier.FREE.value,
        is_active=True,
        period_end=None,
        created_at=to_iso(utc_now()),
    )
    db.add(subscription)
    return subscription


async def apply_billing_update(
    db: AsyncSession,
    user_id: str,
    tier: "Tier | str",
    is_active: bool = True,
    period_end: datetime | None = None,
) -> Subscription:
    """Record a tier change or cancellation reported by the billing provider.

    Raises UnknownTierError before touching the store if `tier` is not in the
    catalog. The caller commits.
    """
    tier = parse_tier(tier)

    await db.execute(
        update(Subscription)
        .where(Subscription.user_id == user_id, Subscription.is_active.is_(True))
        .values(is_active=False)
    )

    subscription = Subscription(
        id=str(uuid.uuid4()),
        user_id=user_id,
        tier=tier.value,
        is_active=is_active,
        period_end=to_iso(period_end) if period_end else None,
        created_at=to_iso(utc_now()),
    )
    db.add(subscription)
    logger.info(
        "Subscription superseded for user %s: tier=%s active=%s period_end=%s",
        user_id, tier.value, is_active, subscription.period_end,
    )
    return subscription
