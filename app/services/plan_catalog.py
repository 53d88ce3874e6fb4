"""Static catalog of subscription plans and their entitlements.

Single source of truth for what each tier allows. The catalog is built once at
import time and never mutated.
"""
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class UnknownTierError(Exception):
    """Raised for a tier outside the fixed vocabulary (configuration error)."""

    def __init__(self, tier):
        self.tier = tier
        super().__init__(f"Unknown plan tier: {tier!r}")


class _Unlimited:
    """Sentinel for an uncapped entitlement. Never equal to any int."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNLIMITED"

    def __reduce__(self):
        return "UNLIMITED"


UNLIMITED = _Unlimited()


class Tier(str, Enum):
    FREE = "free"
    BASIC = "basic"
    PREMIUM = "premium"


@dataclass(frozen=True)
class Entitlements:
    max_vehicles: int | _Unlimited
    max_requests_per_month: int | _Unlimited


@dataclass(frozen=True)
class Plan:
    tier: Tier
    name: str
    entitlements: Entitlements
    monthly_price: int  # minor currency units

    @property
    def max_vehicles(self) -> int | _Unlimited:
        return self.entitlements.max_vehicles

    @property
    def max_requests_per_month(self) -> int | _Unlimited:
        return self.entitlements.max_requests_per_month


_PLANS = MappingProxyType({
    Tier.FREE: Plan(
        tier=Tier.FREE,
        name="Free",
        entitlements=Entitlements(max_vehicles=1, max_requests_per_month=3),
        monthly_price=0,
    ),
    Tier.BASIC: Plan(
        tier=Tier.BASIC,
        name="Basic",
        entitlements=Entitlements(max_vehicles=5, max_requests_per_month=15),
        monthly_price=1000,
    ),
    Tier.PREMIUM: Plan(
        tier=Tier.PREMIUM,
        name="Premium",
        entitlements=Entitlements(max_vehicles=UNLIMITED, max_requests_per_month=UNLIMITED),
        monthly_price=2500,
    ),
})


def is_unlimited(limit) -> bool:
    return limit is UNLIMITED


def parse_tier(tier: "Tier | str") -> Tier:
    """Normalize a Tier or its (case-insensitive) name to a Tier."""
    if isinstance(tier, Tier):
        return tier
    if isinstance(tier, str):
        try:
            return Tier(tier.strip().lower())
        except ValueError:
            pass
    raise UnknownTierError(tier)


def plan_for(tier: "Tier | str") -> Plan:
    return _PLANS[parse_tier(tier)]


def entitlements_for(tier: "Tier | str") -> Entitlements:
    return plan_for(tier).entitlements


def all_plans() -> list[Plan]:
    return [_PLANS[t] for t in Tier]


def limit_to_json(limit) -> int | None:
    """Serialize a limit for API payloads; None means unlimited."""
    return None if is_unlimited(limit) else limit
