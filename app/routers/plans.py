from fastapi import APIRouter

from app.config import settings
from app.services.plan_catalog import all_plans, limit_to_json
from app.utils.response import success_response

router = APIRouter(prefix="/plans", tags=["plans"])


@router.get("")
async def list_plans():
    data = [
        {
            "tier": plan.tier.value,
            "name": plan.name,
            "max_vehicles": limit_to_json(plan.max_vehicles),
            "max_requests_per_month": limit_to_json(plan.max_requests_per_month),
            "monthly_price": plan.monthly_price,
            "currency": settings.currency,
        }
        for plan in all_plans()
    ]
    return success_response(data=data)
