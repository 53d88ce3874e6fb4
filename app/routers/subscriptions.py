from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_current_user, verify_billing_webhook
from app.models.user import User
from app.schemas.subscription import BillingSyncRequest, SubscriptionResponse
from app.services.plan_catalog import UnknownTierError
from app.services.subscriptions import apply_billing_update
from app.services.usage import get_usage
from app.utils.response import success_response

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.get("/me")
async def get_my_subscription(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    usage = await get_usage(db, user.id)

    data = usage.to_dict()
    data["subscription"] = (
        SubscriptionResponse.model_validate(usage.subscription).model_dump()
        if usage.subscription else None
    )
    return success_response(data=data)


@router.post("/billing-sync", dependencies=[Depends(verify_billing_webhook)])
async def billing_sync(payload: BillingSyncRequest, db: AsyncSession = Depends(get_db)):
    """Tier change or cancellation reported by the billing provider."""
    user = await db.get(User, payload.user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    try:
        subscription = await apply_billing_update(
            db,
            user.id,
            payload.tier,
            is_active=payload.is_active,
            period_end=payload.period_end,
        )
    except UnknownTierError as e:
        raise HTTPException(status_code=422, detail=str(e))

    await db.commit()
    await db.refresh(subscription)
    return success_response(data=SubscriptionResponse.model_validate(subscription).model_dump())
