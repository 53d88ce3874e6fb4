from datetime import datetime

from pydantic import BaseModel


class BillingSyncRequest(BaseModel):
    user_id: str
    tier: str
    is_active: bool = True
    period_end: datetime | None = None


class SubscriptionResponse(BaseModel):
    id: str
    user_id: str
    tier: str
    is_active: bool
    period_end: str | None = None
    created_at: str

    model_config = {"from_attributes": True}
