import logging
import secrets

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.models.user import User

logger = logging.getLogger(__name__)


async def verify_api_key(x_api_key: str = Header(default="")) -> None:
    if not settings.api_key:
        return
    if x_api_key != settings.api_key:
        raise HTTPException(status_code=403, detail="Invalid or missing API key")


async def get_current_user(
    x_user_id: str = Header(default=""),
    db: AsyncSession = Depends(get_db),
) -> User:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    user = await db.get(User, x_user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return user


async def get_current_client(user: User = Depends(get_current_user)) -> User:
    if user.role != "client":
        raise HTTPException(status_code=403, detail="Only clients can perform this action")
    return user


async def get_current_mechanic(user: User = Depends(get_current_user)) -> User:
    if user.role != "mechanic":
        raise HTTPException(status_code=403, detail="Only mechanics can perform this action")
    return user


async def verify_billing_webhook(x_billing_token: str = Header(default="")) -> None:
    """Only the billing provider may report tier changes.

    Unlike the API key, an unset secret refuses every call.
    """
    configured = settings.billing_webhook_secret
    if not configured or not secrets.compare_digest(x_billing_token.strip().encode(), configured.strip().encode()):
        logger.warning("Billing webhook rejected: missing or invalid X-Billing-Token")
        raise HTTPException(status_code=403, detail="Invalid or missing billing token")
