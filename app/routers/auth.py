import logging
import uuid

import bcrypt
from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.schemas.auth import LoginRequest, RegisterRequest, UserResponse
from app.services.subscriptions import start_free_subscription
from app.utils.exceptions import AppException
from app.utils.response import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _normalize_email(email: str) -> str:
    return email.strip().lower()


@router.post("/register", status_code=201)
async def register(request: RegisterRequest, db: AsyncSession = Depends(get_db)):
    email = _normalize_email(request.email)
    result = await db.execute(select(User).where(User.email == email))
    if result.scalars().first() is not None:
        raise AppException("Email already registered", status_code=409)

    user = User(
        id=str(uuid.uuid4()),
        email=email,
        name=request.name,
        role=request.role,
        password_hash=bcrypt.hashpw(request.password.encode(), bcrypt.gensalt()).decode(),
    )
    db.add(user)
    await db.flush()
    await start_free_subscription(db, user.id)
    await db.commit()

    logger.info("Registered %s %s", user.role, user.id)
    return success_response(data=UserResponse.model_validate(user).model_dump())


@router.post("/login")
async def login(request: LoginRequest, db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(User).where(User.email == _normalize_email(request.email)))
    user = result.scalars().first()

    if user is None:
        raise AppException("Invalid credentials", status_code=400)

    if not bcrypt.checkpw(request.password.encode(), user.password_hash.encode()):
        raise AppException("Invalid credentials", status_code=400)

    return success_response(data=UserResponse.model_validate(user).model_dump())
