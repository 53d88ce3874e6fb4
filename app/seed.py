import uuid

import bcrypt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.subscriptions import start_free_subscription


SEED_CLIENT_ID = str(uuid.uuid5(uuid.NAMESPACE_DNS, "user-demo-client"))
SEED_CLIENT_EMAIL = "client@example.com"
SEED_MECHANIC_ID = str(uuid.uuid5(uuid.NAMESPACE_DNS, "user-demo-mechanic"))
SEED_MECHANIC_EMAIL = "mechanic@example.com"
SEED_PASSWORD = "demo1234"

SEED_USERS = [
    {"id": SEED_CLIENT_ID, "email": SEED_CLIENT_EMAIL, "name": "Demo Client", "role": "client"},
    {"id": SEED_MECHANIC_ID, "email": SEED_MECHANIC_EMAIL, "name": "Demo Mechanic", "role": "mechanic"},
]


async def seed_data(session: AsyncSession) -> None:
    result = await session.execute(select(User).limit(1))
    if result.scalars().first() is not None:
        return

    password_hash = bcrypt.hashpw(SEED_PASSWORD.encode(), bcrypt.gensalt()).decode()
    for u in SEED_USERS:
        session.add(User(password_hash=password_hash, **u))
    await session.flush()

    for u in SEED_USERS:
        await start_free_subscription(session, u["id"])

    await session.commit()
