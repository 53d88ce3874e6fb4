import os
import uuid

import pytest
import pytest_asyncio

# Must be set before app.config is imported anywhere.
_TEST_DB_PATH = "./data/test_db.sqlite3"
BILLING_SECRET = "test-billing-secret"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_PATH}"


@pytest.fixture(autouse=True, scope="session")
def setup_test_db():
    import asyncio

    if os.path.exists(_TEST_DB_PATH):
        os.remove(_TEST_DB_PATH)

    # Disable API key auth for tests
    from app.config import settings
    settings.api_key = ""
    settings.billing_webhook_secret = BILLING_SECRET

    from app.database import create_tables, async_session
    from app.seed import seed_data

    async def _setup():
        await create_tables()
        async with async_session() as session:
            await seed_data(session)

    asyncio.run(_setup())


def unique_email(prefix: str = "user") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}@example.com"


async def register_user(client, role: str = "client") -> dict:
    """Register a fresh user through the API and return its payload."""
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": unique_email(role), "name": f"Test {role}", "password": "secret123", "role": role},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def auth_headers(user: dict) -> dict:
    return {"X-User-Id": user["id"]}


def billing_headers() -> dict:
    return {"X-Billing-Token": BILLING_SECRET}


@pytest_asyncio.fixture
async def db_session():
    """Isolated in-memory database for model and service tests."""
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from app.database import Base
    import app.models  # noqa: F401

    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session
    await engine.dispose()
