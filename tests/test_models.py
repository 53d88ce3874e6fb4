import pytest

from app.models.service_request import ServiceRequest
from app.models.subscription import Subscription
from app.models.user import User
from app.models.vehicle import Vehicle


@pytest.mark.asyncio
async def test_create_user(db_session):
    user = User(id="u-001", email="ana@example.com", name="Ana", role="client", password_hash="hashed")
    db_session.add(user)
    await db_session.commit()

    result = await db_session.get(User, "u-001")
    assert result is not None
    assert result.email == "ana@example.com"
    assert result.role == "client"


@pytest.mark.asyncio
async def test_create_vehicle(db_session):
    vehicle = Vehicle(
        id="v-001", owner_id="u-001", brand="Fiat", model="Uno",
        year=2012, plate="ABC1D23", color="red",
    )
    db_session.add(vehicle)
    await db_session.commit()

    result = await db_session.get(Vehicle, "v-001")
    assert result is not None
    assert result.brand == "Fiat"
    assert result.year == 2012
    assert result.owner_id == "u-001"


@pytest.mark.asyncio
async def test_create_subscription_defaults(db_session):
    subscription = Subscription(id="s-001", user_id="u-001", created_at="2026-10-01T09:00:00")
    db_session.add(subscription)
    await db_session.commit()

    result = await db_session.get(Subscription, "s-001")
    assert result.tier == "free"
    assert result.is_active is True
    assert result.period_end is None


@pytest.mark.asyncio
async def test_create_service_request_defaults(db_session):
    request = ServiceRequest(
        id="sr-001", requester_id="u-001", vehicle_id="v-001",
        service_type="brakes", description="Squeaking brakes",
        created_at="2026-10-19T10:00:00",
    )
    db_session.add(request)
    await db_session.commit()

    result = await db_session.get(ServiceRequest, "sr-001")
    assert result.status == "pending"
    assert result.mechanic_id is None
