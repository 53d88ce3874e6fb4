import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_current_client
from app.models.user import User
from app.models.vehicle import Vehicle
from app.schemas.vehicle import VehicleCreate, VehicleResponse
from app.services.plan_catalog import entitlements_for
from app.services.usage import get_usage
from app.utils.exceptions import LimitExceededError
from app.utils.response import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.get("")
async def get_vehicles(
    user: User = Depends(get_current_client),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(Vehicle).where(Vehicle.owner_id == user.id))
    vehicles = result.scalars().all()
    data = [VehicleResponse.model_validate(v).model_dump() for v in vehicles]
    return success_response(data=data)


@router.post("", status_code=201)
async def create_vehicle(
    payload: VehicleCreate,
    user: User = Depends(get_current_client),
    db: AsyncSession = Depends(get_db),
):
    usage = await get_usage(db, user.id)
    if not usage.can_add_vehicle:
        logger.warning("Vehicle limit reached for user %s (tier=%s)", user.id, usage.tier.value)
        raise LimitExceededError(
            "vehicle(s)", usage.tier.value, entitlements_for(usage.tier).max_vehicles
        )

    vehicle = Vehicle(
        id=str(uuid.uuid4()),
        owner_id=user.id,
        brand=payload.brand,
        model=payload.model,
        year=payload.year,
        plate=payload.plate.strip().upper(),
        color=payload.color,
    )
    db.add(vehicle)
    await db.commit()
    await db.refresh(vehicle)

    return success_response(data=VehicleResponse.model_validate(vehicle).model_dump())


@router.delete("/{vehicle_id}")
async def delete_vehicle(
    vehicle_id: str,
    user: User = Depends(get_current_client),
    db: AsyncSession = Depends(get_db),
):
    vehicle = await db.get(Vehicle, vehicle_id)
    if not vehicle or vehicle.owner_id != user.id:
        raise HTTPException(status_code=404, detail="Vehicle not found")

    await db.delete(vehicle)
    await db.commit()
    return success_response(data={"id": vehicle_id}, message="Vehicle deleted")
