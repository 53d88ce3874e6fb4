import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_current_client, get_current_mechanic, get_current_user
from app.models.service_request import ServiceRequest
from app.models.user import User
from app.models.vehicle import Vehicle
from app.schemas.service_request import ServiceRequestCreate, ServiceRequestResponse
from app.services import request_lifecycle
from app.services.plan_catalog import entitlements_for
from app.services.request_lifecycle import ServiceStatus
from app.services.usage import get_usage
from app.utils.exceptions import LimitExceededError
from app.utils.response import success_response
from app.utils.timeutils import to_iso, utc_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/service-requests", tags=["service-requests"])

# Actions any mechanic may take on a request nobody has picked up yet.
POOL_ACTIONS = {"accept", "reject"}

_PENDING_VALUES = [ServiceStatus.PENDING.value, "pendente"]


def _serialize(request: ServiceRequest) -> dict:
    data = ServiceRequestResponse.model_validate(request).model_dump()
    status = request_lifecycle.parse_status(request.status)
    data["status"] = status.value
    data["allowed_actions"] = request_lifecycle.allowed_actions(status)
    return data


async def _get_request_or_404(db: AsyncSession, request_id: str) -> ServiceRequest:
    service_request = await db.get(ServiceRequest, request_id)
    if not service_request:
        raise HTTPException(status_code=404, detail="Service request not found")
    return service_request


@router.post("", status_code=201)
async def create_service_request(
    payload: ServiceRequestCreate,
    user: User = Depends(get_current_client),
    db: AsyncSession = Depends(get_db),
):
    vehicle = await db.get(Vehicle, payload.vehicle_id)
    if not vehicle or vehicle.owner_id != user.id:
        raise HTTPException(status_code=404, detail="Vehicle not found")

    now = utc_now()
    usage = await get_usage(db, user.id, now)
    if not usage.can_add_service_request:
        logger.warning("Monthly request limit reached for user %s (tier=%s)", user.id, usage.tier.value)
        raise LimitExceededError(
            "service request(s) per month",
            usage.tier.value,
            entitlements_for(usage.tier).max_requests_per_month,
        )

    service_request = ServiceRequest(
        id=str(uuid.uuid4()),
        requester_id=user.id,
        vehicle_id=vehicle.id,
        service_type=payload.service_type.value,
        description=payload.description,
        status=ServiceStatus.PENDING.value,
        created_at=to_iso(now),
    )
    db.add(service_request)
    await db.commit()
    await db.refresh(service_request)

    return success_response(data=_serialize(service_request))


@router.get("")
async def list_service_requests(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    query = select(ServiceRequest).order_by(ServiceRequest.created_at.desc())
    if user.role == "mechanic":
        query = query.where(
            or_(
                ServiceRequest.mechanic_id == user.id,
                ServiceRequest.mechanic_id.is_(None) & ServiceRequest.status.in_(_PENDING_VALUES),
            )
        )
    else:
        query = query.where(ServiceRequest.requester_id == user.id)

    result = await db.execute(query)
    return success_response(data=[_serialize(r) for r in result.scalars().all()])


@router.get("/{request_id}")
async def get_service_request(
    request_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    service_request = await _get_request_or_404(db, request_id)
    visible = (
        service_request.requester_id == user.id
        or (user.role == "mechanic" and service_request.mechanic_id in (None, user.id))
    )
    if not visible:
        raise HTTPException(status_code=404, detail="Service request not found")
    return success_response(data=_serialize(service_request))


@router.post("/{request_id}/{action}")
async def transition_service_request(
    request_id: str,
    action: str,
    mechanic: User = Depends(get_current_mechanic),
    db: AsyncSession = Depends(get_db),
):
    if action not in request_lifecycle.TRANSITIONS:
        raise HTTPException(status_code=404, detail=f"Unknown action: {action}")

    service_request = await _get_request_or_404(db, request_id)

    assigned = service_request.mechanic_id
    if assigned is not None and assigned != mechanic.id:
        raise HTTPException(status_code=403, detail="Request is assigned to another mechanic")

    # Raises InvalidTransitionError (409) before anything is written.
    request_lifecycle.next_status(action, service_request.status)
    if assigned is None and action not in POOL_ACTIONS:
        raise HTTPException(status_code=403, detail="Request is not assigned to you")

    request_lifecycle.transition(service_request, action)
    if action == "accept":
        service_request.mechanic_id = mechanic.id
    service_request.updated_at = to_iso(utc_now())

    await db.commit()
    await db.refresh(service_request)
    return success_response(data=_serialize(service_request))
