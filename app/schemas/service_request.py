from pydantic import BaseModel, Field

from app.services.request_lifecycle import ServiceType


class ServiceRequestCreate(BaseModel):
    vehicle_id: str
    service_type: ServiceType
    description: str = Field(min_length=1)


class ServiceRequestResponse(BaseModel):
    id: str
    requester_id: str
    vehicle_id: str
    mechanic_id: str | None = None
    service_type: str
    description: str
    status: str
    created_at: str
    updated_at: str | None = None

    model_config = {"from_attributes": True}
