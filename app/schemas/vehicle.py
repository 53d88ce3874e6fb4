from pydantic import BaseModel, Field


class VehicleCreate(BaseModel):
    brand: str = Field(min_length=1)
    model: str = Field(min_length=1)
    year: int = Field(ge=1900, le=2100)
    plate: str = Field(min_length=1)
    color: str | None = None


class VehicleResponse(BaseModel):
    id: str
    owner_id: str
    brand: str
    model: str
    year: int
    plate: str
    color: str | None = None

    model_config = {"from_attributes": True}
