from sqlalchemy import Column, String, ForeignKey

from app.database import Base


class ServiceRequest(Base):
    __tablename__ = "service_requests"

    id = Column(String, primary_key=True)
    requester_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    # No FK: vehicles can be deleted, requests are kept.
    vehicle_id = Column(String, nullable=False)
    mechanic_id = Column(String, ForeignKey("users.id"), nullable=True)
    service_type = Column(String, nullable=False)
    description = Column(String, nullable=False)
    status = Column(String, nullable=False, default="pending")
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=True)
