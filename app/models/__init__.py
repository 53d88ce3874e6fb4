from app.models.user import User
from app.models.subscription import Subscription
from app.models.vehicle import Vehicle
from app.models.service_request import ServiceRequest

__all__ = ["User", "Subscription", "Vehicle", "ServiceRequest"]
