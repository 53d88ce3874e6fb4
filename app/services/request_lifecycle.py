"""Status state machine for service requests.

    pending --accept--> accepted --start--> in_progress --complete--> completed
    pending --reject--> rejected

completed and rejected are terminal. A refused transition raises
InvalidTransitionError and leaves the request untouched.
"""
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ServiceStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    REJECTED = "rejected"


class ServiceType(str, Enum):
    INSPECTION = "inspection"
    OIL_CHANGE = "oil_change"
    BRAKES = "brakes"
    SUSPENSION = "suspension"
    ENGINE = "engine"
    TRANSMISSION = "transmission"
    AIR_CONDITIONING = "air_conditioning"
    ELECTRICAL = "electrical"
    TIRES = "tires"
    OTHER = "other"


class InvalidTransitionError(Exception):
    def __init__(self, action: str, current: ServiceStatus):
        self.action = action
        self.current = current
        super().__init__(f"Cannot {action} a request that is {current.value}")


# action -> (required source status, target status)
TRANSITIONS: dict[str, tuple[ServiceStatus, ServiceStatus]] = {
    "accept": (ServiceStatus.PENDING, ServiceStatus.ACCEPTED),
    "reject": (ServiceStatus.PENDING, ServiceStatus.REJECTED),
    "start": (ServiceStatus.ACCEPTED, ServiceStatus.IN_PROGRESS),
    "complete": (ServiceStatus.IN_PROGRESS, ServiceStatus.COMPLETED),
}

TERMINAL_STATUSES = frozenset({ServiceStatus.COMPLETED, ServiceStatus.REJECTED})

# Older rows carry the Portuguese vocabulary or "cancelled".
_STATUS_ALIASES: dict[str, ServiceStatus] = {
    "pendente": ServiceStatus.PENDING,
    "aceita": ServiceStatus.ACCEPTED,
    "em_andamento": ServiceStatus.IN_PROGRESS,
    "concluida": ServiceStatus.COMPLETED,
    "concluido": ServiceStatus.COMPLETED,
    "rejeitada": ServiceStatus.REJECTED,
    "cancelled": ServiceStatus.REJECTED,
    "cancelado": ServiceStatus.REJECTED,
}


def parse_status(value: "ServiceStatus | str") -> ServiceStatus:
    if isinstance(value, ServiceStatus):
        return value
    key = str(value).strip().lower()
    try:
        return ServiceStatus(key)
    except ValueError:
        pass
    if key in _STATUS_ALIASES:
        return _STATUS_ALIASES[key]
    raise ValueError(f"Unknown service status: {value!r}")


def is_terminal(status: "ServiceStatus | str") -> bool:
    return parse_status(status) in TERMINAL_STATUSES


def allowed_actions(status: "ServiceStatus | str") -> list[str]:
    current = parse_status(status)
    return [action for action, (source, _) in TRANSITIONS.items() if source == current]


def next_status(action: str, status: "ServiceStatus | str") -> ServiceStatus:
    """Target status of `action` from `status`, or InvalidTransitionError."""
    if action not in TRANSITIONS:
        raise ValueError(f"Unknown action: {action!r}")
    current = parse_status(status)
    source, target = TRANSITIONS[action]
    if current != source:
        raise InvalidTransitionError(action, current)
    return target


def transition(request, action: str) -> ServiceStatus:
    """Apply `action` to any object exposing a `status` attribute."""
    target = next_status(action, request.status)
    logger.info("Service request %s: %s -> %s", getattr(request, "id", "?"), request.status, target.value)
    request.status = target.value
    return target


def accept(request) -> ServiceStatus:
    return transition(request, "accept")


def reject(request) -> ServiceStatus:
    return transition(request, "reject")


def start(request) -> ServiceStatus:
    return transition(request, "start")


def complete(request) -> ServiceStatus:
    return transition(request, "complete")
