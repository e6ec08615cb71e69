import enum
import logging

from fastapi import Request

from app.core.errors import ServiceUnavailableError

logger = logging.getLogger(__name__)


class ServiceState(str, enum.Enum):
    INITIALIZING = "Initializing"
    READY = "Ready"
    FAILED = "Failed"


def get_service_state(request: Request) -> ServiceState:
    return getattr(request.app.state, "service_state", ServiceState.INITIALIZING)


def require_ready(request: Request) -> None:
    """
    Dependency that rejects requests until the schema has been initialized.
    """
    state = get_service_state(request)
    if state is not ServiceState.READY:
        logger.warning(f"Rejecting {request.method} {request.url.path}: service is {state.value}")
        raise ServiceUnavailableError("Database not available")
