import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.services.plan_catalog import UnknownTierError
from app.services.request_lifecycle import InvalidTransitionError
from app.utils.response import error_response

logger = logging.getLogger(__name__)


class AppException(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code


class LimitExceededError(AppException):
    """A plan entitlement would be exceeded by the requested creation."""

    def __init__(self, resource: str, tier: str, limit: int):
        self.resource = resource
        self.tier = tier
        self.limit = limit
        super().__init__(
            f"Plan limit reached: the {tier} plan allows {limit} {resource}. "
            "Upgrade your plan to add more.",
            status_code=403,
        )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.message),
        )

    @app.exception_handler(InvalidTransitionError)
    async def invalid_transition_handler(request: Request, exc: InvalidTransitionError) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content=error_response(str(exc), data={"status": exc.current.value}),
        )

    @app.exception_handler(UnknownTierError)
    async def unknown_tier_handler(request: Request, exc: UnknownTierError) -> JSONResponse:
        logger.error("Plan catalog misconfiguration on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=500,
            content=error_response("Plan configuration error"),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=error_response("Internal server error"),
        )
