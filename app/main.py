import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import create_tables, async_session
from app.dependencies import verify_api_key
from app.seed import seed_data
from app.routers.auth import router as auth_router
from app.routers.plans import router as plans_router
from app.routers.service_requests import router as service_requests_router
from app.routers.subscriptions import router as subscriptions_router
from app.routers.vehicles import router as vehicles_router
from app.utils.exceptions import register_exception_handlers
from app.utils.response import success_response

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    async with async_session() as session:
        await seed_data(session)
    logger.info("Mechanic marketplace API ready")
    yield


app = FastAPI(
    title="Mechanic Marketplace API",
    description="Plans, usage limits and service requests for vehicle owners and mechanics",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

_api_key_dep = [Depends(verify_api_key)]

app.include_router(auth_router, prefix="/api/v1", dependencies=_api_key_dep)
app.include_router(plans_router, prefix="/api/v1", dependencies=_api_key_dep)
app.include_router(subscriptions_router, prefix="/api/v1", dependencies=_api_key_dep)
app.include_router(vehicles_router, prefix="/api/v1", dependencies=_api_key_dep)
app.include_router(service_requests_router, prefix="/api/v1", dependencies=_api_key_dep)


@app.get("/health")
async def health_check():
    return success_response(data={"service": "mechanic-marketplace-api", "version": app.version})
