"""Module: api."""

from fastapi import APIRouter

from vetrecords.api.routes.health import router as health_router
from vetrecords.api.routes.pets import router as pets_router
from vetrecords.api.routes.records import router as records_router
from vetrecords.api.routes.stats import router as stats_router

api_router = APIRouter()

# Operational endpoints first.
api_router.include_router(health_router, prefix="/health", tags=["health"])

# Domain endpoints consumed by the SPA.
api_router.include_router(pets_router, prefix="/pets", tags=["pets"])
# Record routes span /pets/{id}/records and /records/{id}.
api_router.include_router(records_router, tags=["records"])
api_router.include_router(stats_router, prefix="/stats", tags=["stats"])
