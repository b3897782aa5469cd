import asyncio

from typing import Any
from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from loguru import logger

from linkpreview.app.constants import CacheStatus
from linkpreview.app.core import SERVICE_NAME
from linkpreview.app.routers.utils import readiness_ping_timeout_seconds

health_router = APIRouter(tags=["Health"])


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


async def _cache_status(request: Request) -> str:
    cache = getattr(request.app.state, "metadata_cache", None)
    if cache is None or not cache.enabled:
        return CacheStatus.DISABLED
    database = getattr(request.app.state, "database", None)
    if database is None:
        return CacheStatus.OK

    timeout_s = readiness_ping_timeout_seconds(request)
    try:
        ping_ok = await asyncio.wait_for(database.ping(), timeout=timeout_s)
    except asyncio.TimeoutError:
        _log("db_ping_timeout")
        return CacheStatus.DEGRADED
    if not ping_ok:
        _log("db_not_ready")
        return CacheStatus.DEGRADED
    return CacheStatus.OK


@health_router.get(
    "/health/live",
    summary="Liveness probe",
    description="Returns 200 if the API process is running.",
    responses={200: {"description": "Service is alive."}},
)
async def live() -> dict:
    return {"status": "ok"}


@health_router.get(
    "/health/ready",
    summary="Readiness probe",
    description="Returns 200 when the metadata extractor is wired. The cache is advisory, so a degraded or disabled cache is reported but does not fail readiness.",
    responses={
        200: {"description": "Ready; body reports cache status (ok, degraded, disabled)."},
        503: {"description": "Extractor not initialized."},
    },
)
async def ready(request: Request) -> Response:
    extractor = getattr(request.app.state, "metadata_extractor", None)
    if extractor is None:
        _log("components_not_initialized")
        return Response(status_code=503, content="Not ready")

    cache_status = await _cache_status(request)
    return JSONResponse(status_code=200, content={"status": "ok", "cache": cache_status})
