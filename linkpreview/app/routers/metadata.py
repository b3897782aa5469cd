from __future__ import annotations

from typing import Any

from fastapi import APIRouter, BackgroundTasks, Request, Response
from loguru import logger

from linkpreview.app.constants import INTERNAL_ERROR, INVALID_URL_ERROR
from linkpreview.app.core import SERVICE_NAME
from linkpreview.app.routers.utils import (
    is_valid_url,
    json_response,
    normalize_url,
    placeholder_image_url,
    url_hostname,
)
from linkpreview.app.schemas.metadata import (
    ErrorResponse,
    ExtractedMetadataPayload,
    MetadataGetSuccessResponse,
    MetadataNotFoundResponse,
    MetadataRecordPayload,
    RawMetadataResponse,
)
from linkpreview.app.services.resolve_metadata import persist_record, resolve_metadata


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


metadata_router = APIRouter(tags=["Metadata"])


@metadata_router.get(
    "/",
    summary="Raw page metadata",
    description="Fetches the page and returns the raw extraction result (Open Graph tags, meta tags, images). No validation and no caching; `metadata` is null when nothing could be extracted.",
    responses={200: {"description": "Extraction result, or null metadata."}},
)
async def get_raw_metadata(request: Request, url: str | None = None) -> Response:
    extractor = getattr(request.app.state, "metadata_extractor", None)
    if not url or extractor is None:
        return json_response(RawMetadataResponse(metadata=None))

    try:
        extracted = await extractor.extract(url)
    except Exception:
        logger.exception("raw metadata extraction failed for {}", url)
        extracted = None

    payload = ExtractedMetadataPayload.from_extracted(extracted) if extracted is not None else None
    return json_response(RawMetadataResponse(metadata=payload))


@metadata_router.get(
    "/v2",
    summary="Link preview",
    description="Returns a normalized link preview (title, description, image, siteName, hostname). A URL without a scheme gets http:// prepended. Results are served from the cache when present; new results are cached after the response is sent.",
    responses={
        200: {"description": "Preview found (from cache or freshly extracted)."},
        400: {"description": "Missing or invalid URL query parameter."},
        404: {"description": "The page could not be fetched or is not HTML."},
        500: {"description": "Unexpected internal error."},
    },
)
async def get_metadata_v2(
    request: Request,
    background_tasks: BackgroundTasks,
    url: str | None = None,
) -> Response:
    try:
        normalized = normalize_url(url)
        if normalized is None or not is_valid_url(normalized):
            return json_response(ErrorResponse(error=INVALID_URL_ERROR), status_code=400)
        hostname = url_hostname(normalized) or ""

        extractor = getattr(request.app.state, "metadata_extractor", None)
        if extractor is None:
            raise RuntimeError("metadata_extractor_not_initialized")
        cache = getattr(request.app.state, "metadata_cache", None)

        outcome = await resolve_metadata(
            normalized,
            hostname,
            cache=cache,
            extractor=extractor,
            placeholder_image=placeholder_image_url(request),
        )
        if outcome.record is None:
            return json_response(MetadataNotFoundResponse(), status_code=404)

        if outcome.needs_persist and cache is not None:
            background_tasks.add_task(persist_record, cache, outcome.record)

        _log("metadata_resolved", url=normalized, cached=outcome.cached)
        return json_response(
            MetadataGetSuccessResponse(metadata=MetadataRecordPayload.from_record(outcome.record))
        )
    except Exception:
        logger.exception("metadata v2 failed for {}", url)
        return json_response(ErrorResponse(error=INTERNAL_ERROR), status_code=500)
