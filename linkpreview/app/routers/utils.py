from __future__ import annotations

from urllib.parse import urlparse

from fastapi import Request, Response
from pydantic import BaseModel

from linkpreview.app.constants import DEFAULT_SERVER_URL, PLACEHOLDER_IMAGE_NAME, URL_PATTERN

READINESS_PING_TIMEOUT_DEFAULT = 5.0
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


def readiness_ping_timeout_seconds(request: Request) -> float:
    """Read readiness DB ping timeout from app.state.settings or default."""
    settings = getattr(request.app.state, "settings", None)
    if settings is not None:
        return getattr(settings, "readiness_ping_timeout_seconds", READINESS_PING_TIMEOUT_DEFAULT)
    return READINESS_PING_TIMEOUT_DEFAULT


def placeholder_image_url(request: Request) -> str:
    """Placeholder image URL from app.state.settings, or the default server URL."""
    settings = getattr(request.app.state, "settings", None)
    if settings is not None:
        return settings.placeholder_image_url
    return f"{DEFAULT_SERVER_URL}/{PLACEHOLDER_IMAGE_NAME}"


def normalize_url(raw: str | None) -> str | None:
    """Strip the input and prepend http:// when no scheme separator is present. None if empty."""
    if raw is None:
        return None
    url = raw.strip()
    if not url:
        return None
    if "://" not in url:
        url = "http://" + url
    return url


def url_hostname(url: str) -> str | None:
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return None
    return hostname or None


def is_valid_url(url: str) -> bool:
    if not URL_PATTERN.search(url):
        return False
    return url_hostname(url) is not None


def json_response(payload: BaseModel, *, status_code: int = 200) -> Response:
    """JSON response with the permissive CORS header every metadata endpoint sends."""
    return Response(
        status_code=status_code,
        media_type="application/json",
        content=payload.model_dump_json(by_alias=True),
        headers=dict(CORS_HEADERS),
    )


__all__ = [
    "readiness_ping_timeout_seconds",
    "placeholder_image_url",
    "normalize_url",
    "url_hostname",
    "is_valid_url",
    "json_response",
]
