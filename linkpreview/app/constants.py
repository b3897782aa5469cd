"""API-level constants shared across modules."""
from __future__ import annotations

import re


class CacheBackend:
    MONGO = "mongo"
    INMEMORY = "inmemory"
    NONE = "none"


class CacheStatus:
    OK = "ok"
    DEGRADED = "degraded"
    DISABLED = "disabled"


INVALID_URL_ERROR = "Invalid URL"
NOT_FOUND_ERROR = "No metadata found"
INTERNAL_ERROR = "Internal server error. Please open an issue if the problem persists."

PLACEHOLDER_IMAGE_NAME = "img-placeholder.jpg"
DEFAULT_SERVER_URL = "http://localhost:8080"

# Permissive URL shape: host-like text followed by a 2-6 letter TLD.
URL_PATTERN = re.compile(
    r"[a-zA-Z0-9@:%._+~#=()?/]{2,256}\.[a-z]{2,6}\b([-a-zA-Z0-9@:%_+.~#?&/=]*)",
    re.IGNORECASE,
)
