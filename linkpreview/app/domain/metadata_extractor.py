"""Metadata extractor: fetches a page over the HTTP port and parses its head tags.

Only successful (2xx) HTML responses are parsed. Anything else, including
timeouts and transport errors, yields None so callers can answer "not found"
rather than failing the request.
"""
from __future__ import annotations

from typing import Any
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from loguru import logger

from linkpreview.app.core import SERVICE_NAME
from linkpreview.app.domain.models import ExtractedMetadata, ImageRef, MetaTags, OpenGraphTags
from linkpreview.app.ports.http_client import (
    AbstractHttpClient,
    HttpClientError,
    HttpClientTimeoutError,
    RequestTimeout,
)

_OG_FIELDS = {
    "og:title": "title",
    "og:description": "description",
    "og:image": "image",
    "og:image:url": "image",
    "og:site_name": "site_name",
    "og:type": "type",
    "og:url": "url",
}

_HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def _content(tag: Any) -> str | None:
    if tag is None:
        return None
    value = tag.get("content")
    if value is None:
        return None
    value = " ".join(str(value).split())
    return value or None


def _resolve(base_url: str, ref: str | None) -> str | None:
    if not ref:
        return None
    ref = ref.strip()
    if not ref or ref.startswith("data:"):
        return None
    return urljoin(base_url, ref)


def _is_html(headers: Any) -> bool:
    content_type = str(headers.get("content-type", "") or "").lower()
    if not content_type:
        return True
    return any(kind in content_type for kind in _HTML_CONTENT_TYPES)


def parse_open_graph(soup: BeautifulSoup, base_url: str) -> OpenGraphTags:
    values: dict[str, str] = {}
    for tag in soup.find_all("meta"):
        key = str(tag.get("property") or tag.get("name") or "").strip().lower()
        target = _OG_FIELDS.get(key)
        if target is None or target in values:
            continue
        content = _content(tag)
        if content:
            values[target] = content
    if "image" in values:
        values["image"] = _resolve(base_url, values["image"]) or values["image"]
    return OpenGraphTags(**values)


def parse_meta_tags(soup: BeautifulSoup, base_url: str) -> MetaTags:
    title = None
    if soup.title is not None and soup.title.string:
        title = " ".join(soup.title.string.split()) or None
    if title is None:
        title = _content(soup.find("meta", attrs={"name": "title"}))

    image = _content(soup.find("meta", attrs={"name": "image"}))
    if image is None:
        image_link = soup.find("link", rel="image_src")
        image = image_link.get("href") if image_link is not None else None

    canonical = soup.find("link", rel="canonical")

    return MetaTags(
        title=title,
        description=_content(soup.find("meta", attrs={"name": "description"})),
        image=_resolve(base_url, image),
        url=_resolve(base_url, canonical.get("href")) if canonical is not None else None,
    )


def parse_images(soup: BeautifulSoup, base_url: str) -> tuple[ImageRef, ...]:
    seen: set[str] = set()
    images: list[ImageRef] = []
    for tag in soup.find_all("img"):
        src = _resolve(base_url, tag.get("src") or tag.get("data-src"))
        if src is None or src in seen:
            continue
        seen.add(src)
        images.append(ImageRef(url=src))
    return tuple(images)


def parse_metadata(html: str, base_url: str) -> ExtractedMetadata:
    """Parse Open Graph tags, generic meta tags and `<img>` sources from an HTML document."""
    soup = BeautifulSoup(html, "html.parser")
    return ExtractedMetadata(
        og=parse_open_graph(soup, base_url),
        meta=parse_meta_tags(soup, base_url),
        images=parse_images(soup, base_url),
    )


class HtmlMetadataExtractor:
    """Extracts page metadata using an injectable AbstractHttpClient."""

    def __init__(
        self,
        client: AbstractHttpClient,
        connect_timeout_seconds: float,
        read_timeout_seconds: float,
        *,
        default_headers: dict[str, str] | None = None,
    ) -> None:
        self._client = client
        self._timeout = RequestTimeout(
            connect_seconds=connect_timeout_seconds,
            read_seconds=read_timeout_seconds,
        )
        self._default_headers = dict(default_headers) if default_headers else {}

    async def extract(self, url: str) -> ExtractedMetadata | None:
        try:
            response = await self._client.get(
                url,
                timeout=self._timeout,
                follow_redirects=True,
                headers=self._default_headers or None,
            )
            response.raise_for_status()
        except HttpClientTimeoutError as exc:
            _log("extract_timeout", url=url, error=str(exc))
            return None
        except HttpClientError as exc:
            _log("extract_fetch_failed", url=url, error=str(exc))
            return None

        if not _is_html(response.headers):
            _log("extract_skipped_non_html", url=url, content_type=response.headers.get("content-type"))
            return None

        final_url = str(response.url or url)
        logger.debug("fetched {} -> {} ({})", url, final_url, response.status_code)
        return parse_metadata(response.text, final_url)
