from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from linkpreview.app.constants import NOT_FOUND_ERROR
from linkpreview.app.domain.models import ExtractedMetadata, MetadataRecord


class MetadataRecordPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    title: str
    description: str | None = None
    image: str
    site_name: str = Field(alias="siteName")
    hostname: str

    @classmethod
    def from_record(cls, record: MetadataRecord) -> "MetadataRecordPayload":
        return cls(
            url=record.url,
            title=record.title,
            description=record.description,
            image=record.image,
            site_name=record.site_name,
            hostname=record.hostname,
        )


class MetadataGetSuccessResponse(BaseModel):
    metadata: MetadataRecordPayload


class MetadataNotFoundResponse(BaseModel):
    metadata: None = None
    error: str = NOT_FOUND_ERROR


class ErrorResponse(BaseModel):
    error: str


class OpenGraphPayload(BaseModel):
    title: str | None = None
    description: str | None = None
    image: str | None = None
    site_name: str | None = None
    type: str | None = None
    url: str | None = None


class MetaTagsPayload(BaseModel):
    title: str | None = None
    description: str | None = None
    image: str | None = None
    url: str | None = None


class ImagePayload(BaseModel):
    url: str


class ExtractedMetadataPayload(BaseModel):
    og: OpenGraphPayload
    meta: MetaTagsPayload
    images: list[ImagePayload]

    @classmethod
    def from_extracted(cls, extracted: ExtractedMetadata) -> "ExtractedMetadataPayload":
        og, meta = extracted.og, extracted.meta
        return cls(
            og=OpenGraphPayload(
                title=og.title,
                description=og.description,
                image=og.image,
                site_name=og.site_name,
                type=og.type,
                url=og.url,
            ),
            meta=MetaTagsPayload(
                title=meta.title,
                description=meta.description,
                image=meta.image,
                url=meta.url,
            ),
            images=[ImagePayload(url=image.url) for image in extracted.images],
        )


class RawMetadataResponse(BaseModel):
    metadata: ExtractedMetadataPayload | None = None
