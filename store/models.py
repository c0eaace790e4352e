"""Request and response models for the development Section Store."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from content.kernel.types import MediaAsset, Page, Section


class CreateSectionRequest(BaseModel):
    """What the admin sends to POST /pages/{slug}/sections."""

    model_config = {"extra": "forbid"}

    kind: str = Field(min_length=1)
    data: Any
    order: int | None = Field(None, ge=1)


class UpdateSectionRequest(BaseModel):
    """What the admin sends to PUT /sections/{id}. Omitted fields are left untouched."""

    model_config = {"extra": "ignore"}

    data: Any = None
    order: int | None = Field(None, ge=1)


class SectionResponse(BaseModel):
    id: str
    kind: str
    order: int
    data: Any

    @classmethod
    def from_model(cls, section: Section) -> SectionResponse:
        return cls(id=section.id, kind=section.kind, order=section.order, data=section.data)


class PageResponse(BaseModel):
    slug: str
    title: str
    sections: list[SectionResponse]

    @classmethod
    def from_model(cls, page: Page) -> PageResponse:
        return cls(
            slug=page.slug,
            title=page.title,
            sections=[SectionResponse.from_model(s) for s in page.sections],
        )


class MediaResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    url: str
    alt: str | None = None
    mime_type: str | None = Field(None, alias="mimeType")

    @classmethod
    def from_model(cls, asset: MediaAsset) -> MediaResponse:
        return cls(id=asset.id, url=asset.url, alt=asset.alt, mime_type=asset.mime_type)


class OkResponse(BaseModel):
    ok: bool = True
