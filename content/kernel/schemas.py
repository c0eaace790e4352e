"""
Content Kernel — Payload Schemas

One pydantic model per section kind. These describe shape only; the
validator turns them into field-error lists and canonical payloads.

Wire names are camelCase (the store's JSON), attributes are snake_case with
aliases. Unknown keys are dropped. Optional fields accept null, which the
canonicaliser removes.

Media id fields are weak references: any string is accepted, existence is
not checked here.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    PlainValidator,
    StrictBool,
    StrictStr,
    TypeAdapter,
    ValidationError,
)
from pydantic_core import PydanticCustomError

from content.kernel.types import SectionKind

# ---------------------------------------------------------------------------
# Field types
# ---------------------------------------------------------------------------

_URL = TypeAdapter(AnyUrl)
_DATE = TypeAdapter(date | datetime)


def _check_url(value: str) -> str:
    # Keep the user's string; AnyUrl would normalise it.
    try:
        _URL.validate_python(value)
    except ValidationError:
        raise PydanticCustomError("url", "Invalid URL") from None
    return value


def _check_number(value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PydanticCustomError("number", "Expected a number")
    return value


def _check_date(value: str) -> str:
    try:
        _DATE.validate_python(value)
    except ValidationError:
        raise PydanticCustomError("date", "Expected an ISO date") from None
    return value


Url = Annotated[StrictStr, AfterValidator(_check_url)]
Number = Annotated[int | float, PlainValidator(_check_number)]
DateString = Annotated[StrictStr, AfterValidator(_check_date)]
NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]
MediaId = StrictStr


class Payload(BaseModel):
    """Base for all section payloads."""

    model_config = ConfigDict(extra="ignore", populate_by_name=False)


class Link(Payload):
    label: StrictStr
    href: Url


# ---------------------------------------------------------------------------
# HERO
# ---------------------------------------------------------------------------


class HeroPayload(Payload):
    title: NonEmptyStr
    subtitle: StrictStr | None = None
    background_media_id: MediaId | None = Field(None, alias="backgroundMediaId")
    cta: Link | None = None


# ---------------------------------------------------------------------------
# GALLERY
# ---------------------------------------------------------------------------


class GalleryItem(Payload):
    media_id: MediaId = Field(alias="mediaId")
    caption: StrictStr | None = None


class GalleryPayload(Payload):
    items: list[GalleryItem] = Field(min_length=1)
    autoplay: StrictBool | None = None


# ---------------------------------------------------------------------------
# FEATURED_MENU
# ---------------------------------------------------------------------------


class FeaturedMenuItem(Payload):
    title: StrictStr
    description: StrictStr | None = None
    price: Number | None = None
    media_id: MediaId | None = Field(None, alias="mediaId")


class FeaturedMenuPayload(Payload):
    items: list[FeaturedMenuItem] = Field(min_length=1)


# ---------------------------------------------------------------------------
# CTA
# ---------------------------------------------------------------------------


class CtaPayload(Payload):
    title: StrictStr
    description: StrictStr | None = None
    button: Link


# ---------------------------------------------------------------------------
# TESTIMONIALS
# ---------------------------------------------------------------------------


class Testimonial(Payload):
    name: StrictStr
    text: StrictStr
    avatar_media_id: MediaId | None = Field(None, alias="avatarMediaId")


class TestimonialsPayload(Payload):
    items: list[Testimonial] = Field(min_length=1)


# ---------------------------------------------------------------------------
# RICH_TEXT / BANNER
# ---------------------------------------------------------------------------


class RichTextPayload(Payload):
    html: NonEmptyStr


class BannerPayload(Payload):
    text: StrictStr
    media_id: MediaId | None = Field(None, alias="mediaId")
    href: Url | None = None


# ---------------------------------------------------------------------------
# RESERVATION_FORM
# ---------------------------------------------------------------------------


class ReservationFormPayload(Payload):
    title: StrictStr | None = None
    description: StrictStr | None = None
    time_slots: list[StrictStr] | None = Field(None, alias="timeSlots")
    max_party_size: Number | None = Field(None, alias="maxPartySize")


# ---------------------------------------------------------------------------
# SPECIAL_OFFERS
# ---------------------------------------------------------------------------


class Offer(Payload):
    id: StrictStr
    title: StrictStr
    description: StrictStr
    discount: Number | None = None
    valid_from: DateString = Field(alias="validFrom")
    valid_until: DateString = Field(alias="validUntil")
    image_url: StrictStr | None = Field(None, alias="imageUrl")


class SpecialOffersPayload(Payload):
    title: StrictStr | None = None
    subtitle: StrictStr | None = None
    offers: list[Offer] | None = None


# ---------------------------------------------------------------------------
# CONTACT_INFO
# ---------------------------------------------------------------------------


class OpeningHours(Payload):
    day: StrictStr
    time: StrictStr
    id_: StrictStr | None = Field(None, alias="_id")


class SocialLink(Payload):
    platform: StrictStr
    url: StrictStr | None = None
    id_: StrictStr | None = Field(None, alias="_id")


class ContactInfoPayload(Payload):
    title: StrictStr | None = None
    address: StrictStr | None = None
    phone: StrictStr | None = None
    email: StrictStr | None = None
    hours: list[OpeningHours] | None = None
    map_embed_url: StrictStr | None = Field(None, alias="mapEmbedUrl")
    social_links: list[SocialLink] | None = Field(None, alias="socialLinks")


# ---------------------------------------------------------------------------
# STATS
# ---------------------------------------------------------------------------


class Stat(Payload):
    icon: StrictStr
    value: Number
    label: StrictStr
    suffix: StrictStr | None = None
    prefix: StrictStr | None = None
    color: StrictStr | None = None


class StatsPayload(Payload):
    title: StrictStr | None = None
    subtitle: StrictStr | None = None
    stats: list[Stat] = Field(min_length=1)


# ---------------------------------------------------------------------------
# Kind → model
# ---------------------------------------------------------------------------

PAYLOAD_MODELS: dict[SectionKind, type[Payload]] = {
    SectionKind.HERO: HeroPayload,
    SectionKind.GALLERY: GalleryPayload,
    SectionKind.FEATURED_MENU: FeaturedMenuPayload,
    SectionKind.CTA: CtaPayload,
    SectionKind.TESTIMONIALS: TestimonialsPayload,
    SectionKind.RICH_TEXT: RichTextPayload,
    SectionKind.BANNER: BannerPayload,
    SectionKind.RESERVATION_FORM: ReservationFormPayload,
    SectionKind.SPECIAL_OFFERS: SpecialOffersPayload,
    SectionKind.CONTACT_INFO: ContactInfoPayload,
    SectionKind.STATS: StatsPayload,
}
