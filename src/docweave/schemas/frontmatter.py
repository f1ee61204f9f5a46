"""Frontmatter schema and derived document metadata models."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Strict base: camelCase keys on input, unknown keys rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class MetaTags(_CamelModel):
    """SEO, Open Graph and Twitter card overrides."""

    fb_title: str | None = None
    fb_description: str | None = None
    fb_image: str | None = None
    fb_type: str | None = None
    fb_locale: str | None = None
    fb_site_name: str | None = None

    tw_title: str | None = None
    tw_description: str | None = None
    tw_image: str | None = None
    tw_author: str | None = None
    tw_card: str | None = None
    tw_site: str | None = None
    tw_creator: str | None = None

    keywords: list[str] | None = None
    canonical: str | None = None
    robots: str | None = None
    structured_data: dict[str, Any] | None = None


class CacheSpec(_CamelModel):
    """Per-document HTTP cache hints, forwarded to the serving layer."""

    expires_in: int | float | None = None
    expires_at: str | None = None
    privacy: str | None = None
    statuses: list[int] | None = None
    otherwise: str | None = None


class RedirectSpec(_CamelModel):
    to: str | int
    permanent: bool = False


class Frontmatter(_CamelModel):
    """Schema every file-backed document's frontmatter must satisfy.

    ``title`` and ``description`` are required and ``layout`` defaults to
    ``"main"``. ``published`` stays None unless set, so only an explicit
    ``false`` hides a document.
    """

    title: str
    description: str
    slug: str | None = None
    published: bool | None = None
    published_at: datetime | date | None = None
    excerpt: str | None = None
    sort: int | float | None = None
    tags: list[str] | None = None
    updated_at: datetime | date | None = None
    image: str | None = None
    layout: str = "main"
    author: str | None = None
    cache: CacheSpec | bool | None = None
    http_headers: dict[str, str] | None = None
    meta: MetaTags | None = None
    redirect: RedirectSpec | None = None

    @field_validator("image")
    @classmethod
    def _validate_image_uri(cls, value: str | None) -> str | None:
        if value is None:
            return value
        parsed = urlparse(value)
        if not parsed.scheme or not (parsed.netloc or parsed.path):
            raise ValueError("image must be a URI")
        return value


class DocumentMetadata(BaseModel):
    """Frontmatter enriched with derived routing and SEO fields.

    Unknown frontmatter keys are preserved as extra attributes.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    title: str | None = None
    description: str | None = None
    slug: str
    excerpt: str | None = None
    sort: int | float = 0
    published: bool | None = None
    published_at: datetime | None = None
    updated_at: datetime
    layout: str | None = None
    image: str | None = None
    author: str | None = None
    tags: list[str] = Field(default_factory=list)
    meta: dict[str, Any] = Field(default_factory=dict)
