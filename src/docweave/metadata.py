"""Document metadata derived from cached frontmatter."""

from __future__ import annotations

import logging
import posixpath
from datetime import date, datetime, timezone
from typing import Any, Mapping

from pydantic import ValidationError

from docweave.config import DOCWEAVE_SITE_NAME, DOCWEAVE_TWITTER_HANDLE
from docweave.exceptions import FrontmatterValidationError, MissingFrontmatterError
from docweave.frontmatter import FrontmatterStore
from docweave.schemas import DocumentMetadata, Frontmatter

logger = logging.getLogger(__name__)

DOCS_URL_PREFIX = "/docs"


def as_datetime(value: Any) -> datetime | None:
    """Coerce YAML dates, datetimes and ISO strings to aware UTC datetimes."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


def make_slug(md_file: str, slug: str | None = None) -> str:
    """Derive the URL path of a document from its relative file name.

    A frontmatter ``slug`` replaces only the file's base name.
    """
    path = md_file.replace(".md", "", 1)
    if slug:
        path = posixpath.join(posixpath.dirname(md_file), slug)
    return posixpath.join(DOCS_URL_PREFIX, path)


def build_meta_tags(frontmatter: Mapping[str, Any]) -> dict[str, Any]:
    """Fill Open Graph, Twitter and SEO tags from the document's own fields."""
    meta = dict(frontmatter.get("meta") or {})
    title = frontmatter.get("title")
    description = frontmatter.get("description")
    image = frontmatter.get("image")

    defaults: dict[str, Any] = {
        "fbTitle": title,
        "fbDescription": description,
        "fbImage": image,
        "fbType": "website",
        "fbLocale": "en_US",
        "fbSiteName": DOCWEAVE_SITE_NAME,
        "twTitle": title,
        "twDescription": description,
        "twImage": image,
        "twAuthor": frontmatter.get("author"),
        "twCard": "summary_large_image",
        "twSite": DOCWEAVE_SITE_NAME,
        "twCreator": DOCWEAVE_TWITTER_HANDLE,
        "keywords": [],
        "canonical": frontmatter.get("slug"),
        "robots": "index, follow",
    }
    for key, default in defaults.items():
        if not meta.get(key):
            meta[key] = default
    return meta


def get_markdown_metadata(
    store: FrontmatterStore,
    *,
    content: str,
    md_file: str,
    mtime: datetime,
    external: bool = False,
) -> DocumentMetadata:
    """Return validated, enriched metadata for an already rendered document.

    Args:
        store: Frontmatter cache populated by a previous render of ``content``.
        content: Full document text, used only as the cache key.
        md_file: Document path relative to the docs root.
        mtime: Last modification time of the source.
        external: Skip schema validation for content that is not a docs file.

    Raises:
        MissingFrontmatterError: If no frontmatter was cached for ``content``.
        FrontmatterValidationError: If the frontmatter fails the schema.
    """
    record = store.get(content)
    if not record:
        raise MissingFrontmatterError(f"No frontmatter found in {md_file}", source=md_file)

    frontmatter: dict[str, Any] = dict(record)
    if not external:
        try:
            validated = Frontmatter.model_validate(frontmatter)
        except ValidationError as exc:
            source = f"docs/{md_file}"
            raise FrontmatterValidationError(
                f"Invalid frontmatter in {source}: {exc.error_count()} error(s)",
                source=source,
                errors=exc.errors(include_url=False),
            ) from exc
        frontmatter = validated.model_dump(by_alias=True, exclude_none=True)

    published_at = as_datetime(frontmatter.get("publishedAt"))
    mtime = as_datetime(mtime) or datetime.now(timezone.utc)
    updated_at = published_at if published_at and mtime < published_at else mtime

    frontmatter.update(
        {
            "slug": make_slug(md_file, frontmatter.get("slug")),
            "excerpt": frontmatter.get("excerpt") or frontmatter.get("description"),
            "sort": frontmatter.get("sort") or 0,
            "publishedAt": published_at,
            "updatedAt": updated_at,
            "meta": build_meta_tags(frontmatter),
        }
    )
    return DocumentMetadata.model_validate(frontmatter)


def is_published(metadata: DocumentMetadata, now: datetime | None = None) -> bool:
    """False for documents marked unpublished or scheduled in the future."""
    now = now or datetime.now(timezone.utc)
    if metadata.published is False:
        return False
    if metadata.published_at and now < metadata.published_at:
        return False
    return True
