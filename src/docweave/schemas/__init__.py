"""Shared schemas for docweave."""

from docweave.schemas.directives import DirectiveToken
from docweave.schemas.documents import RenderedDocument
from docweave.schemas.frontmatter import (
    CacheSpec,
    DocumentMetadata,
    Frontmatter,
    MetaTags,
    RedirectSpec,
)

__all__ = [
    "CacheSpec",
    "DirectiveToken",
    "DocumentMetadata",
    "Frontmatter",
    "MetaTags",
    "RedirectSpec",
    "RenderedDocument",
]
