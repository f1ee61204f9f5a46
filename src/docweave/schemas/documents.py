"""Rendered document model."""

from __future__ import annotations

from pydantic import BaseModel

from docweave.schemas.frontmatter import DocumentMetadata


class RenderedDocument(BaseModel):
    """A Markdown document rendered to HTML with its metadata."""

    source: str
    html: str
    metadata: DocumentMetadata
