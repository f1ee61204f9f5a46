"""docweave: render Markdown docs with embeds and a scroll-synced table of contents."""

from docweave.documents import find_markdown_files, load_documents, make_docs_nav_data, parse_markdown_file
from docweave.exceptions import (
    DocumentNotFoundError,
    DocweaveError,
    FetchError,
    FrontmatterParseError,
    FrontmatterValidationError,
    MetadataError,
    MissingFrontmatterError,
)
from docweave.fetch import render_remote_document
from docweave.frontmatter import FrontmatterStore
from docweave.headings import HeadingNode, build_heading_hierarchy, extract_heading_hierarchy
from docweave.markdown import DocumentRenderer
from docweave.metadata import get_markdown_metadata, is_published
from docweave.schemas import DirectiveToken, DocumentMetadata, Frontmatter, RenderedDocument
from docweave.scroll_sync import ScrollSynchronizer
from docweave.toc import TableOfContents

__all__ = [
    "DirectiveToken",
    "DocumentMetadata",
    "DocumentNotFoundError",
    "DocumentRenderer",
    "DocweaveError",
    "FetchError",
    "Frontmatter",
    "FrontmatterParseError",
    "FrontmatterStore",
    "FrontmatterValidationError",
    "HeadingNode",
    "MetadataError",
    "MissingFrontmatterError",
    "RenderedDocument",
    "ScrollSynchronizer",
    "TableOfContents",
    "build_heading_hierarchy",
    "extract_heading_hierarchy",
    "find_markdown_files",
    "get_markdown_metadata",
    "is_published",
    "load_documents",
    "make_docs_nav_data",
    "parse_markdown_file",
    "render_remote_document",
]
