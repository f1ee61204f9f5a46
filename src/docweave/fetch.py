"""Render Markdown documents that live outside the docs directory."""

from __future__ import annotations

import logging
import posixpath
from datetime import datetime, timezone
from urllib.parse import urlparse

import httpx

from docweave.http_utils import fetch_text
from docweave.markdown import DocumentRenderer
from docweave.schemas import RenderedDocument

logger = logging.getLogger(__name__)


def remote_document_name(url: str) -> str:
    """Relative document name for a remote URL, e.g. ``owner/repo/README.md``."""
    path = urlparse(url).path.strip("/")
    return posixpath.normpath(path) if path else "index.md"


async def render_remote_document(
    renderer: DocumentRenderer,
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
) -> RenderedDocument:
    """Fetch Markdown over HTTP and render it as external content.

    External content skips frontmatter schema validation but must still
    carry a frontmatter block.
    """
    content = await fetch_text(url, client=client)
    html = await renderer.render(content, source=url)
    metadata = renderer.get_metadata(
        content,
        md_file=remote_document_name(url),
        mtime=datetime.now(timezone.utc),
        external=True,
    )
    logger.debug("Rendered remote document %s", url)
    return RenderedDocument(source=url, html=html, metadata=metadata)
