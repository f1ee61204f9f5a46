"""Discover, render and index the Markdown files of a docs directory."""

from __future__ import annotations

import asyncio
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from docweave.cache_utils import read_text_async
from docweave.config import DOCWEAVE_DOCS_PATH
from docweave.exceptions import DocweaveError
from docweave.markdown import DocumentRenderer
from docweave.schemas import RenderedDocument

logger = logging.getLogger(__name__)


def find_markdown_files(path: Path, exclude: Sequence[str] = ()) -> list[str]:
    """List ``.md`` files under ``path`` as POSIX paths relative to it.

    Any file or directory whose name matches one of the ``exclude`` regular
    expressions is skipped, at every depth.
    """
    pattern = re.compile("|".join(f"(?:{item})" for item in exclude)) if exclude else None
    files: list[str] = []
    for entry in sorted(path.iterdir()):
        if pattern is not None and pattern.search(entry.name):
            continue
        if entry.is_dir():
            files.extend(f"{entry.name}/{child}" for child in find_markdown_files(entry, exclude))
        elif entry.suffix == ".md":
            files.append(entry.name)
    return files


async def parse_markdown_file(
    renderer: DocumentRenderer,
    md_file: str,
    *,
    docs_path: Path = DOCWEAVE_DOCS_PATH,
) -> RenderedDocument:
    """Render one docs file and extract its validated metadata.

    Raises:
        MissingFrontmatterError: If the file has no frontmatter block.
        FrontmatterValidationError: If the frontmatter fails the schema.
        FrontmatterParseError: If the frontmatter is not a YAML mapping.
    """
    path = docs_path / md_file
    content = await read_text_async(path)
    mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)

    html = await renderer.render(content, source=md_file)
    metadata = renderer.get_metadata(content, md_file=md_file, mtime=mtime)
    return RenderedDocument(source=md_file, html=html, metadata=metadata)


async def load_documents(
    renderer: DocumentRenderer,
    *,
    docs_path: Path = DOCWEAVE_DOCS_PATH,
    exclude: Sequence[str] = (),
    strict: bool = True,
) -> list[RenderedDocument]:
    """Render every docs file concurrently, ordered by their ``sort`` field.

    Args:
        renderer: Shared renderer; all documents use its frontmatter cache.
        docs_path: Root directory of the documentation.
        exclude: Name patterns to skip, see ``find_markdown_files``.
        strict: If False, documents that fail to render are logged and
            left out instead of failing the whole load.
    """
    md_files = find_markdown_files(docs_path, exclude)
    results = await asyncio.gather(
        *(parse_markdown_file(renderer, md_file, docs_path=docs_path) for md_file in md_files),
        return_exceptions=not strict,
    )

    documents: list[RenderedDocument] = []
    for md_file, result in zip(md_files, results):
        if isinstance(result, DocweaveError):
            logger.warning("Skipping %s: %s", md_file, result)
            continue
        if isinstance(result, BaseException):
            raise result
        documents.append(result)

    return sorted(documents, key=lambda document: document.metadata.sort)


def make_docs_nav_data(documents: Sequence[RenderedDocument]) -> list[dict[str, str | None]]:
    """Side navigation entries for a list of rendered documents."""
    return [
        {
            "label": document.metadata.title,
            "slug": document.metadata.slug,
            "description": document.metadata.excerpt,
        }
        for document in documents
    ]
