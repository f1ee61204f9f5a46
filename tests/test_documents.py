"""Tests for docs directory loading and remote documents."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from docweave.documents import (
    find_markdown_files,
    load_documents,
    make_docs_nav_data,
    parse_markdown_file,
)
from docweave.exceptions import FrontmatterValidationError, MissingFrontmatterError
from docweave.fetch import remote_document_name, render_remote_document
from docweave.markdown import DocumentRenderer


def _doc(title: str, sort: int, body: str = "## Section\n") -> str:
    return (
        "---\n"
        f"title: {title}\n"
        f"description: About {title.lower()}\n"
        "published: true\n"
        f"sort: {sort}\n"
        "---\n"
        "\n"
        f"{body}"
    )


@pytest.fixture
def docs_path(tmp_path: Path) -> Path:
    (tmp_path / "guide").mkdir()
    (tmp_path / "drafts").mkdir()
    (tmp_path / "intro.md").write_text(_doc("Intro", 1), encoding="utf-8")
    (tmp_path / "guide" / "setup.md").write_text(_doc("Setup", 3), encoding="utf-8")
    (tmp_path / "guide" / "usage.md").write_text(_doc("Usage", 2), encoding="utf-8")
    (tmp_path / "guide" / "notes.txt").write_text("not markdown", encoding="utf-8")
    (tmp_path / "drafts" / "wip.md").write_text(_doc("Wip", 0), encoding="utf-8")
    return tmp_path


class TestFindMarkdownFiles:
    """Tests for find_markdown_files function."""

    def test_recursive_sorted(self, docs_path: Path) -> None:
        assert find_markdown_files(docs_path) == [
            "drafts/wip.md",
            "guide/setup.md",
            "guide/usage.md",
            "intro.md",
        ]

    def test_exclude_patterns(self, docs_path: Path) -> None:
        """Patterns match names at any depth."""
        assert find_markdown_files(docs_path, exclude=["^drafts$", r"^usage\.md$"]) == [
            "guide/setup.md",
            "intro.md",
        ]


class TestLoadDocuments:
    """Tests for parse_markdown_file and load_documents functions."""

    @pytest.mark.asyncio
    async def test_parse_markdown_file(self, renderer: DocumentRenderer, docs_path: Path) -> None:
        document = await parse_markdown_file(renderer, "guide/setup.md", docs_path=docs_path)

        assert document.source == "guide/setup.md"
        assert document.metadata.slug == "/docs/guide/setup"
        assert '<h2 id="section">Section</h2>' in document.html

    @pytest.mark.asyncio
    async def test_sorted_by_sort_field(self, renderer: DocumentRenderer, docs_path: Path) -> None:
        documents = await load_documents(renderer, docs_path=docs_path, exclude=["^drafts$"])

        assert [document.metadata.title for document in documents] == ["Intro", "Usage", "Setup"]

    @pytest.mark.asyncio
    async def test_strict_load_raises(self, renderer: DocumentRenderer, docs_path: Path) -> None:
        """A single invalid document fails a strict load."""
        (docs_path / "broken.md").write_text("---\ntitle: Broken\n---\n", encoding="utf-8")

        with pytest.raises(FrontmatterValidationError, match="docs/broken.md"):
            await load_documents(renderer, docs_path=docs_path)

    @pytest.mark.asyncio
    async def test_lenient_load_skips_failures(
        self,
        renderer: DocumentRenderer,
        docs_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Non-strict loads log and leave out documents that fail."""
        (docs_path / "broken.md").write_text("---\ntitle: Broken\n---\n", encoding="utf-8")
        (docs_path / "plain.md").write_text("# No frontmatter\n", encoding="utf-8")

        documents = await load_documents(renderer, docs_path=docs_path, strict=False)

        assert len(documents) == 4
        assert "Skipping broken.md" in caplog.text
        assert "Skipping plain.md" in caplog.text

    @pytest.mark.asyncio
    async def test_nav_data(self, renderer: DocumentRenderer, docs_path: Path) -> None:
        documents = await load_documents(renderer, docs_path=docs_path, exclude=["^drafts$"])

        assert make_docs_nav_data(documents)[0] == {
            "label": "Intro",
            "slug": "/docs/intro",
            "description": "About intro",
        }


class TestRemoteDocuments:
    """Tests for rendering documents fetched over HTTP."""

    def test_remote_document_name(self) -> None:
        url = "https://raw.example.com/acme/kit/main/README.md"
        assert remote_document_name(url) == "acme/kit/main/README.md"
        assert remote_document_name("https://example.com/") == "index.md"

    @pytest.mark.asyncio
    async def test_render_remote_document(self, renderer: DocumentRenderer) -> None:
        """Remote content is rendered as external, unvalidated content."""
        content = "---\ntitle: Kit\nstars: 12\n---\n\n## Usage\n"
        url = "https://raw.example.com/acme/kit/main/README.md"

        with patch("docweave.fetch.fetch_text", new=AsyncMock(return_value=content)) as mock_fetch:
            document = await render_remote_document(renderer, url)

        mock_fetch.assert_awaited_once_with(url, client=None)
        assert document.source == url
        assert document.metadata.title == "Kit"
        assert document.metadata.model_extra == {"stars": 12}
        assert document.metadata.slug == "/docs/acme/kit/main/README"
        assert '<h2 id="usage">Usage</h2>' in document.html

    @pytest.mark.asyncio
    async def test_remote_document_needs_frontmatter(self, renderer: DocumentRenderer) -> None:
        with patch("docweave.fetch.fetch_text", new=AsyncMock(return_value="# Readme\n")):
            with pytest.raises(MissingFrontmatterError):
                await render_remote_document(renderer, "https://example.com/README.md")
