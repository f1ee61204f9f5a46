"""Markdown -> HTML rendering with frontmatter, embeds and code highlighting."""

from __future__ import annotations

from datetime import datetime

from markdown_it import MarkdownIt
from mdit_py_plugins.anchors import anchors_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from docweave.embeds import embeds_plugin
from docweave.frontmatter import FrontmatterStore, frontmatter_plugin
from docweave.metadata import get_markdown_metadata
from docweave.schemas import DocumentMetadata

_LANGUAGE_ALIASES = {
    "ts": "typescript",
    "js": "javascript",
    "sh": "bash",
}

_FORMATTER = HtmlFormatter(nowrap=True)


def highlight_code(code: str, lang: str, attrs: str = "") -> str:
    """Highlight a fenced block with Pygments.

    Returns an empty string for unknown languages so markdown-it falls back to
    plain escaping.
    """
    lang = (lang or "").strip().lower()
    lang = _LANGUAGE_ALIASES.get(lang, lang) or "text"
    try:
        lexer = get_lexer_by_name(lang)
    except ClassNotFound:
        return ""
    return highlight(code, lexer, _FORMATTER)


def create_markdown(store: FrontmatterStore) -> MarkdownIt:
    """Build the markdown-it instance used for every document."""
    md = MarkdownIt(
        "commonmark",
        {
            "breaks": True,
            "html": True,
            "typographer": True,
            "xhtmlOut": True,
            "highlight": highlight_code,
        },
    ).enable(["table", "strikethrough", "replacements", "smartquotes"])

    frontmatter_plugin(md, store)
    md.use(footnote_plugin)
    md.use(anchors_plugin, max_level=6)
    md.use(tasklists_plugin)
    md.use(embeds_plugin)
    return md


class DocumentRenderer:
    """Renders documents and serves their cached frontmatter.

    Rendering stays on the calling thread: the frontmatter cache is shared by
    every render and is not synchronized.
    """

    def __init__(self, store: FrontmatterStore | None = None) -> None:
        self.frontmatter = store if store is not None else FrontmatterStore()
        self._md = create_markdown(self.frontmatter)

    def render_sync(self, text: str, *, source: str | None = None) -> str:
        return self._md.render(text, {"source": source})

    async def render(self, text: str, *, source: str | None = None) -> str:
        """Render Markdown text to HTML, caching its frontmatter."""
        return self.render_sync(text, source=source)

    def get_metadata(
        self,
        content: str,
        *,
        md_file: str,
        mtime: datetime,
        external: bool = False,
    ) -> DocumentMetadata:
        return get_markdown_metadata(
            self.frontmatter,
            content=content,
            md_file=md_file,
            mtime=mtime,
            external=external,
        )
