"""Frontmatter extraction and the content-addressed record cache."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Mapping

import yaml
from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from mdit_py_plugins.front_matter import front_matter_plugin

from docweave.cache_utils import TTLCache, content_key
from docweave.config import (
    DOCWEAVE_FRONTMATTER_CACHE_MAX_SIZE,
    DOCWEAVE_FRONTMATTER_CACHE_TTL_SECONDS,
)
from docweave.exceptions import FrontmatterParseError

logger = logging.getLogger(__name__)

# Read-only view; identical text always yields this same object.
FrontmatterRecord = Mapping[str, Any]


class FrontmatterStore:
    """Owns the frontmatter cache, keyed by the hash of a document's full text.

    Records are only written as a byproduct of rendering; ``get`` never
    parses.
    """

    def __init__(self, cache: TTLCache[str, FrontmatterRecord] | None = None) -> None:
        if cache is None:
            cache = TTLCache(
                ttl_seconds=DOCWEAVE_FRONTMATTER_CACHE_TTL_SECONDS,
                max_size=DOCWEAVE_FRONTMATTER_CACHE_MAX_SIZE,
            )
        self._cache: TTLCache[str, FrontmatterRecord] = cache

    def get(self, text: str) -> FrontmatterRecord | None:
        """Return the cached record for ``text``, or None if never rendered."""
        if not isinstance(text, str):
            raise TypeError("text must be a string")
        return self._cache.get(content_key(text))

    def evict(self, text: str) -> bool:
        return self._cache.evict(content_key(text))

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def record(self, src: str, yaml_text: str, *, source: str | None = None) -> FrontmatterRecord:
        """Parse and cache ``yaml_text`` under the key of ``src``.

        An existing, unexpired record for the same text is returned as is.
        """
        key = content_key(src)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Frontmatter cache hit for %s", source or key)
            return cached

        logger.debug("Frontmatter cache miss for %s", source or key)
        try:
            data = yaml.safe_load(yaml_text)
        except yaml.YAMLError as exc:
            raise FrontmatterParseError(
                f"Invalid frontmatter YAML in {source or 'document'}: {exc}", source=source
            ) from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise FrontmatterParseError(
                f"Frontmatter in {source or 'document'} must be a mapping, "
                f"got {type(data).__name__}",
                source=source,
            )

        record = MappingProxyType(data)
        self._cache.put(key, record)
        return record


def frontmatter_plugin(md: MarkdownIt, store: FrontmatterStore) -> None:
    """Hide a leading ``---`` block from output and cache its parsed YAML.

    The block rule comes from mdit-py-plugins: it only matches a marker run of
    three or more dashes at position zero and closes on an equal or longer run
    or at the end of the document.
    """
    md.use(front_matter_plugin)

    def cache_front_matter(state: StateCore) -> None:
        if not state.tokens or state.tokens[0].type != "front_matter":
            return
        source = state.env.get("source") if isinstance(state.env, dict) else None
        store.record(state.src, state.tokens[0].content, source=source)

    md.core.ruler.after("block", "frontmatter_cache", cache_front_matter)
