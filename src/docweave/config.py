"""Local configuration for docweave."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_DOCS_DIR = "docs"
DEFAULT_FRONTMATTER_CACHE_TTL_SECONDS = 24 * 60 * 60
DEFAULT_FRONTMATTER_CACHE_MAX_SIZE = 1000
DEFAULT_HEADING_CACHE_TTL_SECONDS = 5 * 60
DEFAULT_HEADING_CACHE_MAX_SIZE = 1000
DEFAULT_SCROLL_DEBOUNCE_S = 0.2
DEFAULT_SITE_NAME = "Docweave"
DEFAULT_TWITTER_HANDLE = "@docweave"
DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "docweave/0.1"
DEFAULT_LOG_LEVEL = "INFO"

# Root directory scanned for Markdown documents.
DOCWEAVE_DOCS_PATH = Path(os.getenv("DOCWEAVE_DOCS_PATH", DEFAULT_DOCS_DIR)).expanduser().resolve()
DOCWEAVE_FRONTMATTER_CACHE_TTL_SECONDS = float(
    os.getenv("DOCWEAVE_FRONTMATTER_CACHE_TTL_SECONDS", str(DEFAULT_FRONTMATTER_CACHE_TTL_SECONDS))
)
DOCWEAVE_FRONTMATTER_CACHE_MAX_SIZE = int(
    os.getenv("DOCWEAVE_FRONTMATTER_CACHE_MAX_SIZE", str(DEFAULT_FRONTMATTER_CACHE_MAX_SIZE))
)
DOCWEAVE_HEADING_CACHE_TTL_SECONDS = float(
    os.getenv("DOCWEAVE_HEADING_CACHE_TTL_SECONDS", str(DEFAULT_HEADING_CACHE_TTL_SECONDS))
)
DOCWEAVE_HEADING_CACHE_MAX_SIZE = int(
    os.getenv("DOCWEAVE_HEADING_CACHE_MAX_SIZE", str(DEFAULT_HEADING_CACHE_MAX_SIZE))
)
DOCWEAVE_SCROLL_DEBOUNCE_S = float(os.getenv("DOCWEAVE_SCROLL_DEBOUNCE_S", str(DEFAULT_SCROLL_DEBOUNCE_S)))
DOCWEAVE_SITE_NAME = os.getenv("DOCWEAVE_SITE_NAME", DEFAULT_SITE_NAME)
DOCWEAVE_TWITTER_HANDLE = os.getenv("DOCWEAVE_TWITTER_HANDLE", DEFAULT_TWITTER_HANDLE)
DOCWEAVE_FETCH_TIMEOUT_S = float(os.getenv("DOCWEAVE_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
DOCWEAVE_FETCH_MAX_RETRIES = int(os.getenv("DOCWEAVE_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
DOCWEAVE_FETCH_BACKOFF_S = float(os.getenv("DOCWEAVE_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
DOCWEAVE_USER_AGENT = os.getenv("DOCWEAVE_USER_AGENT", DEFAULT_USER_AGENT)
DOCWEAVE_LOG_LEVEL = os.getenv("DOCWEAVE_LOG_LEVEL", DEFAULT_LOG_LEVEL)
