"""Locate content headings in rendered HTML."""

from __future__ import annotations

import re
from typing import Iterable

from bs4 import BeautifulSoup
from bs4.element import Tag

_HEADING_RE = re.compile(r"^h[2-6]$")

OMIT_ATTRIBUTE = "omit-toc"
# Either marker anywhere in a heading's markup, e.g. ``## Setup <!-- omit-toc -->``.
OMIT_SENTINELS = ("omit-toc", "omit-from-toc")


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def find_content_root(soup: BeautifulSoup) -> Tag:
    """Find the main content element of a page.

    Searches in order: ``<main>``, ``<article>``, ``<body>``, then the soup
    itself.
    """
    main = soup.find("main")
    if main:
        return main
    article = soup.find("article")
    if article:
        return article
    if soup.body:
        return soup.body
    return soup


def heading_level(heading: Tag) -> int:
    return int(heading.name[1])


def is_omitted(heading: Tag) -> bool:
    """True when a heading opted out of the table of contents."""
    if heading.has_attr(OMIT_ATTRIBUTE):
        return True
    inner = heading.decode_contents()
    return any(sentinel in inner for sentinel in OMIT_SENTINELS)


def iter_content_headings(root: Tag) -> Iterable[Tag]:
    """Yield h2-h6 elements under ``root`` in document order.

    Level 1 is the page title and never part of the outline; headings inside
    ``<nav>`` are skipped.
    """
    for heading in root.find_all(_HEADING_RE):
        if heading.find_parent("nav"):
            continue
        yield heading
