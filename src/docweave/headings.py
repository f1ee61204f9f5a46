"""Heading hierarchy reconstruction and spacing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Sequence

from bs4.element import Tag

from docweave.cache_utils import TTLCache
from docweave.config import (
    DOCWEAVE_HEADING_CACHE_MAX_SIZE,
    DOCWEAVE_HEADING_CACHE_TTL_SECONDS,
)
from docweave.html_parser import (
    find_content_root,
    heading_level,
    is_omitted,
    iter_content_headings,
    parse_html,
)

if TYPE_CHECKING:
    from docweave.layout import LayoutSurface


def heading_key(element: Tag) -> str:
    """Stable identity of a heading: its ``id``, else the object identity."""
    element_id = element.get("id")
    if element_id:
        return str(element_id)
    return f"@{id(element)}"


@dataclass(eq=False)
class HeadingNode:
    """A heading and the headings nested under it."""

    level: int
    text: str
    element: Tag
    distance_to_next: float = 0.0
    children: list[HeadingNode] = field(default_factory=list)

    @property
    def key(self) -> str:
        return heading_key(self.element)


def build_heading_hierarchy(headings: Iterable[Tag]) -> list[HeadingNode]:
    """Nest a flat, document-ordered heading sequence by level.

    Opted-out headings are dropped without touching the nesting stack, so a
    level-2 followed directly by a level-4 still nests the 4 under the 2.
    """
    roots: list[HeadingNode] = []
    stack: list[HeadingNode] = []

    for heading in headings:
        if is_omitted(heading):
            continue

        level = heading_level(heading)
        node = HeadingNode(
            level=level,
            text=heading.get_text(" ", strip=True),
            element=heading,
        )

        while stack and stack[-1].level >= level:
            stack.pop()

        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)

        stack.append(node)

    return roots


def flatten_headings(roots: Sequence[HeadingNode]) -> list[HeadingNode]:
    """Depth-first flattening; reproduces document order."""
    flat: list[HeadingNode] = []
    for node in roots:
        flat.append(node)
        flat.extend(flatten_headings(node.children))
    return flat


def compute_heading_distances(flat: Sequence[HeadingNode], layout: LayoutSurface) -> None:
    """Set each node's pixel distance to the following heading.

    The last heading measures to the bottom of the scrollable page.
    Negative gaps are clamped to zero.
    """
    rects = [layout.bounding_rect(node.element) for node in flat]
    for index, node in enumerate(flat):
        if index == len(flat) - 1:
            node.distance_to_next = layout.scroll_height - rects[index].bottom
            continue
        node.distance_to_next = max(rects[index + 1].top - rects[index].top, 0.0)


class HeadingFlattener:
    """Memoized ``flatten_headings`` keyed by the root headings' identities."""

    def __init__(self, cache: TTLCache[str, tuple[HeadingNode, ...]] | None = None) -> None:
        if cache is None:
            cache = TTLCache(
                ttl_seconds=DOCWEAVE_HEADING_CACHE_TTL_SECONDS,
                max_size=DOCWEAVE_HEADING_CACHE_MAX_SIZE,
            )
        self._cache: TTLCache[str, tuple[HeadingNode, ...]] = cache

    def __call__(self, roots: Sequence[HeadingNode]) -> tuple[HeadingNode, ...]:
        key = ",".join(node.key for node in roots)
        flat = self._cache.get(key)
        if flat is None:
            flat = tuple(flatten_headings(roots))
            self._cache.put(key, flat)
        return flat

    def clear(self) -> None:
        self._cache.clear()


def extract_heading_hierarchy(html: str) -> list[HeadingNode]:
    """Parse rendered HTML and return its content heading tree."""
    soup = parse_html(html)
    return build_heading_hierarchy(iter_content_headings(find_content_root(soup)))


def count_headings(roots: Iterable[HeadingNode]) -> int:
    total = 0
    for node in roots:
        total += 1
        total += count_headings(node.children)
    return total


def format_heading_outline(roots: Sequence[HeadingNode], indent: int = 0) -> str:
    lines: list[str] = []
    for node in roots:
        lines.append(" " * (indent * 4) + node.text)
        if node.children:
            lines.append(format_heading_outline(node.children, indent + 1))
    return "\n".join(lines)
