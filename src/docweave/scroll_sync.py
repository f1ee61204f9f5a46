"""Keep the table of contents in step with the reader's scroll position."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from docweave.headings import HeadingFlattener, HeadingNode
from docweave.layout import LayoutSurface, NavigationPanel
from docweave.navigation import NavigationLink, NavigationTree

logger = logging.getLogger(__name__)

# How far past a heading's trailing content the reader must have scrolled
# before the heading stops counting as visible.
CONTENT_LOOKAHEAD_PX = 100
PANEL_SCROLL_MARGIN_PX = 100


def adjusted_top(top: float, distance_to_next: float) -> float:
    """Shift a heading above the viewport down by the length of its content."""
    if top < 0:
        return top + distance_to_next - CONTENT_LOOKAHEAD_PX
    return top


def heading_is_visible(top: float, distance_to_next: float, viewport_height: float) -> bool:
    top = adjusted_top(top, distance_to_next)
    return 0 <= top <= viewport_height


@dataclass
class SyncResult:
    """Outcome of one synchronization pass.

    Attributes:
        active: Visible headings, in the order they were evaluated (reverse
            document order).
        current: The last visible heading evaluated; drives panel scrolling.
        panel_scroll: Scroll offset requested from the panel, if any.
    """

    active: list[HeadingNode] = field(default_factory=list)
    current: HeadingNode | None = None
    panel_scroll: float | None = None


class ScrollSynchronizer:
    def __init__(
        self,
        hierarchy: Sequence[HeadingNode],
        navigation: NavigationTree,
        layout: LayoutSurface,
        panel: NavigationPanel,
        *,
        flattener: HeadingFlattener | None = None,
    ) -> None:
        self.hierarchy = hierarchy
        self.navigation = navigation
        self.layout = layout
        self.panel = panel
        self._flatten = flattener if flattener is not None else HeadingFlattener()

    def synchronize(self) -> SyncResult:
        """Recompute active links from current geometry.

        Headings are scanned in reverse document order and every visible one
        is activated; the last match evaluated wins the panel scroll.
        """
        flat = self._flatten(self.hierarchy)
        self.navigation.clear_active()

        result = SyncResult()
        viewport_height = self.layout.viewport_height
        for node in reversed(flat):
            rect = self.layout.bounding_rect(node.element)
            if not heading_is_visible(rect.top, node.distance_to_next, viewport_height):
                continue
            link = self.navigation.link_for(node)
            if link is None:
                continue
            self.navigation.activate(link)
            result.active.append(node)
            result.current = node

        if result.current is not None:
            link = self.navigation.link_for(result.current)
            if link is not None:
                result.panel_scroll = self._reveal(link)
        return result

    def _reveal(self, link: NavigationLink) -> float | None:
        panel_rect = self.panel.bounding_rect()
        link_rect = self.layout.bounding_rect(link.anchor)
        if panel_rect.top <= link_rect.top and link_rect.bottom <= panel_rect.bottom:
            return None

        top = self.panel.scroll_top + (link_rect.top - panel_rect.top) - PANEL_SCROLL_MARGIN_PX
        logger.debug("Scrolling navigation panel to %.1f for %r", top, link.heading.text)
        self.panel.scroll_to(top, behavior="smooth")
        return top


class Debouncer:
    """Run ``callback`` once events stop arriving for ``delay`` seconds.

    Each call cancels the pending timer, so at most one is outstanding.
    """

    def __init__(
        self,
        callback: Callable[..., Any],
        delay: float,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.callback = callback
        self.delay = delay
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def __call__(self, *args: Any) -> None:
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, args)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, args: tuple[Any, ...]) -> None:
        self._handle = None
        self.callback(*args)
