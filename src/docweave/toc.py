"""On-page table of contents.

Builds a navigation list from the headings of the main content, inserts it
into the side navigation and keeps its active entries in sync with scrolling.
Regenerating discards the previous tree entirely.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from bs4 import BeautifulSoup
from bs4.element import Tag

from docweave.config import DOCWEAVE_SCROLL_DEBOUNCE_S
from docweave.headings import (
    HeadingFlattener,
    HeadingNode,
    build_heading_hierarchy,
    compute_heading_distances,
)
from docweave.html_parser import iter_content_headings
from docweave.layout import RESIZE_EVENT, SCROLL_EVENT, LayoutSurface, NavigationPanel
from docweave.navigation import NavigationTree, add_class, build_navigation, has_class
from docweave.scroll_sync import Debouncer, ScrollSynchronizer

logger = logging.getLogger(__name__)

HEADER_SELECTOR = "body > header"
MAIN_SELECTOR = "main"
SIDE_NAV_SELECTOR = "body > .content > aside > nav"
TOC_TITLE = "Table of Contents"
PERMALINK_CLASS = "heading"


@dataclass
class TocBinding:
    """Everything created by one ``TableOfContents.bind`` call."""

    hierarchy: list[HeadingNode]
    flat: tuple[HeadingNode, ...]
    navigation: NavigationTree
    synchronizer: ScrollSynchronizer
    debouncer: Debouncer
    nav_height: float
    inserted: list[Tag] = field(default_factory=list)


def add_heading_permalinks(flat: tuple[HeadingNode, ...], soup: BeautifulSoup) -> None:
    """Wrap each heading in an ``a.heading`` pointing at its own anchor.

    Headings already wrapped by an earlier bind are left alone.
    """
    for node in flat:
        heading = node.element
        parent = heading.parent
        if parent is not None and parent.name == "a" and has_class(parent, PERMALINK_CLASS):
            continue
        icon = soup.new_tag("i")
        icon["class"] = ["fa-sharp", "fa-link", "icon"]
        heading.insert(0, " ")
        heading.insert(0, icon)

        link = soup.new_tag("a", href=f"#{heading.get('id', '')}")
        add_class(link, PERMALINK_CLASS)
        heading.wrap(link)


class TableOfContents:
    """Owns the table of contents of one page.

    Args:
        document: Parsed page; the list is inserted into its side navigation.
        layout: Geometry and scroll/resize events of the page.
        panel: The scrollable side navigation panel.
        debounce_s: Quiet period before a scroll or resize re-syncs.
    """

    def __init__(
        self,
        document: BeautifulSoup,
        layout: LayoutSurface,
        panel: NavigationPanel,
        *,
        debounce_s: float = DOCWEAVE_SCROLL_DEBOUNCE_S,
    ) -> None:
        self.document = document
        self.layout = layout
        self.panel = panel
        self.debounce_s = debounce_s
        self.binding: TocBinding | None = None

    def bind(self) -> TocBinding | None:
        """Build (or rebuild) the table of contents and start syncing.

        Returns None, after logging a warning, when the page lacks the header,
        main region or side navigation, or has no headings.
        """
        self.unbind()

        header = self.document.select_one(HEADER_SELECTOR)
        main = self.document.select_one(MAIN_SELECTOR)
        side_nav = self.document.select_one(SIDE_NAV_SELECTOR)
        if header is None or main is None or side_nav is None:
            logger.warning("TOC: Could not find required elements")
            return None

        hierarchy = build_heading_hierarchy(iter_content_headings(main))
        if not hierarchy:
            logger.warning("TOC: No headings found")
            return None

        flattener = HeadingFlattener()
        flat = flattener(hierarchy)
        compute_heading_distances(flat, self.layout)

        navigation = build_navigation(hierarchy, self.document)
        add_class(navigation.root, "top")

        rule = self.document.new_tag("hr")
        title = self.document.new_tag("h2")
        title.string = TOC_TITLE
        for element in (rule, title, navigation.root):
            side_nav.append(element)

        add_heading_permalinks(flat, self.document)

        synchronizer = ScrollSynchronizer(
            hierarchy, navigation, self.layout, self.panel, flattener=flattener
        )
        debouncer = Debouncer(synchronizer.synchronize, self.debounce_s)
        self.layout.subscribe(SCROLL_EVENT, debouncer)
        self.layout.subscribe(RESIZE_EVENT, debouncer)

        self.binding = TocBinding(
            hierarchy=hierarchy,
            flat=flat,
            navigation=navigation,
            synchronizer=synchronizer,
            debouncer=debouncer,
            nav_height=self.layout.bounding_rect(header).height,
            inserted=[rule, title, navigation.root],
        )
        synchronizer.synchronize()
        return self.binding

    def unbind(self) -> None:
        """Detach the inserted list and stop listening for events."""
        binding = self.binding
        if binding is None:
            return
        binding.debouncer.cancel()
        self.layout.unsubscribe(SCROLL_EVENT, binding.debouncer)
        self.layout.unsubscribe(RESIZE_EVENT, binding.debouncer)
        for element in binding.inserted:
            element.extract()
        self.binding = None
