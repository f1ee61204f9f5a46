"""Tests for scroll synchronization of the table of contents."""

from __future__ import annotations

import asyncio

import pytest

from docweave.headings import (
    HeadingFlattener,
    compute_heading_distances,
    extract_heading_hierarchy,
)
from docweave.html_parser import parse_html
from docweave.layout import StaticLayout, StaticNavPanel
from docweave.navigation import build_navigation, has_class
from docweave.scroll_sync import Debouncer, ScrollSynchronizer, adjusted_top, heading_is_visible

PAGE = '<main><h2 id="a">A</h2><h3 id="a1">A.1</h3><h2 id="b">B</h2></main>'


def _synchronizer(*, b_link_top: float = 40) -> tuple[ScrollSynchronizer, StaticLayout, StaticNavPanel]:
    """Headings at 0, 300 and 1000 on a 2000px page with a 600px viewport."""
    soup = parse_html(PAGE)
    roots = extract_heading_hierarchy(PAGE)
    flattener = HeadingFlattener()
    flat = flattener(roots)

    layout = StaticLayout(viewport_height=600, scroll_height=2000)
    for node, top in zip(flat, (0, 300, 1000)):
        layout.place(node.element, top)
    compute_heading_distances(flat, layout)

    navigation = build_navigation(roots, soup)
    panel = StaticNavPanel(top=100, height=200)
    for link, top in zip(navigation.links, (0, 20, b_link_top)):
        layout.place(link.anchor, top, height=20, panel=panel)

    synchronizer = ScrollSynchronizer(roots, navigation, layout, panel, flattener=flattener)
    return synchronizer, layout, panel


def _active_hrefs(synchronizer: ScrollSynchronizer) -> list[str]:
    return [anchor["href"] for anchor in synchronizer.navigation.active_anchors()]


class TestVisibility:
    """Tests for the visibility rule."""

    def test_heading_above_viewport_with_long_section(self) -> None:
        """A heading 50px above the top with 200px of content still counts."""
        assert adjusted_top(-50, 200) == 50
        assert heading_is_visible(-50, 200, 600)

    def test_heading_above_viewport_with_short_section(self) -> None:
        assert not heading_is_visible(-50, 120, 600)

    def test_viewport_bounds_inclusive(self) -> None:
        assert heading_is_visible(0, 0, 600)
        assert heading_is_visible(600, 0, 600)
        assert not heading_is_visible(601, 0, 600)

    def test_headings_below_top_are_not_adjusted(self) -> None:
        assert adjusted_top(250, 1000) == 250


class TestSynchronize:
    """Tests for ScrollSynchronizer.synchronize."""

    def test_all_visible_headings_active(self) -> None:
        """Every visible heading is marked; the last evaluated is current."""
        synchronizer, _, panel = _synchronizer()

        result = synchronizer.synchronize()

        assert [node.key for node in result.active] == ["a1", "a"]
        assert result.current is not None and result.current.key == "a"
        assert _active_hrefs(synchronizer) == ["#a", "#a1"]
        assert result.panel_scroll is None
        assert panel.scroll_calls == []

    def test_ancestors_follow_nested_heading(self) -> None:
        """Scrolling past a parent keeps it highlighted through its child."""
        synchronizer, layout, _ = _synchronizer()
        layout.scroll_y = 250

        result = synchronizer.synchronize()

        assert [node.key for node in result.active] == ["a1"]
        assert _active_hrefs(synchronizer) == ["#a", "#a1"]
        parent_item = synchronizer.navigation.links[0].item
        assert has_class(parent_item, "active")

    def test_previous_marks_cleared(self) -> None:
        synchronizer, layout, _ = _synchronizer()
        synchronizer.synchronize()

        layout.scroll_y = 950
        synchronizer.synchronize()

        assert _active_hrefs(synchronizer) == ["#b"]

    def test_nothing_visible(self) -> None:
        """A gap between sections leaves no link active."""
        synchronizer, layout, panel = _synchronizer()
        layout.scroll_y = 1500
        layout.viewport_height = 100

        result = synchronizer.synchronize()

        assert result.current is None
        assert _active_hrefs(synchronizer) == []
        assert panel.scroll_calls == []

    def test_panel_scrolls_to_reveal_current_link(self) -> None:
        """A current link outside the panel scrolls it into view."""
        synchronizer, layout, panel = _synchronizer(b_link_top=400)
        layout.scroll_y = 950

        result = synchronizer.synchronize()

        assert result.current is not None and result.current.key == "b"
        assert result.panel_scroll == 300
        assert panel.scroll_calls == [(300, "smooth")]

    def test_idempotent(self) -> None:
        """A second pass with unchanged geometry changes nothing."""
        synchronizer, layout, panel = _synchronizer(b_link_top=400)
        layout.scroll_y = 950

        first = synchronizer.synchronize()
        second = synchronizer.synchronize()

        assert [node.key for node in first.active] == [node.key for node in second.active]
        assert second.panel_scroll is None
        assert len(panel.scroll_calls) == 1

    def test_duplicate_ids_keep_separate_links(self) -> None:
        """Headings sharing an id attribute still map to their own links."""
        html = '<main><h2 id="x">First</h2><h2 id="x">Second</h2></main>'
        soup = parse_html(html)
        roots = extract_heading_hierarchy(html)
        layout = StaticLayout(viewport_height=600, scroll_height=2000)
        layout.place(roots[0].element, 0)
        layout.place(roots[1].element, 1000)
        compute_heading_distances(roots, layout)
        navigation = build_navigation(roots, soup)

        assert navigation.link_for(roots[0]) is not navigation.link_for(roots[1])

        panel = StaticNavPanel(top=0, height=600)
        synchronizer = ScrollSynchronizer(roots, navigation, layout, panel)
        result = synchronizer.synchronize()

        assert [node.text for node in result.active] == ["First"]
        assert [anchor.get_text() for anchor in navigation.active_anchors()] == ["First"]

    def test_memoized_order_not_mutated(self) -> None:
        """Reverse scanning leaves the flattened order intact."""
        synchronizer, _, _ = _synchronizer()
        synchronizer.synchronize()
        synchronizer.synchronize()

        flat = synchronizer._flatten(synchronizer.hierarchy)
        assert [node.key for node in flat] == ["a", "a1", "b"]


class TestDebouncer:
    """Tests for Debouncer."""

    @pytest.mark.asyncio
    async def test_coalesces_bursts(self) -> None:
        calls: list[tuple] = []
        debouncer = Debouncer(lambda *args: calls.append(args), 0.01)

        debouncer(1)
        debouncer(2)
        debouncer(3)
        assert debouncer.pending

        await asyncio.sleep(0.05)

        assert calls == [(3,)]
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def test_cancel(self) -> None:
        calls: list[tuple] = []
        debouncer = Debouncer(lambda *args: calls.append(args), 0.01)

        debouncer()
        debouncer.cancel()
        await asyncio.sleep(0.03)

        assert calls == []
        assert not debouncer.pending

    def test_requires_running_loop(self) -> None:
        """Without an explicit loop, calls must come from inside one."""
        debouncer = Debouncer(lambda: None, 0.01)
        with pytest.raises(RuntimeError):
            debouncer()
