"""Geometry and event surface consumed by the table of contents.

A browser host implements these protocols over the live DOM.
``StaticLayout`` and ``StaticNavPanel`` keep fixed boxes in memory for
headless use and tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

EventCallback = Callable[[], Any]

SCROLL_EVENT = "scroll"
RESIZE_EVENT = "resize"


@dataclass(frozen=True)
class Rect:
    """Viewport-relative vertical extent of an element, in pixels."""

    top: float
    bottom: float

    @property
    def height(self) -> float:
        return self.bottom - self.top


class LayoutSurface(Protocol):
    viewport_height: float
    scroll_height: float

    def bounding_rect(self, element: Any) -> Rect: ...

    def subscribe(self, event: str, callback: EventCallback) -> None: ...

    def unsubscribe(self, event: str, callback: EventCallback) -> None: ...


class NavigationPanel(Protocol):
    scroll_top: float

    def bounding_rect(self) -> Rect: ...

    def scroll_to(self, top: float, *, behavior: str = "auto") -> None: ...


@dataclass
class StaticNavPanel:
    """A fixed-size scrollable panel; records every scroll request."""

    top: float
    height: float
    scroll_top: float = 0.0
    scroll_calls: list[tuple[float, str]] = field(default_factory=list)

    def bounding_rect(self) -> Rect:
        return Rect(self.top, self.top + self.height)

    def scroll_to(self, top: float, *, behavior: str = "auto") -> None:
        self.scroll_calls.append((top, behavior))
        self.scroll_top = max(top, 0.0)


class StaticLayout:
    """Page with elements placed at fixed document offsets.

    Elements placed inside a ``StaticNavPanel`` are offset by the panel's own
    position and scroll; everything else moves with the window scroll.
    """

    def __init__(self, *, viewport_height: float, scroll_height: float, scroll_y: float = 0.0) -> None:
        self.viewport_height = viewport_height
        self.scroll_height = scroll_height
        self.scroll_y = scroll_y
        self._boxes: dict[int, tuple[Any, float, float, StaticNavPanel | None]] = {}
        self._listeners: dict[str, list[EventCallback]] = {}

    def place(
        self,
        element: Any,
        top: float,
        height: float = 0.0,
        *,
        panel: StaticNavPanel | None = None,
    ) -> None:
        self._boxes[id(element)] = (element, top, height, panel)

    def bounding_rect(self, element: Any) -> Rect:
        box = self._boxes.get(id(element))
        if box is None:
            return Rect(0.0, 0.0)
        _, top, height, panel = box
        if panel is None:
            offset = top - self.scroll_y
        else:
            offset = panel.top + top - panel.scroll_top
        return Rect(offset, offset + height)

    def subscribe(self, event: str, callback: EventCallback) -> None:
        self._listeners.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: EventCallback) -> None:
        listeners = self._listeners.get(event, [])
        if callback in listeners:
            listeners.remove(callback)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def dispatch(self, event: str) -> None:
        for callback in list(self._listeners.get(event, [])):
            callback()

    def scroll_window(self, y: float) -> None:
        self.scroll_y = y
        self.dispatch(SCROLL_EVENT)

    def resize(self, viewport_height: float) -> None:
        self.viewport_height = viewport_height
        self.dispatch(RESIZE_EVENT)
