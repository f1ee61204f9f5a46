"""Navigation list for a heading hierarchy.

Each link keeps an explicit reference to the list that owns it and to its
parent link, held in a side table keyed by the heading element object
(not its ``id`` attribute, which need not be unique), so activating
ancestors never walks the heading tree or the DOM.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from bs4 import BeautifulSoup
from bs4.element import Tag

from docweave.headings import HeadingNode

ACTIVE_CLASS = "active"
TOC_CLASS = "toc"
HAS_CHILDREN_CLASS = "has-children"


def _classes(tag: Tag) -> list[str]:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return list(classes)


def has_class(tag: Tag, name: str) -> bool:
    return name in _classes(tag)


def add_class(tag: Tag, name: str) -> None:
    classes = _classes(tag)
    if name not in classes:
        tag["class"] = [*classes, name]


def remove_class(tag: Tag, name: str) -> None:
    classes = [cls for cls in _classes(tag) if cls != name]
    if classes:
        tag["class"] = classes
    elif tag.has_attr("class"):
        del tag["class"]


@dataclass(eq=False)
class NavigationLink:
    heading: HeadingNode
    anchor: Tag
    item: Tag
    owner_list: Tag
    parent: NavigationLink | None = None

    def ancestors(self) -> Iterator[NavigationLink]:
        link = self.parent
        while link is not None:
            yield link
            link = link.parent


class NavigationTree:
    """The rendered ``ul.toc`` list plus its heading -> link side table."""

    def __init__(self, root: Tag, links: dict[int, NavigationLink]) -> None:
        self.root = root
        self._links = links

    def link_for(self, node: HeadingNode) -> NavigationLink | None:
        return self._links.get(id(node.element))

    @property
    def links(self) -> list[NavigationLink]:
        return list(self._links.values())

    def active_anchors(self) -> list[Tag]:
        return [link.anchor for link in self._links.values() if has_class(link.anchor, ACTIVE_CLASS)]

    def clear_active(self) -> None:
        for tag in self.root.find_all(class_=ACTIVE_CLASS):
            remove_class(tag, ACTIVE_CLASS)

    def activate(self, link: NavigationLink) -> None:
        """Mark a link, its list item and every ancestor entry active."""
        add_class(link.anchor, ACTIVE_CLASS)
        add_class(link.item, ACTIVE_CLASS)
        for ancestor in link.ancestors():
            add_class(ancestor.anchor, ACTIVE_CLASS)
            add_class(ancestor.item, ACTIVE_CLASS)


def build_navigation(roots: Sequence[HeadingNode], soup: BeautifulSoup) -> NavigationTree:
    """Render nested ``ul.toc > li > a`` lists mirroring the hierarchy."""
    links: dict[int, NavigationLink] = {}

    def build_list(nodes: Sequence[HeadingNode], parent: NavigationLink | None) -> Tag:
        owner_list = soup.new_tag("ul")
        owner_list["class"] = [TOC_CLASS]
        for node in nodes:
            item = soup.new_tag("li")
            if node.children:
                item["class"] = [HAS_CHILDREN_CLASS]
            anchor = soup.new_tag("a", href=f"#{node.element.get('id', '')}")
            anchor.string = node.text
            item.append(anchor)
            owner_list.append(item)

            link = NavigationLink(heading=node, anchor=anchor, item=item, owner_list=owner_list, parent=parent)
            links[id(node.element)] = link
            if node.children:
                item.append(build_list(node.children, link))
        return owner_list

    root = build_list(roots, None)
    return NavigationTree(root, links)
