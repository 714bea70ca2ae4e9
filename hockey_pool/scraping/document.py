"""
Parsed document capability used by the injury heuristics.

The scraping pipeline only talks to ``DocumentNode``; ``SoupNode`` adapts
BeautifulSoup to it so the parser can be swapped without touching the
heuristics.
"""

from typing import Iterator, List, Optional, Protocol

from bs4 import BeautifulSoup
from bs4.element import Tag


class DocumentNode(Protocol):
    """Minimal element interface: query by selector, read text and attributes, walk siblings/ancestors."""

    def select(self, selector: str) -> List["DocumentNode"]: ...

    def select_one(self, selector: str) -> Optional["DocumentNode"]: ...

    def matches(self, selector: str) -> bool: ...

    def text(self) -> str: ...

    def raw_text(self) -> str: ...

    def attr(self, name: str) -> Optional[str]: ...

    def parent(self) -> Optional["DocumentNode"]: ...

    def closest(self, selector: str) -> Optional["DocumentNode"]: ...

    def children(self) -> List["DocumentNode"]: ...

    def previous_siblings(self) -> Iterator["DocumentNode"]: ...

    def next_siblings(self) -> Iterator["DocumentNode"]: ...


class SoupNode:
    """BeautifulSoup implementation of DocumentNode."""

    __slots__ = ("tag",)

    def __init__(self, tag: Tag):
        self.tag = tag

    def __eq__(self, other) -> bool:
        return isinstance(other, SoupNode) and other.tag is self.tag

    def __hash__(self) -> int:
        return id(self.tag)

    def __repr__(self) -> str:
        return f"SoupNode(<{self.tag.name}>)"

    def select(self, selector: str) -> List["SoupNode"]:
        return [SoupNode(tag) for tag in self.tag.select(selector)]

    def select_one(self, selector: str) -> Optional["SoupNode"]:
        tag = self.tag.select_one(selector)
        return SoupNode(tag) if tag is not None else None

    def matches(self, selector: str) -> bool:
        return self.tag.css.match(selector)

    def text(self) -> str:
        return self.tag.get_text().strip()

    def raw_text(self) -> str:
        return self.tag.get_text()

    def attr(self, name: str) -> Optional[str]:
        value = self.tag.get(name)
        if isinstance(value, list):
            # Multi-valued attributes such as class
            return " ".join(value)
        return value

    def parent(self) -> Optional["SoupNode"]:
        # The document root counts as a parent for top-level elements
        parent = self.tag.parent
        return SoupNode(parent) if parent is not None else None

    def closest(self, selector: str) -> Optional["SoupNode"]:
        """Nearest ancestor element (excluding this node) matching the selector."""
        for ancestor in self.tag.parents:
            if isinstance(ancestor, BeautifulSoup):
                break
            if ancestor.css.match(selector):
                return SoupNode(ancestor)
        return None

    def children(self) -> List["SoupNode"]:
        return [SoupNode(child) for child in self.tag.children if isinstance(child, Tag)]

    def previous_siblings(self) -> Iterator["SoupNode"]:
        for sibling in self.tag.previous_siblings:
            if isinstance(sibling, Tag):
                yield SoupNode(sibling)

    def next_siblings(self) -> Iterator["SoupNode"]:
        for sibling in self.tag.next_siblings:
            if isinstance(sibling, Tag):
                yield SoupNode(sibling)


def parse_document(html: str) -> SoupNode:
    """Parse HTML into the root DocumentNode."""
    return SoupNode(BeautifulSoup(html, "html.parser"))
