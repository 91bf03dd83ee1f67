"""
Markup parsing for the comparison engine.
Turns snapshot markup into a traversable tree and exposes the node
sequences the indexer and classifier walk: text leaves, anchors and images.
"""

from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from pagediff.config import PARSER, UI_CONTAINER_ID
from pagediff.errors import EmptyMarkupError

# Text under these elements is never compared
SKIPPED_TAGS = {"script", "style"}

# Document metadata; only reachable when a builder leaves out <body>
HEAD_TAGS = {"head", "title"}


@dataclass
class Snapshot:
    soup: BeautifulSoup
    base_uri: str = ""

    @property
    def root(self) -> Tag:
        return self.soup.body or self.soup


def parse_document(markup, base_url: Optional[str] = None, parser: str = PARSER) -> Snapshot:
    soup = BeautifulSoup(markup or "", parser)
    return Snapshot(soup=soup, base_uri=_base_uri(soup, base_url or ""))


def parse_source(markup, base_url: Optional[str] = None, parser: str = PARSER) -> Snapshot:
    """
    Parse the source snapshot.
    Raises EmptyMarkupError when there is nothing to compare against.
    """
    if markup is None or not str(markup).strip():
        raise EmptyMarkupError("Source snapshot is empty")

    snapshot = parse_document(markup, base_url, parser)
    if snapshot.soup.find(True) is None:
        raise EmptyMarkupError("Source snapshot has no elements")
    return snapshot


def _base_uri(soup: BeautifulSoup, base_url: str) -> str:
    base = soup.find("base", href=True)
    if base is None:
        return base_url
    try:
        return urljoin(base_url, base["href"].strip())
    except ValueError:
        return base_url


def _is_skipped(node, ui_container_id: str) -> bool:
    for parent in node.parents:
        if parent.name in SKIPPED_TAGS or parent.name in HEAD_TAGS:
            return True
        if ui_container_id and parent.get("id") == ui_container_id:
            return True
    return False


def _is_text(node) -> bool:
    # Comments, CDATA, doctype and processing instructions are PreformattedString
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def text_leaves(snapshot: Snapshot, ui_container_id: str = UI_CONTAINER_ID) -> List[NavigableString]:
    """
    Text leaves under body in document order, minus whitespace-only ones
    and anything inside script, style or the UI container.
    """
    leaves = []
    for node in snapshot.root.descendants:
        if not _is_text(node):
            continue
        if not isinstance(node.parent, Tag) or node.parent is snapshot.soup:
            continue
        if not node.strip():
            continue
        if _is_skipped(node, ui_container_id):
            continue
        leaves.append(node)
    return leaves


def visible_text(element: Tag) -> str:
    """Text of an element, excluding script and style content."""
    parts = []
    for node in element.descendants:
        if not _is_text(node) or _inside_skipped(node, element):
            continue
        parts.append(str(node))
    return "".join(parts)


def _inside_skipped(node, element: Tag) -> bool:
    for parent in node.parents:
        if parent is element:
            return False
        if parent.name in SKIPPED_TAGS:
            return True
    return False


def anchors(snapshot: Snapshot) -> List[Tag]:
    return snapshot.soup.find_all("a")


def images(snapshot: Snapshot) -> List[Tag]:
    return snapshot.soup.find_all("img")


def closest(element: Tag, names) -> Optional[Tag]:
    """Nearest element (self included) whose tag name is in names."""
    node = element
    while isinstance(node, Tag) and not isinstance(node, BeautifulSoup):
        if node.name in names:
            return node
        node = node.parent
    return None
