"""
Marking pass.
Classification only records which elements changed; this module applies
the visual treatment afterwards, one marker call per anchored record.
"""

from typing import Iterable, Protocol

from bs4 import BeautifulSoup, Tag

from pagediff.logger import logger
from pagediff.models import Category, DifferenceRecord, LINK_CATEGORIES, MarkAction

COLORS = {
    Category.HEADING: "#FFC300",
    Category.PARAGRAPH: "#FFFAA0",
    Category.CTA_TEXT: "#DA70D6",
    Category.LINK: "#FF4136",
    Category.IMAGE: "#82CA9D",
    Category.GENERAL_TEXT: "#E0E0E0",
    Category.REMOVED: "#B0C4DE",
}

BACKGROUND_CATEGORIES = {
    Category.HEADING,
    Category.PARAGRAPH,
    Category.GENERAL_TEXT,
    Category.CTA_TEXT,
}

ID_PREFIX = "pce-element-"
MARKED_ATTR = "data-pce-marked"


class Marker(Protocol):
    """
    Receives one call per anchored record. A marker that numbers its marks
    may also define reset(); the engine calls it at the start of every run.
    """
    def mark(self, element, category: Category) -> None: ...

    def mark_adjacent(self, element, category: Category) -> None: ...


def apply_marks(records: Iterable[DifferenceRecord], marker: Marker) -> int:
    """
    Call the marker once per record that carries an element, in emission order.
    Returns the number of marker calls made.
    """
    calls = 0
    for record in sorted(records, key=lambda r: r.sequence_id):
        if record.anchor is None or record.mark_action is MarkAction.NONE:
            continue
        if record.mark_action is MarkAction.ADJACENT:
            marker.mark_adjacent(record.anchor, record.category)
        else:
            marker.mark(record.anchor, record.category)
        calls += 1
    logger.debug(f"[MARK] {calls} element(s) marked")
    return calls


def _add_style(element: Tag, **declarations) -> None:
    existing = (element.get("style") or "").strip().rstrip(";")
    added = "; ".join(f"{k.replace('_', '-')}: {v}" for k, v in declarations.items())
    element["style"] = f"{existing}; {added}" if existing else added


class SoupMarker:
    """
    Marks BeautifulSoup elements in place.

    Ids are handed out in call order. apply_marks calls in emission order and
    every classified record precedes the removals, so the N-th marked element
    gets the id of the record with sequence id N.
    """

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup
        self.count = 0

    def reset(self) -> None:
        self.count = 0

    def _tag(self, element: Tag) -> str:
        self.count += 1
        element_id = f"{ID_PREFIX}{self.count}"
        element["id"] = element_id
        element[MARKED_ATTR] = "true"
        _add_style(element, cursor="pointer")
        return element_id

    def mark(self, element: Tag, category: Category) -> None:
        self._tag(element)
        if category in BACKGROUND_CATEGORIES:
            _add_style(element, background_color=COLORS[category])
        elif category in LINK_CATEGORIES:
            _add_style(element, border=f"3px solid {COLORS[Category.LINK]}", padding="2px")

    def mark_adjacent(self, element: Tag, category: Category) -> None:
        element_id = self._tag(element)
        # Replace the indicator left by an earlier run on the same soup
        following = element.next_sibling
        if isinstance(following, Tag) and following.name == "span" and following.has_attr("data-element-id"):
            following.decompose()
        marker = self.soup.new_tag("span", attrs={"class": "pce-marker", "data-element-id": element_id})
        dot = self.soup.new_tag(
            "span",
            attrs={
                "class": "pce-marker-dot pce-flash",
                "style": f"background-color:{COLORS.get(category, COLORS[Category.IMAGE])};",
            },
        )
        marker.append(dot)
        element.insert_after(marker)
