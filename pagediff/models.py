from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple


class DiffKind(Enum):
    HEADING_CHANGE = "Heading Change"
    NEW_LINK = "New Link"
    PARAGRAPH_CHANGE = "Paragraph Change"
    GENERAL_TEXT_CHANGE = "General Text Change"
    REMOVED_TEXT = "Removed Text"
    REMOVED_LINK = "Removed Link"
    MODIFIED_LINK = "Modified Link"
    CTA_TEXT_CHANGE = "CTA Text Change"
    IMAGE_CHANGE = "Image Change"


class Category(Enum):
    HEADING = "HEADING"
    NEW_LINK = "NEW_LINK"
    PARAGRAPH = "PARAGRAPH"
    GENERAL_TEXT = "GENERAL_TEXT"
    REMOVED = "REMOVED"
    MODIFIED_LINK = "MODIFIED_LINK"
    CTA_TEXT = "CTA_TEXT"
    IMAGE = "IMAGE"
    # Filter-only grouping, never assigned to a record
    LINK = "LINK"


class MarkAction(Enum):
    ELEMENT = "ELEMENT"
    ADJACENT = "ADJACENT"
    NONE = "NONE"


class RunStatus(Enum):
    COMPLETED = "COMPLETED"
    EMPTY_SOURCE = "EMPTY_SOURCE"


KIND_CATEGORY: Dict[DiffKind, Category] = {
    DiffKind.HEADING_CHANGE: Category.HEADING,
    DiffKind.NEW_LINK: Category.NEW_LINK,
    DiffKind.PARAGRAPH_CHANGE: Category.PARAGRAPH,
    DiffKind.GENERAL_TEXT_CHANGE: Category.GENERAL_TEXT,
    DiffKind.REMOVED_TEXT: Category.REMOVED,
    DiffKind.REMOVED_LINK: Category.REMOVED,
    DiffKind.MODIFIED_LINK: Category.MODIFIED_LINK,
    DiffKind.CTA_TEXT_CHANGE: Category.CTA_TEXT,
    DiffKind.IMAGE_CHANGE: Category.IMAGE,
}

PRIORITIES: Dict[DiffKind, int] = {
    DiffKind.HEADING_CHANGE: 1,
    DiffKind.NEW_LINK: 2,
    DiffKind.PARAGRAPH_CHANGE: 3,
    DiffKind.GENERAL_TEXT_CHANGE: 4,
    DiffKind.REMOVED_TEXT: 5,
    DiffKind.REMOVED_LINK: 6,
    DiffKind.MODIFIED_LINK: 7,
    DiffKind.CTA_TEXT_CHANGE: 8,
    DiffKind.IMAGE_CHANGE: 9,
}

GROUP_ORDER: Dict[Category, int] = {
    Category.HEADING: 1,
    Category.LINK: 2,
    Category.MODIFIED_LINK: 2,
    Category.NEW_LINK: 2,
    Category.CTA_TEXT: 3,
    Category.PARAGRAPH: 4,
    Category.IMAGE: 5,
    Category.GENERAL_TEXT: 6,
    Category.REMOVED: 7,
}

LINK_CATEGORIES: FrozenSet[Category] = frozenset({
    Category.LINK,
    Category.MODIFIED_LINK,
    Category.NEW_LINK,
})

UNKNOWN_RANK = 99


@dataclass(frozen=True)
class LinkEntry:
    url: str
    text: str


@dataclass(frozen=True)
class SourceIndex:
    """
    Immutable lookup tables built from the source snapshot.
    Read-only once built; classification and removal detection only query it.
    """
    texts: FrozenSet[str]
    links_by_url: Mapping[str, LinkEntry]
    links_by_text: Mapping[str, LinkEntry]
    image_names: FrozenSet[str]
    # texts in first-seen document order
    text_order: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CurrentIndex:
    """Normalized texts and resolved link URLs present in the current snapshot."""
    texts: FrozenSet[str]
    link_urls: FrozenSet[str]


@dataclass
class DifferenceRecord:
    """
    One reported content change.
    anchor is the element of the current tree the change is attached to
    (None for removals). priority and group_order are filled in by the ranker.
    """
    sequence_id: int
    kind: DiffKind
    detail: str
    anchor: Optional[Any] = None
    mark_action: MarkAction = MarkAction.NONE
    priority: int = UNKNOWN_RANK
    group_order: int = UNKNOWN_RANK

    @property
    def category(self) -> Category:
        return KIND_CATEGORY[self.kind]

    @property
    def element_id(self) -> str:
        return f"pce-element-{self.sequence_id}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sequence_id": self.sequence_id,
            "element_id": self.element_id if self.anchor is not None else None,
            "kind": self.kind.value,
            "category": self.category.value,
            "priority": self.priority,
            "group_order": self.group_order,
            "detail": self.detail,
        }


@dataclass
class ComparisonResult:
    status: RunStatus
    records: List[DifferenceRecord] = field(default_factory=list)
    count: int = 0
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is RunStatus.COMPLETED
