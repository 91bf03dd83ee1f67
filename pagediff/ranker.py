"""
Ranking and views over a record set.
Both orders are recomputed on every call; nothing is cached.
"""

from typing import Iterable, List, Optional, Union

from pagediff.models import (
    Category,
    DifferenceRecord,
    DiffKind,
    GROUP_ORDER,
    LINK_CATEGORIES,
    PRIORITIES,
    UNKNOWN_RANK,
)
from pagediff.normalizer import normalize_text

ALL = "ALL"

ICONS = {
    Category.HEADING: "✏️",
    Category.PARAGRAPH: "\U0001f4c4",
    Category.CTA_TEXT: "\U0001f4ac",
    Category.MODIFIED_LINK: "↔️",
    Category.NEW_LINK: "✨",
    Category.IMAGE: "\U0001f5bc️",
    Category.GENERAL_TEXT: "\U0001f4dd",
    Category.REMOVED: "❌",
}
UNKNOWN_ICON = "❓"

SORT_COLUMNS = ("priority", "icon", "kind", "detail")


def priority_of(kind: DiffKind) -> int:
    return PRIORITIES.get(kind, UNKNOWN_RANK)


def group_order_of(category: Category) -> int:
    return GROUP_ORDER.get(category, UNKNOWN_RANK)


def rank(records: Iterable[DifferenceRecord]) -> List[DifferenceRecord]:
    """Fill in priority and group order on each record."""
    ranked = list(records)
    for record in ranked:
        record.priority = priority_of(record.kind)
        record.group_order = group_order_of(record.category)
    return ranked


def default_order(records: Iterable[DifferenceRecord]) -> List[DifferenceRecord]:
    return sorted(records, key=lambda r: priority_of(r.kind))


def _as_category(active: Union[Category, str, None]) -> Optional[Category]:
    if active is None or active == ALL:
        return None
    if isinstance(active, Category):
        return active
    return Category(str(active).upper())


def matches_category(record: DifferenceRecord, active: Category) -> bool:
    if active is Category.LINK:
        return record.category in LINK_CATEGORIES
    return record.category is active


def grouped_order(records: Iterable[DifferenceRecord],
                  active: Union[Category, str, None] = ALL) -> List[DifferenceRecord]:
    """
    Filter to the active category (LINK matches every link category),
    then order by group, priority breaking ties.
    """
    category = _as_category(active)
    kept = [r for r in records if category is None or matches_category(r, category)]
    return sorted(kept, key=lambda r: (group_order_of(r.category), priority_of(r.kind)))


def priority_badge(priority: int) -> str:
    if priority <= 6:
        return "HIGH"
    if priority == 7:
        return "MED"
    return "LOW"


def icon_of(category: Category) -> str:
    return ICONS.get(category, UNKNOWN_ICON)


def row_text(record: DifferenceRecord) -> str:
    """The searchable text of one summary row."""
    priority = priority_of(record.kind)
    return " ".join((priority_badge(priority), icon_of(record.category), record.kind.value, record.detail))


def search_records(records: Iterable[DifferenceRecord], query: Optional[str]) -> List[DifferenceRecord]:
    needle = normalize_text(query)
    return [r for r in records if needle in normalize_text(row_text(r))]


def sort_by_column(records: Iterable[DifferenceRecord], column: str,
                   ascending: bool = True) -> List[DifferenceRecord]:
    if column not in SORT_COLUMNS:
        raise ValueError(f"Unknown sort column {column!r}, expected one of {', '.join(SORT_COLUMNS)}")

    if column == "priority":
        key = lambda r: priority_of(r.kind)
    elif column == "icon":
        key = lambda r: icon_of(r.category)
    elif column == "kind":
        key = lambda r: r.kind.value.casefold()
    else:
        key = lambda r: r.detail.strip().casefold()

    return sorted(records, key=key, reverse=not ascending)
