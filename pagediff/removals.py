"""
Removed content detection.
Reports source texts and link URLs that no longer appear anywhere in the
current snapshot. Removal records never point at an element.
"""

from typing import List

from pagediff.config import UI_CONTAINER_ID
from pagediff.indexer import build_current_index
from pagediff.logger import logger
from pagediff.models import DifferenceRecord, DiffKind
from pagediff.parser import Snapshot
from pagediff.run import ComparisonRun


def detect_removals(current: Snapshot, run: ComparisonRun, ui_container_id: str = UI_CONTAINER_ID) -> List[DifferenceRecord]:
    index = run.require_index()
    if run.current_index is None:
        run.current_index = build_current_index(current, ui_container_id)
    present = run.current_index

    start = len(run.records)

    for text in index.text_order:
        if text not in present.texts:
            run.emit(DiffKind.REMOVED_TEXT, f'Text removed: "{text}"')

    for entry in index.links_by_url.values():
        if entry.url not in present.link_urls:
            run.emit(DiffKind.REMOVED_LINK, f"URL removed: {entry.url}")

    emitted = run.records[start:]
    logger.debug(f"[REMOVED] {len(emitted)} removal(s) detected")
    return emitted
