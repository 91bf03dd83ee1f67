"""
Change classification for the current snapshot.

Walks text leaves, anchors and images of the current snapshot in document
order and emits a DifferenceRecord for every node the source index does not
account for:

- text: heading, paragraph or general text change, decided by the element
  that directly contains the leaf. Text inside an anchor or button is left
  to link classification.
- links: URL identity is checked before text identity, so an anchor whose
  URL survived but whose text changed is always a CTA text change.
- images: unchanged when any candidate name (src or srcset) was known.
"""

import re
from typing import List

from bs4 import Tag

from pagediff.config import UI_CONTAINER_ID
from pagediff.indexer import image_names, link_text, resolve_link
from pagediff.logger import logger
from pagediff.models import DifferenceRecord, DiffKind, MarkAction
from pagediff.normalizer import normalize_text
from pagediff.parser import Snapshot, anchors, closest, images, text_leaves
from pagediff.run import ComparisonRun

HEADING_RE = re.compile(r"^H[1-6]$")
LINK_LIKE_TAGS = ("a", "button")


def classify(current: Snapshot, run: ComparisonRun, ui_container_id: str = UI_CONTAINER_ID) -> List[DifferenceRecord]:
    """Run text, link and image classification; returns the records emitted."""
    start = len(run.records)
    classify_texts(current, run, ui_container_id)
    classify_links(current, run)
    classify_images(current, run)
    emitted = run.records[start:]
    logger.debug(f"[CLASSIFY] {len(emitted)} change(s) in current snapshot")
    return emitted


def classify_texts(current: Snapshot, run: ComparisonRun, ui_container_id: str = UI_CONTAINER_ID) -> None:
    index = run.require_index()

    for leaf in text_leaves(current, ui_container_id):
        if normalize_text(leaf) in index.texts:
            continue

        parent = leaf.parent
        tag = parent.name.upper()
        detail = f"Text changed in <{tag}>"

        if HEADING_RE.match(tag):
            run.emit(DiffKind.HEADING_CHANGE, detail, parent, MarkAction.ELEMENT)
        elif tag == "P":
            run.emit(DiffKind.PARAGRAPH_CHANGE, detail, parent, MarkAction.ELEMENT)
        elif not is_link_like(parent):
            run.emit(DiffKind.GENERAL_TEXT_CHANGE, detail, parent, MarkAction.ELEMENT)


def classify_links(current: Snapshot, run: ComparisonRun) -> None:
    index = run.require_index()

    for anchor in anchors(current):
        url = resolve_link(anchor, current.base_uri)
        text = link_text(anchor)

        known = index.links_by_url.get(url) if url is not None else None
        if known is not None:
            if known.text == text:
                continue
            run.emit(
                DiffKind.CTA_TEXT_CHANGE,
                f'Link text changed from "{known.text}"',
                anchor,
                MarkAction.ELEMENT,
            )
        elif text in index.links_by_text:
            previous = index.links_by_text[text]
            run.emit(
                DiffKind.MODIFIED_LINK,
                f"URL changed from: {previous.url}",
                anchor,
                MarkAction.ELEMENT,
            )
        else:
            shown = url if url is not None else (anchor.get("href") or "")
            run.emit(DiffKind.NEW_LINK, f"URL: {shown}", anchor, MarkAction.ELEMENT)


def classify_images(current: Snapshot, run: ComparisonRun) -> None:
    index = run.require_index()

    for img in images(current):
        names = image_names(img, current.base_uri)
        if any(name in index.image_names for name in names):
            continue
        first = names[0] if names else "N/A"
        run.emit(DiffKind.IMAGE_CHANGE, f"Filename: {first}", img, MarkAction.ADJACENT)


def is_link_like(element: Tag) -> bool:
    return closest(element, LINK_LIKE_TAGS) is not None
