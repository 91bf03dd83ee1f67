"""
Snapshot indexing.
One pass over a parsed snapshot producing the lookup tables the
classifier and removal detector query.
"""

from types import MappingProxyType
from typing import Dict, Optional

from bs4 import Tag

from pagediff.config import UI_CONTAINER_ID
from pagediff.errors import InvalidUrl
from pagediff.models import CurrentIndex, LinkEntry, SourceIndex
from pagediff.normalizer import image_candidate_names, normalize_text, resolve_absolute_url
from pagediff.parser import Snapshot, anchors, images, text_leaves, visible_text
from pagediff.logger import logger


def resolve_link(anchor: Tag, base_uri: str) -> Optional[str]:
    """
    Absolute URL of an anchor, or None when it cannot be resolved.
    A missing href resolves like an empty reference (the base URI).
    """
    href = anchor.get("href") or ""
    try:
        return resolve_absolute_url(base_uri, href)
    except InvalidUrl as e:
        logger.debug(f"[INDEX] Unresolvable link skipped: {e}")
        return None


def link_text(anchor: Tag) -> str:
    return normalize_text(visible_text(anchor))


def image_names(img: Tag, base_uri: str):
    return image_candidate_names(img.get("src"), img.get("srcset"), base_uri)


def build_source_index(snapshot: Snapshot, ui_container_id: str = UI_CONTAINER_ID) -> SourceIndex:
    """
    Build the immutable SourceIndex for a source snapshot.
    Duplicate URLs or link texts keep the last anchor seen.
    """
    texts = dict.fromkeys(normalize_text(leaf) for leaf in text_leaves(snapshot, ui_container_id))

    links_by_url: Dict[str, LinkEntry] = {}
    links_by_text: Dict[str, LinkEntry] = {}
    for anchor in anchors(snapshot):
        url = resolve_link(anchor, snapshot.base_uri)
        if url is None:
            continue
        entry = LinkEntry(url=url, text=link_text(anchor))
        links_by_url[url] = entry
        if entry.text:
            links_by_text[entry.text] = entry

    names = set()
    for img in images(snapshot):
        names.update(image_names(img, snapshot.base_uri))

    logger.debug(
        f"[INDEX] Source indexed: {len(texts)} text(s), {len(links_by_url)} link URL(s), "
        f"{len(links_by_text)} link text(s), {len(names)} image name(s)"
    )

    return SourceIndex(
        texts=frozenset(texts),
        text_order=tuple(texts),
        links_by_url=MappingProxyType(links_by_url),
        links_by_text=MappingProxyType(links_by_text),
        image_names=frozenset(names),
    )


def build_current_index(snapshot: Snapshot, ui_container_id: str = UI_CONTAINER_ID) -> CurrentIndex:
    """Texts and link URLs of the current snapshot, used for removal lookups."""
    texts = frozenset(normalize_text(leaf) for leaf in text_leaves(snapshot, ui_container_id))
    urls = set()
    for anchor in anchors(snapshot):
        url = resolve_link(anchor, snapshot.base_uri)
        if url is not None:
            urls.add(url)
    return CurrentIndex(texts=texts, link_urls=frozenset(urls))
