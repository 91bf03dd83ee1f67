"""
Snapshot loading.
Fetches a page over HTTP or reads saved markup from disk.
Only HTML responses are accepted.
"""

from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import requests

from pagediff.config import REQUEST_TIMEOUT, USER_AGENT
from pagediff.logger import logger


def is_remote(location: str) -> bool:
    return urlparse(location).scheme in ("http", "https")


def fetch_html(url: str) -> Optional[str]:
    """
    Fetch a URL and return its HTML body.
    Returns None for non-2xx, non-HTML, timeouts and connection errors.
    """
    try:
        r = requests.get(
            url,
            timeout=REQUEST_TIMEOUT,
            headers={"User-Agent": USER_AGENT},
            allow_redirects=True,
        )
    except requests.exceptions.Timeout:
        logger.warning(f"[FETCH] Timeout fetching {url}")
        return None
    except requests.exceptions.ConnectionError:
        logger.warning(f"[FETCH] Connection error fetching {url}")
        return None
    except requests.exceptions.RequestException as e:
        logger.warning(f"[FETCH] Request failed for {url}: {e}")
        return None

    ct = r.headers.get("Content-Type", "").lower()
    if not 200 <= r.status_code < 300:
        logger.warning(f"[FETCH] HTTP {r.status_code} for {url}")
        return None
    if "text/html" not in ct:
        logger.warning(f"[FETCH] Ignored non-HTML response ({ct or 'no content type'}) for {url}")
        return None

    logger.info(f"[FETCH] {url} ({len(r.content)} bytes)")
    return r.text


def load_snapshot_text(location: str) -> Optional[str]:
    """Markup for a snapshot location: http(s) URLs are fetched, anything else is a file path."""
    if is_remote(location):
        return fetch_html(location)

    path = Path(location)
    if not path.exists():
        logger.error(f"[FETCH] Snapshot file missing: {path}")
        return None
    return path.read_text(encoding="utf-8", errors="ignore")
