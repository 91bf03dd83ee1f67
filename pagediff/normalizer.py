"""
Canonicalization helpers shared by the indexer, classifier and removal detector.
Pure functions, no state.
"""

import re
from typing import List, Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

from pagediff.errors import InvalidUrl

_WHITESPACE_RE = re.compile(r"\s+")

DEFAULT_PORTS = {"http": 80, "https": 443}


def normalize_text(raw: Optional[str]) -> str:
    """
    Trim, collapse whitespace runs to one space, lower-case.
    Empty result means "no comparable text".
    """
    return _WHITESPACE_RE.sub(" ", (raw or "").strip()).lower()


def resolve_absolute_url(base_uri: Optional[str], maybe_relative: Optional[str]) -> str:
    """
    Resolve a URL reference against the document base URI.
    Raises InvalidUrl when either side cannot be parsed.
    """
    ref = (maybe_relative or "").strip()
    try:
        resolved = urljoin(base_uri or "", ref)
        parts = urlsplit(resolved)
        # Touching .port validates it
        parts.port
    except ValueError as e:
        raise InvalidUrl(ref, str(e)) from e

    if not parts.netloc:
        return resolved

    # Scheme and host are case-insensitive and default ports are implied;
    # an authority with no path means "/"
    path = parts.path
    if not path and parts.scheme in ("http", "https"):
        path = "/"
    scheme = parts.scheme.lower()
    return urlunsplit((
        scheme,
        _canonical_netloc(scheme, parts.netloc, parts.port),
        path,
        parts.query,
        parts.fragment,
    ))


def _canonical_netloc(scheme: str, netloc: str, port: Optional[int]) -> str:
    userinfo, sep, hostport = netloc.rpartition("@")
    hostport = hostport.lower()
    if port is not None and DEFAULT_PORTS.get(scheme) == port:
        hostport = hostport[:hostport.rindex(":")]
    return f"{userinfo}{sep}{hostport}"


def final_path_segment(url: Optional[str], base_uri: Optional[str] = "") -> Optional[str]:
    """Last '/'-delimited path segment of the resolved URL, or None."""
    try:
        resolved = resolve_absolute_url(base_uri, url)
    except InvalidUrl:
        return None
    name = urlsplit(resolved).path.split("/")[-1]
    return name or None


def srcset_candidate_names(srcset: Optional[str], base_uri: Optional[str] = "") -> List[str]:
    """
    Filenames of every candidate in a srcset attribute.
    Each candidate is "<url> [descriptor]"; only the url part matters.
    """
    names = []
    for candidate in (srcset or "").split(","):
        tokens = candidate.split()
        if not tokens:
            continue
        name = final_path_segment(tokens[0], base_uri)
        if name:
            names.append(name)
    return names


def image_candidate_names(src: Optional[str], srcset: Optional[str], base_uri: Optional[str] = "") -> List[str]:
    """
    Ordered, de-duplicated candidate names for one image: src first, then srcset.
    """
    names = []
    if src:
        names.append(final_path_segment(src, base_uri))
    names.extend(srcset_candidate_names(srcset, base_uri))
    return list(dict.fromkeys(name for name in names if name))
