"""
Exceptions raised by the comparison engine.
"""


class PageDiffError(Exception):
    """Base class for every pagediff error."""


class InvalidUrl(PageDiffError, ValueError):
    """A link or image reference cannot be resolved against the base URI."""

    def __init__(self, url, reason=None):
        self.url = url
        self.reason = reason
        message = f"Cannot resolve URL {url!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class EmptyMarkupError(PageDiffError):
    """The source snapshot is empty or has no parseable elements."""


class MissingIndexError(PageDiffError):
    """Classification or removal detection ran before the source index was built."""
