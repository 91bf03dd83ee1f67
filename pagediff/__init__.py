from pagediff.models import (
    Category,
    ComparisonResult,
    DifferenceRecord,
    DiffKind,
    LinkEntry,
    RunStatus,
    SourceIndex,
)
from pagediff.errors import EmptyMarkupError, InvalidUrl, MissingIndexError, PageDiffError
from pagediff.engine import ComparisonEngine, compare_pages
from pagediff.marking import Marker, SoupMarker, apply_marks
from pagediff.parser import Snapshot, parse_document, parse_source

__version__ = "1.0.0"
