from collections import Counter
from typing import List, Optional, Union

from pagediff.classifier import classify
from pagediff.config import DiffConfig
from pagediff.errors import EmptyMarkupError
from pagediff.indexer import build_current_index, build_source_index
from pagediff.logger import logger
from pagediff.marking import Marker, apply_marks
from pagediff.models import Category, ComparisonResult, DifferenceRecord, RunStatus
from pagediff.parser import Snapshot, parse_document, parse_source
from pagediff.ranker import ALL, default_order, grouped_order, rank, search_records
from pagediff.removals import detect_removals
from pagediff.run import ComparisonRun

SnapshotInput = Union[str, bytes, Snapshot]


class ComparisonEngine:
    """
    Compares a source snapshot against the current snapshot.
    Phases run strictly in order: index source, classify current, mark,
    detect removals, rank. Each compare() starts from a fresh run.
    """

    def __init__(self, config: Optional[DiffConfig] = None, marker: Optional[Marker] = None):
        self.config = config or DiffConfig()
        self.marker = marker
        self.run = ComparisonRun()
        self.status: Optional[RunStatus] = None

    @property
    def count(self) -> int:
        """Sequence id high-water mark of the current run."""
        return self.run.counter

    @property
    def records(self) -> List[DifferenceRecord]:
        return list(self.run.records)

    def reset(self) -> None:
        self.run.reset()
        self.status = None
        reset_marker = getattr(self.marker, "reset", None)
        if reset_marker is not None:
            reset_marker()

    # --------------------------------------------------
    # Main entry point
    # --------------------------------------------------
    def compare(
        self,
        source: SnapshotInput,
        current: SnapshotInput,
        *,
        base_url: Optional[str] = None,
        current_base_url: Optional[str] = None,
    ) -> ComparisonResult:
        self.reset()

        if current_base_url is None:
            current_base_url = base_url
        current_snapshot = self._as_current(current, current_base_url)
        # Source references resolve against the current page unless told otherwise
        source_base = base_url if base_url is not None else current_snapshot.base_uri

        try:
            source_snapshot = self._as_source(source, source_base)
        except EmptyMarkupError as e:
            logger.warning(f"[COMPARE] Source snapshot rejected: {e}")
            self.status = RunStatus.EMPTY_SOURCE
            return ComparisonResult(status=self.status, records=[], count=0, reason=str(e))

        ui_id = self.config.ui_container_id

        self.run.source_index = build_source_index(source_snapshot, ui_id)
        self.run.current_index = build_current_index(current_snapshot, ui_id)

        classified = classify(current_snapshot, self.run, ui_id)
        if self.marker is not None:
            apply_marks(classified, self.marker)

        detect_removals(current_snapshot, self.run, ui_id)

        rank(self.run.records)
        self.status = RunStatus.COMPLETED

        self._log_summary()
        return ComparisonResult(status=self.status, records=self.ordered(), count=self.count)

    # --------------------------------------------------
    # Views
    # --------------------------------------------------
    def ordered(self) -> List[DifferenceRecord]:
        return default_order(self.run.records)

    def grouped(self, active: Union[Category, str, None] = ALL) -> List[DifferenceRecord]:
        return grouped_order(self.run.records, active)

    def search(self, query: Optional[str]) -> List[DifferenceRecord]:
        return search_records(self.ordered(), query)

    # --------------------------------------------------
    # Helpers
    # --------------------------------------------------
    def _as_current(self, current: SnapshotInput, base_url: Optional[str]) -> Snapshot:
        if isinstance(current, Snapshot):
            return current
        return parse_document(current, base_url, self.config.parser)

    def _as_source(self, source: SnapshotInput, base_url: Optional[str]) -> Snapshot:
        if isinstance(source, Snapshot):
            if source.soup.find(True) is None:
                raise EmptyMarkupError("Source snapshot has no elements")
            return source
        return parse_source(source, base_url, self.config.parser)

    def _log_summary(self) -> None:
        if not self.run.records:
            logger.info("[COMPARE] UNCHANGED (no differences)")
            return
        per_kind = Counter(r.kind.value for r in self.run.records)
        breakdown = ", ".join(f"{kind}={n}" for kind, n in sorted(per_kind.items()))
        logger.info(f"[COMPARE] {self.count} difference(s) detected: {breakdown}")


def compare_pages(source: SnapshotInput, current: SnapshotInput, **kwargs) -> ComparisonResult:
    """One-shot comparison with a throwaway engine."""
    marker = kwargs.pop("marker", None)
    config = kwargs.pop("config", None)
    return ComparisonEngine(config=config, marker=marker).compare(source, current, **kwargs)
