from dataclasses import dataclass, field
from typing import List, Optional

from pagediff.errors import MissingIndexError
from pagediff.models import CurrentIndex, DifferenceRecord, DiffKind, MarkAction, SourceIndex


@dataclass
class ComparisonRun:
    """
    State owned by one comparison run: the sequence counter, both indexes
    and the records emitted so far. Passed explicitly to every phase.
    """
    source_index: Optional[SourceIndex] = None
    current_index: Optional[CurrentIndex] = None
    records: List[DifferenceRecord] = field(default_factory=list)
    counter: int = 0

    def reset(self) -> None:
        self.source_index = None
        self.current_index = None
        self.records = []
        self.counter = 0

    def next_sequence_id(self) -> int:
        self.counter += 1
        return self.counter

    def require_index(self) -> SourceIndex:
        if self.source_index is None:
            raise MissingIndexError("Source index has not been built for this run")
        return self.source_index

    def emit(self, kind: DiffKind, detail: str, anchor=None,
             mark_action: MarkAction = MarkAction.NONE) -> DifferenceRecord:
        record = DifferenceRecord(
            sequence_id=self.next_sequence_id(),
            kind=kind,
            detail=detail,
            anchor=anchor,
            mark_action=mark_action if anchor is not None else MarkAction.NONE,
        )
        self.records.append(record)
        return record
