"""Domain model for the output of one reduction task."""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from .molecular_graph import MolecularGraph


class ReductionStatus(Enum):
    """Outcome of a reduction, derived from results and recorded failures."""

    COMPLETE = "complete"
    PARTIAL = "partial"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass
class ReductionFailure:
    """A failure caught and absorbed during a reduction.

    ``kind`` is one of ``"oracle"``, ``"malformed_fragment"`` or
    ``"unexpected"``; ``stage`` names the reducer step (``"single"``,
    ``"discovery"``, ``"refinement"``, ``"task"``).
    """

    stage: str
    index: int
    kind: str
    message: str


class ResultCollection:
    """Order-preserving, thread-safe container of result graphs.

    A reduction fills the collection once and seals it before handing it back;
    adding to a sealed collection raises ``RuntimeError``.
    """

    def __init__(self, task_number: Optional[int] = None):
        self.task_number = task_number
        self._graphs: List[MolecularGraph] = []
        self._failures: List[ReductionFailure] = []
        self._sealed = False
        self._lock = threading.Lock()

    def add(self, graph: MolecularGraph) -> None:
        with self._lock:
            if self._sealed:
                raise RuntimeError("Result collection is sealed")
            self._graphs.append(graph)

    def record_failure(self, failure: ReductionFailure) -> None:
        with self._lock:
            if self._sealed:
                raise RuntimeError("Result collection is sealed")
            self._failures.append(failure)

    def seal(self) -> "ResultCollection":
        with self._lock:
            self._sealed = True
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def graphs(self) -> List[MolecularGraph]:
        """Snapshot of the result graphs in insertion order."""
        with self._lock:
            return list(self._graphs)

    @property
    def failures(self) -> List[ReductionFailure]:
        with self._lock:
            return list(self._failures)

    @property
    def status(self) -> ReductionStatus:
        with self._lock:
            has_results = bool(self._graphs)
            has_failures = bool(self._failures)
        if has_results:
            return ReductionStatus.PARTIAL if has_failures else ReductionStatus.COMPLETE
        return ReductionStatus.FAILED if has_failures else ReductionStatus.EMPTY

    def __iter__(self) -> Iterator[MolecularGraph]:
        return iter(self.graphs)

    def __len__(self) -> int:
        with self._lock:
            return len(self._graphs)

    def __getitem__(self, index: int) -> MolecularGraph:
        with self._lock:
            return self._graphs[index]

    def __bool__(self) -> bool:
        return len(self) > 0

    def __getstate__(self):
        state = self.__dict__.copy()
        del state["_lock"]
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return (
            f"<ResultCollection task={self.task_number} graphs={len(self)} "
            f"status={self.status.value}>"
        )
