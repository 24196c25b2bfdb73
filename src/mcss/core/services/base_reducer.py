"""Base reducer class implementing the shared oracle plumbing."""

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

from ..domain.errors import MalformedFragment, OracleFailure
from ..domain.interfaces.mcs_oracle import MCSOracle
from ..domain.models.fragment import Fragment
from ..domain.models.frontier import FragmentFrontier
from ..domain.models.matching_policy import MatchingPolicy
from ..domain.models.molecular_graph import MolecularGraph
from ..domain.models.result_collection import ReductionFailure, ResultCollection
from ..utils.benchmarking import Timer

Serializer = Callable[[MolecularGraph], str]


class BaseReducer(ABC):
    """
    Base class for reducers that fold a graph list with a pairwise oracle.

    Subclasses implement :meth:`reduce`. A reducer is created for one
    reduction and owns every frontier it builds.
    """

    stage = "reduction"

    def __init__(
        self,
        oracle: MCSOracle,
        policy: MatchingPolicy,
        task_number: int = 0,
        serializer: Optional[Serializer] = None,
    ):
        """Initialize reducer with its oracle dependency."""
        self._oracle = oracle
        self._policy = policy
        self.task_number = task_number
        self._serializer = serializer
        self.logger = logging.getLogger(__name__)

    @abstractmethod
    def reduce(self, graphs: Sequence[MolecularGraph], results: ResultCollection) -> None:
        """
        Reduce ``graphs`` and add the outcome to ``results``.

        Args:
            graphs: Non-empty list of graphs; the first one is the initial seed
            results: Collection receiving result graphs and failure records
        """

    def _compare(
        self,
        query: MolecularGraph,
        target: MolecularGraph,
        results: ResultCollection,
        stage: str,
        index: int,
    ) -> List[Fragment]:
        """
        Run the oracle and wrap its mappings into unique, sorted fragments.

        A mapping whose common fragment cannot be wrapped is logged, recorded
        and dropped; the remaining mappings are kept.

        Raises:
            OracleFailure: If the oracle rejects its input
        """
        with Timer(f"task {self.task_number} {stage} {index}") as timer:
            mappings = self._oracle.compare(query, target, self._policy)
            if mappings is None:
                raise OracleFailure("Oracle returned no result set")

            fragments = FragmentFrontier()
            for mapping in mappings:
                try:
                    fragments.add(Fragment(mapping.common_fragment(query)))
                except MalformedFragment as e:
                    self.logger.error(f"ERROR IN MCS task {self.task_number}: {e}")
                    results.record_failure(
                        ReductionFailure(stage, index, "malformed_fragment", str(e))
                    )

        size = fragments.first().atom_count if fragments else 0
        self.logger.debug(
            f"Comparison for task {self.task_number} has {len(fragments)} unique "
            f"matches of size {size}"
        )
        self.logger.debug(
            f"Query for task {self.task_number} has {query.atom_count} atoms, "
            f"and {query.bond_count} bonds"
        )
        self.logger.debug(
            f"Target for task {self.task_number} has {target.atom_count} atoms, "
            f"and {target.bond_count} bonds"
        )
        self.logger.debug(
            f"Task {self.task_number} {stage} index {index} took "
            f"{timer.elapsed_ms():.1f}ms"
        )
        return list(fragments)

    def _record_failure(
        self, results: ResultCollection, stage: str, index: int, error: Exception
    ) -> None:
        """Log a caught failure and record it on the result collection."""
        if isinstance(error, OracleFailure):
            kind = "oracle"
        elif isinstance(error, MalformedFragment):
            kind = "malformed_fragment"
        else:
            kind = "unexpected"

        self.logger.error(
            f"ERROR IN MCS task {self.task_number} ({stage}, index {index}): {error}",
            exc_info=kind == "unexpected",
        )
        results.record_failure(ReductionFailure(stage, index, kind, str(error)))

    def _describe(self, graph: MolecularGraph) -> str:
        """Canonical string for log messages; never raises."""
        if self._serializer is None:
            return repr(graph)
        try:
            return self._serializer(graph)
        except Exception as e:
            self.logger.debug(f"Could not serialize {graph!r}: {e}")
            return repr(graph)
