"""Schedulable unit of work reducing one list of molecular graphs."""

import logging
from typing import Callable, Optional, Sequence, Union

from ..domain.implementations.clique_mcs_oracle import CliqueMCSOracle
from ..domain.interfaces.mcs_oracle import MCSOracle
from ..domain.models.job_type import JobType
from ..domain.models.matching_policy import MatchingPolicy
from ..domain.models.molecular_graph import MolecularGraph
from ..domain.models.result_collection import ReductionFailure, ResultCollection
from ..utils.benchmarking import Timer
from ..utils.normalization import remove_hydrogens
from .base_reducer import BaseReducer, Serializer
from .multiple_solution_reducer import MultipleSolutionReducer
from .single_solution_reducer import SingleSolutionReducer
from ...infrastructure.adapters.rdkit_adapter import to_canonical_smiles


class ReductionTask:
    """Reduce one list of graphs to its common substructure(s).

    A task is executed by one caller at a time. All working state lives inside
    a single :meth:`execute` call, so a task may be executed again later and
    always starts from scratch.
    """

    def __init__(
        self,
        graphs: Sequence[MolecularGraph],
        job_type: Union[JobType, str],
        task_number: int,
        policy: Optional[MatchingPolicy] = None,
        oracle: Optional[MCSOracle] = None,
        normalizer: Optional[Callable[[MolecularGraph], MolecularGraph]] = None,
        serializer: Optional[Serializer] = to_canonical_smiles,
    ):
        """
        Initialize a ReductionTask.

        Args:
            graphs: Graphs to reduce; the first one is the initial seed
            job_type: SINGLE for one result, MULTIPLE for all tied results
            task_number: Identifier used in log messages and on the results
            policy: Matching policy, defaults to exact atoms and exact bonds
            oracle: Pairwise MCS oracle, defaults to CliqueMCSOracle
            normalizer: Target normalisation for single-solution reductions
            serializer: Canonical string function used only for logging

        Raises:
            ValueError: If ``graphs`` is empty
        """
        if not graphs:
            raise ValueError("ReductionTask needs at least one graph")
        if isinstance(job_type, str):
            job_type = JobType.parse(job_type)

        self.graphs = list(graphs)
        self.job_type = job_type
        self.task_number = task_number
        self.policy = policy or MatchingPolicy()
        self.oracle = oracle or CliqueMCSOracle()
        self.normalizer = normalizer or remove_hydrogens
        self.serializer = serializer
        self.logger = logging.getLogger(__name__)

    def _create_reducer(self) -> BaseReducer:
        if self.job_type is JobType.MULTIPLE:
            return MultipleSolutionReducer(
                self.oracle, self.policy, self.task_number, serializer=self.serializer
            )
        return SingleSolutionReducer(
            self.oracle,
            self.policy,
            self.task_number,
            serializer=self.serializer,
            normalizer=self.normalizer,
        )

    def execute(self) -> ResultCollection:
        """
        Run the reduction.

        Returns:
            Sealed ResultCollection with 0..K graphs. Failures never propagate;
            they are logged and listed in ``ResultCollection.failures``.
        """
        results = ResultCollection(task_number=self.task_number)
        self.logger.info(
            f"Calling MCSS task {self.task_number} ({self.job_type.value}, "
            f"policy {self.policy}) with {len(self.graphs)} items"
        )

        with Timer(f"task {self.task_number}") as timer:
            try:
                self._create_reducer().reduce(self.graphs, results)
            except Exception as e:
                self.logger.error(
                    f"ERROR IN MCS task {self.task_number}: {e}", exc_info=True
                )
                results.record_failure(ReductionFailure("task", -1, "unexpected", str(e)))

        self.logger.info(
            f"Done: task {self.task_number} took {timer.elapsed():.3f}s, "
            f"{len(results)} result(s), status {results.status.value}"
        )
        return results.seal()

    __call__ = execute
