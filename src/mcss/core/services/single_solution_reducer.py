"""Reducer returning one representative common substructure."""

from typing import Callable, Optional, Sequence

from ..domain.interfaces.mcs_oracle import MCSOracle
from ..domain.models.matching_policy import MatchingPolicy
from ..domain.models.molecular_graph import MolecularGraph
from ..domain.models.result_collection import ResultCollection
from ..utils.benchmarking import Timer
from ..utils.normalization import remove_hydrogens
from .base_reducer import BaseReducer, Serializer


class SingleSolutionReducer(BaseReducer):
    """Fold the graph list into one common substructure by sequential refinement.

    The running seed is always the query of each comparison, so it can only
    shrink or stay the same. The first empty comparison ends the reduction
    with the seed held at that point.
    """

    stage = "single"

    def __init__(
        self,
        oracle: MCSOracle,
        policy: MatchingPolicy,
        task_number: int = 0,
        serializer: Optional[Serializer] = None,
        normalizer: Optional[Callable[[MolecularGraph], MolecularGraph]] = None,
    ):
        super().__init__(oracle, policy, task_number, serializer)
        self._normalizer = normalizer or remove_hydrogens

    def reduce(self, graphs: Sequence[MolecularGraph], results: ResultCollection) -> None:
        seed = graphs[0]

        with Timer(f"task {self.task_number}") as timer:
            for index in range(1, len(graphs)):
                try:
                    target = self._normalizer(graphs[index])
                    fragments = self._compare(seed, target, results, self.stage, index)
                except Exception as e:
                    self._record_failure(results, self.stage, index, e)
                    break

                if not fragments:
                    self.logger.debug(
                        f"Task {self.task_number}: no common substructure with "
                        f"graph {index}, stopping"
                    )
                    break

                selected = fragments[0]
                if selected.atom_count > seed.atom_count:
                    self.logger.warning(
                        f"Task {self.task_number}: oracle returned a fragment larger "
                        f"than the query ({selected.atom_count} > {seed.atom_count}); "
                        "keeping the current seed"
                    )
                    continue
                seed = selected.graph

        if seed is not None:
            results.add(seed)
            self.logger.debug(
                f"Done: task {self.task_number} took {timer.elapsed_ms():.1f}ms "
                f"and mcss has {seed.atom_count} atoms, and {seed.bond_count} bonds"
            )
