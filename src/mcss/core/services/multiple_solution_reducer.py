"""Reducer returning every tied, minimal-size common substructure."""

import logging
import math
from collections import deque
from typing import Iterable, List, Sequence

from ..domain.models.fragment import Fragment
from ..domain.models.frontier import FragmentFrontier
from ..domain.models.molecular_graph import MolecularGraph
from ..domain.models.result_collection import ResultCollection
from ..utils.benchmarking import Timer
from .base_reducer import BaseReducer


class MultipleSolutionReducer(BaseReducer):
    """Discover candidate seeds, then re-validate each against every graph.

    Discovery compares the first graph with every other graph and keeps the
    distinct fragments tied at the smallest size seen. Refinement takes those
    candidates one at a time and walks each through the full graph list,
    narrowing it against a single minimum size shared by all candidates.

    Fragments emitted for an earlier candidate are not filtered again when a
    later candidate lowers the shared minimum, so a run can emit fragments of
    more than one size.
    """

    stage = "multiple"

    @staticmethod
    def _absorb(
        frontier: FragmentFrontier, fragments: Iterable[Fragment], min_size: float
    ) -> float:
        """Apply the minimum-size rule to a batch of fragments.

        A smaller fragment clears the frontier and lowers the minimum; a
        fragment at the minimum joins the frontier; larger ones are ignored.
        """
        for fragment in fragments:
            if fragment.atom_count < min_size:
                frontier.clear()
                min_size = fragment.atom_count
            if fragment.atom_count == min_size:
                frontier.add(fragment)
        return min_size

    def reduce(self, graphs: Sequence[MolecularGraph], results: ResultCollection) -> None:
        if len(graphs) == 1:
            results.add(graphs[0])
            return

        with Timer(f"task {self.task_number}") as timer:
            seeds = self._discover_seeds(graphs, results)
            self.logger.debug(f"No of potential seeds for task {self.task_number}: {len(seeds)}")
            self._refine_seeds(graphs, seeds, results)

        self.logger.debug(
            f"Done: task {self.task_number} took {timer.elapsed_ms():.1f}ms "
            f"and emitted {len(results)} substructures"
        )

    def _discover_seeds(
        self, graphs: Sequence[MolecularGraph], results: ResultCollection
    ) -> List[MolecularGraph]:
        """Collect the distinct minimal fragments of the first graph shared pairwise."""
        query = graphs[0]
        min_size = query.atom_count
        frontier = FragmentFrontier()

        for index in range(1, len(graphs)):
            try:
                fragments = self._compare(query, graphs[index], results, "discovery", index)
            except Exception as e:
                self._record_failure(results, "discovery", index, e)
                frontier.clear()
                break

            if not fragments:
                self.logger.debug(
                    f"Task {self.task_number}: graph {index} shares nothing with the "
                    "seed, abandoning discovery"
                )
                frontier.clear()
                break

            min_size = self._absorb(frontier, fragments, min_size)

        return frontier.graphs()

    def _refine_seeds(
        self,
        graphs: Sequence[MolecularGraph],
        seeds: List[MolecularGraph],
        results: ResultCollection,
    ) -> None:
        """Validate every candidate seed against the full graph list."""
        queue = deque(seeds)
        min_size = math.inf

        while queue:
            current = queue.popleft()
            if self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug(f"Potential seed {self._describe(current)}")
            frontier = FragmentFrontier()
            complete = True
            index = 0

            try:
                for index, target in enumerate(graphs):
                    fragments = self._compare(current, target, results, "refinement", index)
                    if not fragments:
                        complete = False
                        break

                    min_size = self._absorb(frontier, fragments, min_size)
                    top = frontier.first()
                    if top is None:
                        # every fragment was larger than the shared minimum
                        complete = False
                        break
                    current = top.graph
            except Exception as e:
                self._record_failure(results, "refinement", index, e)
                continue

            if not complete:
                self.logger.debug(
                    f"Task {self.task_number}: candidate dropped at graph {index}"
                )
                continue

            for graph in frontier.graphs():
                results.add(graph)
