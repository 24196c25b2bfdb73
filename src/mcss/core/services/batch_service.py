"""
Batch reduction of large graph collections.

Partitions a graph list into contiguous chunks, runs one ReductionTask per
chunk on a worker pool and merges the chunk results with a final task.
"""

import logging
from concurrent.futures import (
    Executor,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    as_completed,
)
from typing import Dict, List, Optional, Sequence, Union

from tqdm.auto import tqdm

from ..domain.interfaces.mcs_oracle import MCSOracle
from ..domain.models.job_type import JobType
from ..domain.models.matching_policy import MatchingPolicy
from ..domain.models.molecular_graph import MolecularGraph
from ..domain.models.result_collection import ReductionFailure, ResultCollection
from .reduction_task import ReductionTask

logger = logging.getLogger(__name__)


class BatchReductionService:
    """Service running many independent reduction tasks in parallel."""

    def __init__(
        self,
        job_type: Union[JobType, str],
        chunk_size: int = 10,
        max_workers: Optional[int] = None,
        policy: Optional[MatchingPolicy] = None,
        oracle: Optional[MCSOracle] = None,
        use_processes: bool = False,
        show_progress: bool = False,
    ):
        """
        Initialize the batch service.

        Args:
            job_type: Job type of every task
            chunk_size: Number of graphs handed to one task
            max_workers: Pool size, defaults to the executor's own default
            policy: Matching policy shared by all tasks
            oracle: Oracle shared by all tasks (must be picklable for processes)
            use_processes: Use a process pool instead of a thread pool
            show_progress: Display a tqdm progress bar

        Raises:
            ValueError: If ``chunk_size`` is smaller than 1
        """
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if isinstance(job_type, str):
            job_type = JobType.parse(job_type)

        self.job_type = job_type
        self.chunk_size = chunk_size
        self.max_workers = max_workers
        self.policy = policy or MatchingPolicy()
        self.oracle = oracle
        self.use_processes = use_processes
        self.show_progress = show_progress

    def partition(self, graphs: Sequence[MolecularGraph]) -> List[List[MolecularGraph]]:
        """Split graphs into contiguous chunks of at most ``chunk_size``."""
        return [
            list(graphs[start : start + self.chunk_size])
            for start in range(0, len(graphs), self.chunk_size)
        ]

    def _create_task(self, graphs: Sequence[MolecularGraph], task_number: int) -> ReductionTask:
        return ReductionTask(
            graphs,
            self.job_type,
            task_number,
            policy=self.policy,
            oracle=self.oracle,
        )

    def _create_executor(self) -> Executor:
        if self.use_processes:
            return ProcessPoolExecutor(max_workers=self.max_workers)
        return ThreadPoolExecutor(max_workers=self.max_workers)

    def run(self, graphs: Sequence[MolecularGraph]) -> List[ResultCollection]:
        """
        Run one task per chunk.

        Args:
            graphs: Graphs to reduce, in order

        Returns:
            One ResultCollection per chunk, ordered by task number
        """
        chunks = self.partition(graphs)
        if not chunks:
            return []

        logger.info(
            f"Running {len(chunks)} {self.job_type.value} task(s) over {len(graphs)} graphs"
        )
        collected: Dict[int, ResultCollection] = {}

        with tqdm(
            total=len(chunks),
            desc="Reducing graphs",
            unit="task",
            disable=not self.show_progress,
        ) as pbar:
            with self._create_executor() as executor:
                futures = {
                    executor.submit(self._create_task(chunk, task_number)): task_number
                    for task_number, chunk in enumerate(chunks)
                }

                # Process results as they complete
                for future in as_completed(futures):
                    task_number = futures[future]
                    try:
                        collected[task_number] = future.result()
                    except Exception as e:
                        logger.error(f"Task {task_number} did not complete: {e}")
                        failed = ResultCollection(task_number=task_number)
                        failed.record_failure(
                            ReductionFailure("task", -1, "unexpected", str(e))
                        )
                        collected[task_number] = failed.seal()
                    pbar.update(1)

        return [collected[task_number] for task_number in sorted(collected)]

    def reduce(self, graphs: Sequence[MolecularGraph]) -> ResultCollection:
        """
        Reduce all graphs to a single ResultCollection.

        Chunk results are concatenated in task order and reduced once more by
        a final task of the same job type. For MULTIPLE jobs an empty chunk
        result means no substructure spans all graphs, so the final result is
        empty.
        """
        if not graphs:
            raise ValueError("Nothing to reduce")

        chunk_results = self.run(graphs)
        if len(chunk_results) == 1:
            return chunk_results[0]

        merged: List[MolecularGraph] = []
        for collection in chunk_results:
            if not collection and self.job_type is JobType.MULTIPLE:
                logger.info(
                    f"Task {collection.task_number} found no common substructure; "
                    "batch result is empty"
                )
                empty = ResultCollection(task_number=len(chunk_results))
                for failure in collection.failures:
                    empty.record_failure(failure)
                return empty.seal()
            merged.extend(collection)

        if not merged:
            failed = ResultCollection(task_number=len(chunk_results))
            for collection in chunk_results:
                for failure in collection.failures:
                    failed.record_failure(failure)
            return failed.seal()

        return self._create_task(merged, len(chunk_results)).execute()
