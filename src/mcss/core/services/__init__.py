"""Reduction services."""

from .base_reducer import BaseReducer
from .single_solution_reducer import SingleSolutionReducer
from .multiple_solution_reducer import MultipleSolutionReducer
from .reduction_task import ReductionTask
from .batch_service import BatchReductionService

__all__ = [
    "BaseReducer",
    "SingleSolutionReducer",
    "MultipleSolutionReducer",
    "ReductionTask",
    "BatchReductionService",
]
