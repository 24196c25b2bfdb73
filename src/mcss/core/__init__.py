"""Core domain models, interfaces and services for common substructure reduction."""

from .domain.models.molecular_graph import MolecularGraph
from .domain.models.matching_policy import MatchingPolicy
from .domain.models.job_type import JobType
from .domain.models.result_collection import ResultCollection, ReductionStatus
from .domain.interfaces.mcs_oracle import MCSOracle
from .services.reduction_task import ReductionTask
from .services.batch_service import BatchReductionService

__all__ = [
    "MolecularGraph",
    "MatchingPolicy",
    "JobType",
    "ResultCollection",
    "ReductionStatus",
    "MCSOracle",
    "ReductionTask",
    "BatchReductionService",
]
