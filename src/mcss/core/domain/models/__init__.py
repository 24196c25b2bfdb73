"""Domain model classes."""

from .atom import Atom
from .bond import Bond, BondType
from .molecular_graph import MolecularGraph
from .matching_policy import MatchingPolicy, VertexComparator, EdgeComparator
from .job_type import JobType
from .fragment import Fragment, structural_key
from .frontier import FragmentFrontier
from .result_collection import ResultCollection, ReductionFailure, ReductionStatus

__all__ = [
    "Atom",
    "Bond",
    "BondType",
    "MolecularGraph",
    "MatchingPolicy",
    "VertexComparator",
    "EdgeComparator",
    "JobType",
    "Fragment",
    "structural_key",
    "FragmentFrontier",
    "ResultCollection",
    "ReductionFailure",
    "ReductionStatus",
]
