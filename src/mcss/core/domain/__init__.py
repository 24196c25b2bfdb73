"""Core domain models and interfaces."""

from .models.molecular_graph import MolecularGraph
from .models.fragment import Fragment
from .models.matching_policy import MatchingPolicy
from .models.job_type import JobType
from .models.result_collection import ResultCollection
from .interfaces.mcs_oracle import MCSOracle, CommonFragmentMapping
from .errors import MCSSError, OracleFailure, MalformedFragment

__all__ = [
    "MolecularGraph",
    "Fragment",
    "MatchingPolicy",
    "JobType",
    "ResultCollection",
    "MCSOracle",
    "CommonFragmentMapping",
    "MCSSError",
    "OracleFailure",
    "MalformedFragment",
]
