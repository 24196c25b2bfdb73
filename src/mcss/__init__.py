"""Iterative maximum common substructure reduction over molecular graph lists."""

from .core.domain.models import (
    Atom,
    Bond,
    BondType,
    EdgeComparator,
    Fragment,
    JobType,
    MatchingPolicy,
    MolecularGraph,
    ReductionStatus,
    ResultCollection,
    VertexComparator,
)
from .core.domain.errors import MalformedFragment, MCSSError, OracleFailure
from .core.domain.implementations import CliqueMCSOracle, RDKitMCSOracle
from .core.services import BatchReductionService, ReductionTask

__version__ = "0.1.0"

__all__ = [
    "Atom",
    "Bond",
    "BondType",
    "EdgeComparator",
    "Fragment",
    "JobType",
    "MatchingPolicy",
    "MolecularGraph",
    "ReductionStatus",
    "ResultCollection",
    "VertexComparator",
    "MalformedFragment",
    "MCSSError",
    "OracleFailure",
    "CliqueMCSOracle",
    "RDKitMCSOracle",
    "BatchReductionService",
    "ReductionTask",
]
