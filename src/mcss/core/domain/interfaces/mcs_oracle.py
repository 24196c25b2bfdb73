"""Interface for pairwise maximum common substructure search."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..models.molecular_graph import MolecularGraph
from ..models.matching_policy import MatchingPolicy


@dataclass(frozen=True)
class CommonFragmentMapping:
    """One maximum common substructure mapping between two graphs.

    ``atom_pairs`` holds ``(query_atom_id, target_atom_id)`` pairs. When
    ``query_bonds`` is None the common fragment is the subgraph of the query
    induced by the mapped atoms; otherwise only the listed query bonds are
    kept.
    """

    atom_pairs: Tuple[Tuple[int, int], ...]
    query_bonds: Optional[Tuple[Tuple[int, int], ...]] = None

    @property
    def size(self) -> int:
        return len(self.atom_pairs)

    def query_atoms(self) -> List[int]:
        return [query_id for query_id, _ in self.atom_pairs]

    def common_fragment(self, query: MolecularGraph) -> MolecularGraph:
        """Build the common-fragment graph on the query side of the mapping."""
        fragment = query.subgraph(self.query_atoms(), bonds=self.query_bonds)
        if query.name:
            fragment.name = f"{query.name}:mcs"
        return fragment


class MCSOracle(ABC):
    """Abstract base class for pairwise common-substructure search strategies."""

    @abstractmethod
    def compare(
        self, query: MolecularGraph, target: MolecularGraph, policy: MatchingPolicy
    ) -> List[CommonFragmentMapping]:
        """
        Find all maximum common substructure mappings between two graphs.

        Args:
            query: Graph the common fragments are expressed on
            target: Graph to compare against
            policy: Vertex and edge compatibility rules

        Returns:
            Deterministically ordered, possibly empty list of mappings

        Raises:
            OracleFailure: If either graph is not valid input
        """
        pass
