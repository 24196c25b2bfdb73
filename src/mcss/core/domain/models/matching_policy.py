"""Vertex and edge compatibility rules used for every pairwise comparison."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class VertexComparator(Enum):
    """How atoms are compared."""

    EXACT = "exact"
    RELAXED = "relaxed"


class EdgeComparator(Enum):
    """How bonds are compared."""

    EXACT = "exact"
    RELAXED = "relaxed"


@dataclass(frozen=True)
class MatchingPolicy:
    """Immutable pair of vertex- and edge-compatibility rules.

    EXACT vertices match on element symbol, RELAXED vertices match any atom.
    EXACT edges match on bond type, RELAXED edges match any bond. With
    ``match_rings`` set, ring atoms and ring bonds only match ring atoms and
    ring bonds.
    """

    vertex: VertexComparator = VertexComparator.EXACT
    edge: EdgeComparator = EdgeComparator.EXACT
    match_rings: bool = False

    @classmethod
    def from_names(
        cls, vertex: str = "exact", edge: str = "exact", match_rings: bool = False
    ) -> "MatchingPolicy":
        """Build a policy from comparator names such as ``"relaxed"``."""
        return cls(
            vertex=VertexComparator(vertex.lower()),
            edge=EdgeComparator(edge.lower()),
            match_rings=match_rings,
        )

    def atoms_match(self, atom1: Dict[str, Any], atom2: Dict[str, Any]) -> bool:
        """Check two node attribute dicts for compatibility."""
        if self.match_rings and atom1.get("in_ring", False) != atom2.get(
            "in_ring", False
        ):
            return False
        if self.vertex is VertexComparator.RELAXED:
            return True
        return str(atom1.get("element", "")).upper() == str(
            atom2.get("element", "")
        ).upper()

    def bonds_match(
        self, bond1: Optional[Dict[str, Any]], bond2: Optional[Dict[str, Any]]
    ) -> bool:
        """Check two edge attribute dicts for compatibility."""
        if bond1 is None or bond2 is None:
            return False
        if self.match_rings and bond1.get("in_ring", False) != bond2.get(
            "in_ring", False
        ):
            return False
        if self.edge is EdgeComparator.RELAXED:
            return True
        return bond1.get("bond_type", "SINGLE") == bond2.get("bond_type", "SINGLE")

    def __str__(self) -> str:
        rings = ", rings" if self.match_rings else ""
        return f"{self.vertex.value}/{self.edge.value}{rings}"
