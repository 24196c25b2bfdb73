#!/usr/bin/env python3
# src/mcss/core/domain/models/molecular_graph.py

"""
Domain model representing a molecular structure as a graph.
"""

from typing import Dict, Iterable, List, Optional, Tuple
import networkx as nx
from .atom import Atom
from .bond import Bond


class MolecularGraph:
    """Graph representation of a molecular structure.

    Atoms are the vertices and bonds the edges. Instances are treated as
    immutable once built; derived graphs (subgraphs, normalised copies) are
    always new objects.
    """

    def __init__(self, atoms: List[Atom], bonds: List[Bond], name: str = ""):
        """
        Initialize a MolecularGraph.

        Args:
            atoms: List of Atom objects
            bonds: List of Bond objects
            name: Optional label used in log messages
        """
        self.atoms = atoms
        self.bonds = bonds
        self.name = name

    @property
    def atom_count(self) -> int:
        return len(self.atoms)

    @property
    def bond_count(self) -> int:
        return len(self.bonds)

    def __len__(self) -> int:
        return self.atom_count

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<MolecularGraph{label} atoms={self.atom_count} bonds={self.bond_count}>"

    def atom_map(self) -> Dict[int, Atom]:
        """Map atom IDs to atoms."""
        return {atom.atom_id: atom for atom in self.atoms}

    def validate(self) -> None:
        """Check that the graph is structurally consistent.

        Raises:
            ValueError: If atom IDs repeat, a bond references a missing atom,
                or a bond connects an atom to itself
        """
        ids = [atom.atom_id for atom in self.atoms]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate atom IDs in molecular graph")

        known = set(ids)
        for bond in self.bonds:
            if bond.atom1_id not in known or bond.atom2_id not in known:
                raise ValueError(
                    f"Bond {bond.atom1_id}-{bond.atom2_id} references a missing atom"
                )
            if bond.atom1_id == bond.atom2_id:
                raise ValueError(f"Bond on atom {bond.atom1_id} is a self loop")

    def copy(self) -> "MolecularGraph":
        """Return a deep copy of the graph."""
        atoms = [
            Atom(
                atom_id=a.atom_id,
                element=a.element,
                coordinates=tuple(a.coordinates),
                charge=a.charge,
                is_aromatic=a.is_aromatic,
                atom_name=a.atom_name,
            )
            for a in self.atoms
        ]
        bonds = [
            Bond(b.atom1_id, b.atom2_id, bond_type=b.bond_type, bond_order=b.bond_order)
            for b in self.bonds
        ]
        return MolecularGraph(atoms, bonds, name=self.name)

    def subgraph(
        self,
        atom_ids: Iterable[int],
        bonds: Optional[Iterable[Tuple[int, int]]] = None,
    ) -> "MolecularGraph":
        """Extract a subgraph on the given atoms.

        Args:
            atom_ids: Atoms to keep
            bonds: Atom ID pairs of the bonds to keep. When omitted, the
                induced subgraph is returned (every bond between kept atoms).

        Returns:
            New MolecularGraph; atom and bond order follow this graph
        """
        keep = set(atom_ids)
        wanted = None
        if bonds is not None:
            wanted = {(min(a, b), max(a, b)) for a, b in bonds}

        sub = self.copy()
        sub.atoms = [atom for atom in sub.atoms if atom.atom_id in keep]
        sub.bonds = [
            bond
            for bond in sub.bonds
            if bond.atom1_id in keep
            and bond.atom2_id in keep
            and (wanted is None or bond.key in wanted)
        ]
        return sub

    def to_networkx(self) -> nx.Graph:
        """Convert to a NetworkX graph.

        Nodes are atom IDs carrying ``element``, ``charge`` and ``aromatic``;
        edges carry ``bond_type`` (the BondType name) and ``bond_order``.
        """
        G = nx.Graph()

        for atom in self.atoms:
            G.add_node(
                atom.atom_id,
                element=atom.symbol,
                charge=atom.charge,
                aromatic=atom.is_aromatic,
            )

        for bond in self.bonds:
            G.add_edge(
                bond.atom1_id,
                bond.atom2_id,
                bond_type=bond.bond_type.name,
                bond_order=bond.bond_order,
            )

        return G
