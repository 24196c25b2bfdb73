#!/usr/bin/env python3
# src/mcss/core/domain/models/fragment.py

"""
Deduplicable wrapper around one candidate common-substructure graph.
"""

from functools import total_ordering
from typing import Tuple
import networkx as nx

from ..errors import MalformedFragment
from .molecular_graph import MolecularGraph

WL_ITERATIONS = 3


def structural_key(graph: MolecularGraph) -> Tuple[int, int, str]:
    """Compute the canonical signature of a graph.

    The key is ``(atom_count, bond_count, wl_hash)``, where ``wl_hash`` is
    the Weisfeiler-Lehman hash over element and bond-type labels. It depends
    only on graph structure, never on atom IDs or insertion order.
    """
    G = graph.to_networkx()
    wl_hash = nx.weisfeiler_lehman_graph_hash(
        G, node_attr="element", edge_attr="bond_type", iterations=WL_ITERATIONS
    )
    return (graph.atom_count, graph.bond_count, wl_hash)


def _labels_match(a: dict, b: dict, attr: str) -> bool:
    return a.get(attr) == b.get(attr)


def ring_signature(G: nx.Graph) -> Tuple[int, ...]:
    """Sorted ring sizes of a minimum cycle basis."""
    return tuple(sorted(len(cycle) for cycle in nx.minimum_cycle_basis(G)))


@total_ordering
class Fragment:
    """Immutable candidate common substructure.

    Hashing and the primary order derive from :func:`structural_key`.
    Fragments sharing a key are equal only when their labelled graphs are
    isomorphic, so structurally identical candidates collapse when held in a
    set or a :class:`~mcss.core.domain.models.frontier.FragmentFrontier`
    while Weisfeiler-Lehman collisions stay distinct. Colliding fragments are
    ordered by their ring sizes.
    """

    __slots__ = ("_graph", "_key", "_nx_graph", "_rings")

    def __init__(self, graph: MolecularGraph):
        """
        Wrap a validated copy of ``graph``.

        Args:
            graph: Common-fragment graph produced from an oracle mapping

        Raises:
            MalformedFragment: If the graph is missing, empty, inconsistent
                or cannot be copied
        """
        if graph is None:
            raise MalformedFragment("Cannot build a fragment from None")
        try:
            clone = graph.copy()
            clone.validate()
        except MalformedFragment:
            raise
        except Exception as e:
            raise MalformedFragment(f"Invalid fragment graph: {e}") from e
        if clone.atom_count == 0:
            raise MalformedFragment("Fragment graph has no atoms")

        self._graph = clone
        self._key = structural_key(clone)
        self._nx_graph = None
        self._rings = None

    @property
    def graph(self) -> MolecularGraph:
        return self._graph

    @property
    def key(self) -> Tuple[int, int, str]:
        return self._key

    @property
    def atom_count(self) -> int:
        return self._key[0]

    @property
    def bond_count(self) -> int:
        return self._key[1]

    def _networkx(self) -> nx.Graph:
        if self._nx_graph is None:
            self._nx_graph = self._graph.to_networkx()
        return self._nx_graph

    def _ring_signature(self) -> Tuple[int, ...]:
        if self._rings is None:
            self._rings = ring_signature(self._networkx())
        return self._rings

    def is_isomorphic_to(self, other: "Fragment") -> bool:
        """Exact labelled isomorphism test over element and bond type."""
        return nx.is_isomorphic(
            self._networkx(),
            other._networkx(),
            node_match=lambda a, b: _labels_match(a, b, "element"),
            edge_match=lambda a, b: _labels_match(a, b, "bond_type"),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fragment):
            return NotImplemented
        if self._key != other._key:
            return False
        return self is other or self.is_isomorphic_to(other)

    def __lt__(self, other: "Fragment") -> bool:
        if not isinstance(other, Fragment):
            return NotImplemented
        if self._key != other._key:
            return self._key < other._key
        return self._ring_signature() < other._ring_signature()

    def __hash__(self) -> int:
        return hash(self._key)

    def __repr__(self) -> str:
        return (
            f"<Fragment atoms={self.atom_count} bonds={self.bond_count} "
            f"hash={self._key[2][:8]}>"
        )
