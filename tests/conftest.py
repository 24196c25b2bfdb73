import pytest
import networkx as nx

from mcss.core.domain.errors import OracleFailure
from mcss.core.domain.interfaces.mcs_oracle import CommonFragmentMapping, MCSOracle
from mcss.core.domain.models.atom import Atom
from mcss.core.domain.models.bond import Bond, BondType
from mcss.core.domain.models.molecular_graph import MolecularGraph


def make_graph(elements, bonds, name=""):
    """Build a MolecularGraph from element symbols and (i, j[, BondType]) tuples."""
    atoms = [Atom(atom_id=i, element=element) for i, element in enumerate(elements)]
    bond_list = []
    for bond in bonds:
        bond_type = bond[2] if len(bond) > 2 else BondType.SINGLE
        bond_list.append(Bond(bond[0], bond[1], bond_type=bond_type))
    return MolecularGraph(atoms, bond_list, name=name)


RING_BONDS = [(0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (5, 0)]


def cyclohexane(name="ring"):
    return make_graph(["C"] * 6, RING_BONDS, name=name)


def ring_with_two_carbons(name="ring+2"):
    # 1,4-dimethylcyclohexane
    return make_graph(["C"] * 8, RING_BONDS + [(0, 6), (3, 7)], name=name)


def ring_with_nitrogen(name="ring+N"):
    # cyclohexylamine
    return make_graph(["C"] * 6 + ["N"], RING_BONDS + [(0, 6)], name=name)


def cyclohexanol(name="cyclohexanol"):
    return make_graph(["C"] * 6 + ["O"], RING_BONDS + [(0, 6)], name=name)


def methylcyclohexane(name="methylcyclohexane"):
    return make_graph(["C"] * 7, RING_BONDS + [(0, 6)], name=name)


# two fused six-membered rings
DECALIN_BONDS = RING_BONDS + [(5, 6), (6, 7), (7, 8), (8, 9), (9, 4)]

# two five-membered rings joined by a single bond
BICYCLOPENTYL_BONDS = [
    (0, 1), (1, 2), (2, 3), (3, 4), (4, 0),
    (5, 6), (6, 7), (7, 8), (8, 9), (9, 5),
    (0, 5),
]


def decalin(name="decalin"):
    return make_graph(["C"] * 10, DECALIN_BONDS, name=name)


def bicyclopentyl(name="bicyclopentyl"):
    return make_graph(["C"] * 10, BICYCLOPENTYL_BONDS, name=name)


def is_isomorphic(graph1, graph2):
    return nx.is_isomorphic(
        graph1.to_networkx(),
        graph2.to_networkx(),
        node_match=lambda a, b: a["element"] == b["element"],
        edge_match=lambda a, b: a["bond_type"] == b["bond_type"],
    )


class ScriptedOracle(MCSOracle):
    """Oracle driven by a handler returning query atom-ID tuples per mapping.

    The handler receives ``(query, target, call_index)`` and returns a list of
    atom-ID tuples (one per mapping) or raises.
    """

    def __init__(self, handler):
        self.handler = handler
        self.calls = []

    def compare(self, query, target, policy):
        call_index = len(self.calls)
        self.calls.append((query, target))
        response = self.handler(query, target, call_index)
        return [
            CommonFragmentMapping(atom_pairs=tuple((atom_id, atom_id) for atom_id in atoms))
            for atoms in response
        ]


def query_atoms(graph):
    return tuple(sorted(atom.atom_id for atom in graph.atoms))


@pytest.fixture
def ring_scenario():
    """Graphs A (6-ring), B (ring + 2 carbons), C (ring + nitrogen)."""
    return [cyclohexane("A"), ring_with_two_carbons("B"), ring_with_nitrogen("C")]


@pytest.fixture
def disjoint_pair():
    """Two graphs with no compatible atoms under exact matching."""
    return [cyclohexane("carbon ring"), make_graph(["N"] * 6, RING_BONDS, name="nitrogen ring")]


@pytest.fixture
def failing_oracle():
    def handler(query, target, call_index):
        raise OracleFailure("invalid graph")

    return ScriptedOracle(handler)
