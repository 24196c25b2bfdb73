import pytest
import networkx as nx

from mcss.core.domain.models.atom import Atom
from mcss.core.domain.models.bond import Bond, BondType
from mcss.core.domain.models.molecular_graph import MolecularGraph
from mcss.core.utils.normalization import remove_hydrogens
from conftest import cyclohexanol, make_graph


def test_molecular_graph():
    graph = cyclohexanol()

    assert graph.atom_count == 7
    assert graph.bond_count == 7
    assert len(graph) == 7

    G = graph.to_networkx()
    assert isinstance(G, nx.Graph)
    assert len(G.nodes) == graph.atom_count
    assert G.nodes[6]["element"] == "O"
    assert G.edges[0, 1]["bond_type"] == "SINGLE"


def test_induced_subgraph_keeps_bonds_between_kept_atoms():
    graph = cyclohexanol()

    sub = graph.subgraph([0, 1, 2, 6])

    assert sorted(atom.atom_id for atom in sub.atoms) == [0, 1, 2, 6]
    assert sorted(bond.key for bond in sub.bonds) == [(0, 1), (0, 6), (1, 2)]
    # the original is untouched
    assert graph.atom_count == 7


def test_subgraph_with_explicit_bonds():
    graph = cyclohexanol()

    sub = graph.subgraph(range(6), bonds=[(1, 0), (1, 2), (2, 3), (3, 4), (4, 5)])

    assert sub.atom_count == 6
    assert sub.bond_count == 5
    assert (0, 5) not in {bond.key for bond in sub.bonds}


def test_copy_is_independent():
    graph = cyclohexanol()

    clone = graph.copy()
    clone.atoms[0].element = "N"

    assert graph.atoms[0].element == "C"


@pytest.mark.parametrize(
    "atoms,bonds",
    [
        ([Atom(0, "C"), Atom(0, "C")], []),
        ([Atom(0, "C")], [Bond(0, 1)]),
        ([Atom(0, "C")], [Bond(0, 0)]),
    ],
)
def test_validate_rejects_inconsistent_graphs(atoms, bonds):
    with pytest.raises(ValueError):
        MolecularGraph(atoms, bonds).validate()


def test_remove_hydrogens():
    # methanol with explicit hydrogens
    graph = make_graph(
        ["C", "O", "H", "H", "H", "H"],
        [(0, 1), (0, 2), (0, 3), (0, 4), (1, 5)],
    )

    heavy = remove_hydrogens(graph)

    assert heavy.atom_count == 2
    assert [bond.key for bond in heavy.bonds] == [(0, 1)]


def test_remove_hydrogens_without_hydrogens_returns_same_graph():
    graph = cyclohexanol()

    assert remove_hydrogens(graph) is graph


def test_atom_symbol_normalisation():
    assert Atom(0, " CL ").symbol == "Cl"
    assert Atom(1, "h").is_hydrogen
    assert Bond(5, 2, bond_type=BondType.DOUBLE).key == (2, 5)
