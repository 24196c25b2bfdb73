import pytest

from mcss.core.domain.errors import OracleFailure
from mcss.core.domain.implementations.clique_mcs_oracle import CliqueMCSOracle
from mcss.core.domain.models.atom import Atom
from mcss.core.domain.models.bond import Bond, BondType
from mcss.core.domain.models.fragment import Fragment
from mcss.core.domain.models.matching_policy import (
    EdgeComparator,
    MatchingPolicy,
    VertexComparator,
)
from mcss.core.domain.models.molecular_graph import MolecularGraph
from conftest import (
    RING_BONDS,
    cyclohexane,
    is_isomorphic,
    make_graph,
    methylcyclohexane,
    ring_with_two_carbons,
)


def unique_fragments(query, mappings):
    return {Fragment(mapping.common_fragment(query)) for mapping in mappings}


def test_ring_is_common_to_ring_and_substituted_ring():
    oracle = CliqueMCSOracle()
    query = cyclohexane()

    mappings = oracle.compare(query, ring_with_two_carbons(), MatchingPolicy())

    assert mappings
    assert {mapping.size for mapping in mappings} == {6}
    fragments = unique_fragments(query, mappings)
    assert len(fragments) == 1
    assert is_isomorphic(fragments.pop().graph, cyclohexane())


def test_fragments_are_expressed_on_the_query():
    oracle = CliqueMCSOracle()
    query = methylcyclohexane()
    target = make_graph(["C", "C", "C"], [(0, 1), (1, 2)])

    mappings = oracle.compare(query, target, MatchingPolicy())

    query_ids = {atom.atom_id for atom in query.atoms}
    for mapping in mappings:
        assert mapping.size == 3
        assert set(mapping.query_atoms()) <= query_ids
        fragment = mapping.common_fragment(query)
        assert fragment.atom_count == 3
        assert fragment.bond_count == 2


def test_disjoint_labels_have_no_common_substructure():
    oracle = CliqueMCSOracle()
    nitrogen_ring = make_graph(["N"] * 6, RING_BONDS)

    assert oracle.compare(cyclohexane(), nitrogen_ring, MatchingPolicy()) == []


def test_relaxed_vertices_match_any_element():
    oracle = CliqueMCSOracle()
    nitrogen_ring = make_graph(["N"] * 6, RING_BONDS)
    policy = MatchingPolicy(vertex=VertexComparator.RELAXED)

    mappings = oracle.compare(cyclohexane(), nitrogen_ring, policy)

    assert mappings and mappings[0].size == 6


def test_exact_edges_distinguish_bond_types():
    oracle = CliqueMCSOracle()
    ethene = make_graph(["C", "C"], [(0, 1, BondType.DOUBLE)])
    ethane = make_graph(["C", "C"], [(0, 1)])

    exact = oracle.compare(ethene, ethane, MatchingPolicy())
    relaxed = oracle.compare(
        ethene, ethane, MatchingPolicy(edge=EdgeComparator.RELAXED)
    )

    assert {mapping.size for mapping in exact} == {1}
    assert {mapping.size for mapping in relaxed} == {2}


def test_ring_matching_keeps_ring_atoms_apart_from_chains():
    oracle = CliqueMCSOracle()
    hexane = make_graph(["C"] * 6, [(0, 1), (1, 2), (2, 3), (3, 4), (4, 5)])

    plain = oracle.compare(methylcyclohexane(), hexane, MatchingPolicy())
    rings = oracle.compare(
        methylcyclohexane(), hexane, MatchingPolicy(match_rings=True)
    )

    assert plain[0].size == 6
    assert rings[0].size == 1
    # only the methyl carbon is outside the ring
    assert {mapping.query_atoms()[0] for mapping in rings} == {6}


def test_connected_only_splits_disconnected_matches():
    # C-O ... C-O separated by a nitrogen bridge in the query only
    query = make_graph(["C", "O", "N", "C", "O"], [(0, 1), (1, 2), (2, 3), (3, 4)])
    target = make_graph(["C", "O", "S", "C", "O"], [(0, 1), (2, 3), (3, 4)])

    connected = CliqueMCSOracle().compare(query, target, MatchingPolicy())
    disconnected = CliqueMCSOracle(connected_only=False).compare(
        query, target, MatchingPolicy()
    )

    assert max(mapping.size for mapping in connected) < max(
        mapping.size for mapping in disconnected
    )


def test_results_are_deterministic():
    oracle = CliqueMCSOracle()

    first = oracle.compare(cyclohexane(), ring_with_two_carbons(), MatchingPolicy())
    second = oracle.compare(cyclohexane(), ring_with_two_carbons(), MatchingPolicy())

    assert first == second


def test_invalid_graph_raises_oracle_failure():
    broken = MolecularGraph([Atom(0, "C")], [Bond(0, 3)])

    with pytest.raises(OracleFailure):
        CliqueMCSOracle().compare(broken, cyclohexane(), MatchingPolicy())


def test_policy_from_names():
    policy = MatchingPolicy.from_names("Relaxed", "exact", match_rings=True)

    assert policy.vertex is VertexComparator.RELAXED
    assert policy.edge is EdgeComparator.EXACT
    assert policy.match_rings
    assert MatchingPolicy() == MatchingPolicy.from_names()
