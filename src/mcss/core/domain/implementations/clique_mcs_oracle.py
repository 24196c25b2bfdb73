"""Maximum common substructure search via cliques of the modular product graph."""

import logging
import time
from typing import Any, List, Set, Tuple

import networkx as nx

from ..errors import OracleFailure
from ..interfaces.mcs_oracle import CommonFragmentMapping, MCSOracle
from ..models.matching_policy import MatchingPolicy
from ..models.molecular_graph import MolecularGraph

AtomPairs = Tuple[Tuple[Any, Any], ...]


class CliqueMCSOracle(MCSOracle):
    """Oracle that finds maximum common induced substructures with cliques.

    Nodes of the product graph are compatible (query atom, target atom) pairs;
    two pairs are adjacent when the query atoms and the target atoms are
    either both bonded by compatible bonds or both unbonded. Every maximum
    clique is a maximum common induced subgraph.
    """

    def __init__(self, timeout: float = 60.0, connected_only: bool = True):
        """Initialize oracle.

        Args:
            timeout: Maximum time in seconds to spend enumerating cliques
            connected_only: Only report connected common substructures
        """
        self.timeout = timeout
        self.connected_only = connected_only
        self.logger = logging.getLogger(__name__)

    def _create_networkx_graph(
        self, graph: MolecularGraph, policy: MatchingPolicy
    ) -> nx.Graph:
        """Convert MolecularGraph to NetworkX graph, flagging ring membership."""
        try:
            graph.validate()
        except ValueError as e:
            raise OracleFailure(f"Invalid molecular graph {graph!r}: {e}") from e

        G = graph.to_networkx()
        if policy.match_rings:
            bridges = {frozenset(edge) for edge in nx.bridges(G)}
            for node in G.nodes:
                G.nodes[node]["in_ring"] = False
            for u, v in G.edges:
                in_ring = frozenset((u, v)) not in bridges
                G.edges[u, v]["in_ring"] = in_ring
                if in_ring:
                    G.nodes[u]["in_ring"] = True
                    G.nodes[v]["in_ring"] = True
        return G

    def _create_product_graph(
        self, query_graph: nx.Graph, target_graph: nx.Graph, policy: MatchingPolicy
    ) -> nx.Graph:
        """Create the modular product graph of two molecular graphs."""
        product = nx.Graph()
        compatible_pairs: List[Tuple[Any, Any]] = []

        for query_id in sorted(query_graph.nodes()):
            query_attrs = query_graph.nodes[query_id]
            for target_id in sorted(target_graph.nodes()):
                if policy.atoms_match(query_attrs, target_graph.nodes[target_id]):
                    compatible_pairs.append((query_id, target_id))
                    product.add_node((query_id, target_id))

        for i, (query1, target1) in enumerate(compatible_pairs):
            for query2, target2 in compatible_pairs[i + 1 :]:
                if query1 == query2 or target1 == target2:
                    continue

                query_bond = query_graph.get_edge_data(query1, query2)
                target_bond = target_graph.get_edge_data(target1, target2)

                if query_bond is None and target_bond is None:
                    product.add_edge((query1, target1), (query2, target2))
                elif policy.bonds_match(query_bond, target_bond):
                    product.add_edge((query1, target1), (query2, target2))

        self.logger.debug(
            f"Product graph has {product.number_of_nodes()} nodes and "
            f"{product.number_of_edges()} edges"
        )
        return product

    def _split_clique(self, clique: List[Tuple[Any, Any]], query_graph: nx.Graph):
        """Yield the parts of a clique that count as common substructures."""
        if not self.connected_only:
            yield tuple(sorted(clique))
            return

        mapped = query_graph.subgraph(query_id for query_id, _ in clique)
        for component in nx.connected_components(mapped):
            yield tuple(sorted(pair for pair in clique if pair[0] in component))

    def _find_maximum_cliques(
        self, product_graph: nx.Graph, query_graph: nx.Graph
    ) -> List[AtomPairs]:
        """Collect every largest clique (or clique component) of the product graph."""
        best_size = 0
        best: Set[AtomPairs] = set()
        start = time.time()

        for clique in nx.find_cliques(product_graph):
            if time.time() - start > self.timeout:
                self.logger.warning(
                    f"Clique enumeration hit the {self.timeout}s timeout; "
                    f"keeping mappings of size {best_size}"
                )
                break
            for pairs in self._split_clique(clique, query_graph):
                if len(pairs) > best_size:
                    best_size = len(pairs)
                    best = {pairs}
                elif len(pairs) == best_size:
                    best.add(pairs)

        return sorted(best)

    def compare(
        self, query: MolecularGraph, target: MolecularGraph, policy: MatchingPolicy
    ) -> List[CommonFragmentMapping]:
        """Find all maximum common substructure mappings of query and target."""
        query_graph = self._create_networkx_graph(query, policy)
        target_graph = self._create_networkx_graph(target, policy)

        product_graph = self._create_product_graph(query_graph, target_graph, policy)
        cliques = self._find_maximum_cliques(product_graph, query_graph)

        if not cliques:
            self.logger.debug("No common substructure found")
            return []

        self.logger.debug(
            f"Found {len(cliques)} maximum mappings of size {len(cliques[0])}"
        )
        return [CommonFragmentMapping(atom_pairs=pairs) for pairs in cliques]
