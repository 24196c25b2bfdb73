"""Pairwise common substructure search using RDKit's MCS algorithm."""

import logging
from typing import List, Tuple

from rdkit import Chem
from rdkit.Chem import rdFMCS

from ..errors import OracleFailure
from ..interfaces.mcs_oracle import CommonFragmentMapping, MCSOracle
from ..models.matching_policy import EdgeComparator, MatchingPolicy, VertexComparator
from ..models.molecular_graph import MolecularGraph
from ....infrastructure.adapters.rdkit_adapter import graph_to_mol


class RDKitMCSOracle(MCSOracle):
    """Oracle that uses RDKit's Maximum Common Substructure algorithm.

    RDKit reports a single MCS pattern; every match of that pattern in the
    query becomes one mapping, paired with the first match in the target.
    """

    def __init__(
        self, timeout: float = 60.0, match_valences: bool = False, max_matches: int = 1000
    ):
        """Initialize oracle.

        Args:
            timeout: Maximum time in seconds to spend finding MCS
            match_valences: Whether to require matching valences in MCS
            max_matches: Upper bound on pattern matches collected in the query
        """
        self.timeout = timeout
        self.match_valences = match_valences
        self.max_matches = max_matches
        self.logger = logging.getLogger(__name__)

    def _create_rdkit_mol(self, graph: MolecularGraph) -> Tuple[Chem.Mol, List[int]]:
        """Convert MolecularGraph to RDKit Mol.

        Raises:
            OracleFailure: If the graph is not a valid molecule
        """
        try:
            return graph_to_mol(graph)
        except ValueError as e:
            raise OracleFailure(f"Cannot convert {graph!r} for MCS search: {e}") from e

    def compare(
        self, query: MolecularGraph, target: MolecularGraph, policy: MatchingPolicy
    ) -> List[CommonFragmentMapping]:
        """Find all maximum common substructure mappings of query and target."""
        query_mol, query_ids = self._create_rdkit_mol(query)
        target_mol, target_ids = self._create_rdkit_mol(target)

        if policy.vertex is VertexComparator.RELAXED:
            atom_compare = rdFMCS.AtomCompare.CompareAny
        else:
            atom_compare = rdFMCS.AtomCompare.CompareElements
        if policy.edge is EdgeComparator.RELAXED:
            bond_compare = rdFMCS.BondCompare.CompareAny
        else:
            bond_compare = rdFMCS.BondCompare.CompareOrder

        mcs = rdFMCS.FindMCS(
            [query_mol, target_mol],
            timeout=int(self.timeout),
            matchValences=self.match_valences,
            ringMatchesRingOnly=policy.match_rings,
            completeRingsOnly=False,
            atomCompare=atom_compare,
            bondCompare=bond_compare,
        )

        if mcs.canceled:
            self.logger.warning(
                f"MCS search hit the {self.timeout}s timeout; result may not be maximum"
            )
        self.logger.debug(
            f"MCS Results - Number of atoms: {mcs.numAtoms}, Number of bonds: {mcs.numBonds}"
        )

        if mcs.numAtoms == 0:
            return []

        pattern = Chem.MolFromSmarts(mcs.smartsString)
        if pattern is None:
            raise OracleFailure(f"RDKit produced an unusable MCS pattern: {mcs.smartsString}")

        query_matches = query_mol.GetSubstructMatches(
            pattern, uniquify=True, maxMatches=self.max_matches
        )
        target_match = target_mol.GetSubstructMatch(pattern)

        if not query_matches or not target_match:
            self.logger.warning(
                f"Failed to map MCS to molecules. Query match: {bool(query_matches)}, "
                f"Target match: {bool(target_match)}"
            )
            return []

        mappings = set()
        for query_match in query_matches:
            atom_pairs = tuple(
                sorted(
                    (query_ids[q], target_ids[t])
                    for q, t in zip(query_match, target_match)
                )
            )
            query_bonds = tuple(
                sorted(
                    tuple(
                        sorted(
                            (
                                query_ids[query_match[bond.GetBeginAtomIdx()]],
                                query_ids[query_match[bond.GetEndAtomIdx()]],
                            )
                        )
                    )
                    for bond in pattern.GetBonds()
                )
            )
            mappings.add(CommonFragmentMapping(atom_pairs=atom_pairs, query_bonds=query_bonds))

        return sorted(mappings, key=lambda mapping: (mapping.atom_pairs, mapping.query_bonds))
