"""Graph normalisation applied before pairwise comparison."""

from ..domain.models.molecular_graph import MolecularGraph


def remove_hydrogens(graph: MolecularGraph) -> MolecularGraph:
    """Return a copy of the graph without hydrogen atoms or their bonds."""
    heavy_atoms = [atom.atom_id for atom in graph.atoms if not atom.is_hydrogen]
    if len(heavy_atoms) == graph.atom_count:
        return graph
    return graph.subgraph(heavy_atoms)
