"""Adapter between MolecularGraph and RDKit molecules."""

import logging
from typing import Dict, List, Tuple

from rdkit import Chem

from ...core.domain.models.atom import Atom
from ...core.domain.models.bond import BOND_ORDERS, Bond, BondType
from ...core.domain.models.molecular_graph import MolecularGraph

logger = logging.getLogger(__name__)

_TO_RDKIT = {
    BondType.SINGLE: Chem.BondType.SINGLE,
    BondType.DOUBLE: Chem.BondType.DOUBLE,
    BondType.TRIPLE: Chem.BondType.TRIPLE,
    BondType.AROMATIC: Chem.BondType.AROMATIC,
    BondType.UNKNOWN: Chem.BondType.UNSPECIFIED,
}

_FROM_RDKIT = {rdkit_type: bond_type for bond_type, rdkit_type in _TO_RDKIT.items()}

# Skip kekulization and aromaticity perception: fragments may hold partial
# aromatic rings.
SANITIZE_OPS = (
    Chem.SANITIZE_ALL ^ Chem.SANITIZE_KEKULIZE ^ Chem.SANITIZE_SETAROMATICITY
)


def graph_to_mol(
    graph: MolecularGraph, implicit_hydrogens: bool = False
) -> Tuple[Chem.Mol, List[int]]:
    """Convert MolecularGraph to RDKit Mol.

    Args:
        graph: Molecular graph to convert
        implicit_hydrogens: Let RDKit add implicit hydrogens. When False,
            every atom carries exactly the hydrogens present in the graph.

    Returns:
        Tuple of (RDKit Mol, atom IDs indexed by RDKit atom index)

    Raises:
        ValueError: If failed to create a valid RDKit molecule
    """
    mol = Chem.RWMol()

    atom_map: Dict[int, int] = {}  # Map from our atom IDs to RDKit atom indices
    atom_ids: List[int] = []
    for atom in graph.atoms:
        try:
            rdatom = Chem.Atom(atom.symbol)
        except Exception as e:
            raise ValueError(f"Unknown element {atom.element!r}: {e}") from e
        rdatom.SetFormalCharge(int(atom.charge))
        rdatom.SetIsAromatic(atom.is_aromatic)
        if not implicit_hydrogens:
            rdatom.SetNoImplicit(True)
            rdatom.SetNumExplicitHs(0)
        atom_map[atom.atom_id] = mol.AddAtom(rdatom)
        atom_ids.append(atom.atom_id)

    added_bonds = set()
    for bond in graph.bonds:
        if bond.atom1_id not in atom_map or bond.atom2_id not in atom_map:
            raise ValueError(
                f"Bond {bond.atom1_id}-{bond.atom2_id} references a missing atom"
            )
        if bond.key in added_bonds:
            continue

        mol.AddBond(
            atom_map[bond.atom1_id],
            atom_map[bond.atom2_id],
            _TO_RDKIT[bond.bond_type],
        )
        if bond.bond_type is BondType.AROMATIC:
            rdbond = mol.GetBondBetweenAtoms(
                atom_map[bond.atom1_id], atom_map[bond.atom2_id]
            )
            rdbond.SetIsAromatic(True)
        added_bonds.add(bond.key)

    mol = mol.GetMol()
    try:
        Chem.SanitizeMol(mol, SANITIZE_OPS)
    except Exception as e:
        logger.debug(f"Failed to sanitize molecule: {str(e)}")
        raise ValueError(f"Failed to create valid RDKit molecule: {str(e)}")

    return mol, atom_ids


def graph_from_mol(mol: Chem.Mol, name: str = "") -> MolecularGraph:
    """Convert RDKit Mol to MolecularGraph, using atom indices as atom IDs."""
    conformer = mol.GetConformer() if mol.GetNumConformers() else None

    atoms = []
    for rdatom in mol.GetAtoms():
        idx = rdatom.GetIdx()
        coordinates = (0.0, 0.0, 0.0)
        if conformer is not None:
            pos = conformer.GetAtomPosition(idx)
            coordinates = (pos.x, pos.y, pos.z)
        atoms.append(
            Atom(
                atom_id=idx,
                element=rdatom.GetSymbol(),
                coordinates=coordinates,
                charge=rdatom.GetFormalCharge(),
                is_aromatic=rdatom.GetIsAromatic(),
            )
        )

    bonds = []
    for rdbond in mol.GetBonds():
        bond_type = _FROM_RDKIT.get(rdbond.GetBondType(), BondType.UNKNOWN)
        bonds.append(
            Bond(
                rdbond.GetBeginAtomIdx(),
                rdbond.GetEndAtomIdx(),
                bond_type=bond_type,
                bond_order=BOND_ORDERS[bond_type],
            )
        )

    return MolecularGraph(atoms, bonds, name=name)


def graph_from_smiles(smiles: str, name: str = "") -> MolecularGraph:
    """Parse a SMILES string into a hydrogen-suppressed MolecularGraph.

    Raises:
        ValueError: If the SMILES cannot be parsed
    """
    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise ValueError(f"Invalid SMILES string: {smiles}")
    return graph_from_mol(mol, name=name or smiles)


def to_canonical_smiles(graph: MolecularGraph) -> str:
    """Canonical SMILES of a graph, for logging and output.

    Aromatic flags outside rings are cleared first (broken aromatic rings
    become single-bonded chains), so the result always parses back.
    """
    mol, _ = graph_to_mol(graph, implicit_hydrogens=True)
    mol = _dearomatize_acyclic(mol)
    return Chem.MolToSmiles(mol)


def _dearomatize_acyclic(mol: Chem.Mol) -> Chem.Mol:
    """Copy of ``mol`` with aromaticity dropped from non-ring atoms and bonds."""
    ring_info = mol.GetRingInfo()
    rwmol = Chem.RWMol(mol)
    changed = False
    for rdbond in rwmol.GetBonds():
        if rdbond.GetIsAromatic() and not ring_info.NumBondRings(rdbond.GetIdx()):
            rdbond.SetIsAromatic(False)
            rdbond.SetBondType(Chem.BondType.SINGLE)
            changed = True
    for rdatom in rwmol.GetAtoms():
        if rdatom.GetIsAromatic() and not ring_info.NumAtomRings(rdatom.GetIdx()):
            rdatom.SetIsAromatic(False)
            changed = True
    if not changed:
        return mol

    mol = rwmol.GetMol()
    Chem.SanitizeMol(mol, SANITIZE_OPS)
    return mol


def read_smiles_file(path: str) -> List[MolecularGraph]:
    """Read molecules from a SMILES file.

    Each non-empty line holds a SMILES string optionally followed by a name;
    lines starting with ``#`` are ignored. Unparseable lines are logged and
    skipped.

    Args:
        path: Path to the SMILES file

    Returns:
        List of MolecularGraph objects in file order
    """
    graphs = []
    with open(path, "r") as file:
        for line_number, line in enumerate(file, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split(None, 1)
            name = parts[1].strip() if len(parts) > 1 else f"mol_{line_number}"
            try:
                graphs.append(graph_from_smiles(parts[0], name=name))
            except ValueError as e:
                logger.warning(f"Skipping line {line_number} of {path}: {e}")
    return graphs
