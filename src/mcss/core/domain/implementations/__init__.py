"""Concrete pairwise common substructure oracles."""

from .clique_mcs_oracle import CliqueMCSOracle
from .rdkit_mcs_oracle import RDKitMCSOracle

__all__ = ["CliqueMCSOracle", "RDKitMCSOracle"]
