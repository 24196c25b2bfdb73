"""Interfaces for pairwise common substructure search."""

from .mcs_oracle import CommonFragmentMapping, MCSOracle

__all__ = ["CommonFragmentMapping", "MCSOracle"]
