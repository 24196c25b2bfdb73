#!/usr/bin/env python3
# src/mcss/core/domain/models/atom.py

"""
Domain model representing an atom in a molecular graph.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class Atom:
    """Represents an atom (graph vertex) in a molecular structure."""

    atom_id: int
    element: str
    coordinates: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    charge: int = 0
    is_aromatic: bool = False
    atom_name: str = ""

    @property
    def symbol(self) -> str:
        """Element symbol normalised for comparisons."""
        return self.element.strip().capitalize()

    @property
    def is_hydrogen(self) -> bool:
        return self.symbol in ("H", "D", "T")
