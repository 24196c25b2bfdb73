#!/usr/bin/env python3
# src/mcss/core/domain/models/bond.py

"""
Domain model representing a chemical bond between atoms.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple


class BondType(Enum):
    """Enumeration of possible bond types."""

    SINGLE = auto()
    DOUBLE = auto()
    TRIPLE = auto()
    AROMATIC = auto()
    UNKNOWN = auto()


BOND_ORDERS = {
    BondType.SINGLE: 1.0,
    BondType.DOUBLE: 2.0,
    BondType.TRIPLE: 3.0,
    BondType.AROMATIC: 1.5,
    BondType.UNKNOWN: 0.0,
}


@dataclass
class Bond:
    """Represents a chemical bond (graph edge) between two atoms."""

    atom1_id: int
    atom2_id: int
    bond_type: BondType = BondType.SINGLE
    bond_order: float = 1.0

    @property
    def key(self) -> Tuple[int, int]:
        """Order-independent identifier of the bonded atom pair."""
        return (min(self.atom1_id, self.atom2_id), max(self.atom1_id, self.atom2_id))
