"""Working set of tied, minimal-size candidate fragments."""

from typing import Dict, Iterator, List, Optional

from .fragment import Fragment
from .molecular_graph import MolecularGraph


class FragmentFrontier:
    """Deduplicating fragment set iterated in sorted key order.

    A frontier belongs to exactly one reduction pass. When two fragments are
    isomorphic the first one inserted is kept.
    """

    def __init__(self):
        self._fragments: Dict[Fragment, Fragment] = {}

    def add(self, fragment: Fragment) -> bool:
        """Insert a fragment; return False if an equivalent one is present."""
        if fragment in self._fragments:
            return False
        self._fragments[fragment] = fragment
        return True

    def clear(self) -> None:
        self._fragments.clear()

    def first(self) -> Optional[Fragment]:
        """Smallest fragment in key order, or None when empty."""
        if not self._fragments:
            return None
        return min(self._fragments)

    def graphs(self) -> List[MolecularGraph]:
        return [fragment.graph for fragment in self]

    def __iter__(self) -> Iterator[Fragment]:
        return iter(sorted(self._fragments))

    def __len__(self) -> int:
        return len(self._fragments)

    def __contains__(self, fragment: object) -> bool:
        return fragment in self._fragments

    def __bool__(self) -> bool:
        return bool(self._fragments)
