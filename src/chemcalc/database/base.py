"""Base interface for element data stores."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from chemcalc.models import Molecule


@dataclass(frozen=True)
class ElemData:
    short_name: str
    long_name: str
    mass: float  # g/mol
    atomic_number: int


class ElementDatabase(ABC):
    """Abstract base class for element lookup backends."""

    @abstractmethod
    def lookup(self, short_name: str) -> ElemData:
        """Return the record for an element symbol such as ``"He"``."""
        pass

    def lookup_molecule(self, molecule: Molecule) -> list[ElemData]:
        """Look up every element of a grouped molecule, in order."""
        return [self.lookup(elem.name) for elem in molecule]
