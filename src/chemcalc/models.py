"""Data structures for parsed formulas and reactions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Sequence


@dataclass
class PerElem:
    """A single element occurrence inside a molecule.

    ``coef`` is multiplied in place while the parser distributes a group
    multiplier, and is left alone afterwards.
    """

    name: str
    coef: int
    pos: int
    len: int

    def __str__(self) -> str:
        return self.name if self.coef == 1 else f"{self.name}{self.coef}"


@dataclass
class Molecule:
    elements: list[PerElem] = field(default_factory=list)

    def __iter__(self) -> Iterator[PerElem]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __getitem__(self, index: int) -> PerElem:
        return self.elements[index]

    def __str__(self) -> str:
        return "".join(str(elem) for elem in self.elements)

    @property
    def span(self) -> tuple[int, int]:
        """Source span from the first to the last element."""
        first = self.elements[0]
        last = self.elements[-1]
        return first.pos, last.pos + last.len - first.pos


@dataclass(frozen=True)
class Reaction:
    lhs: tuple[Molecule, ...]
    rhs: tuple[Molecule, ...]

    def __post_init__(self) -> None:
        if not self.lhs or not self.rhs:
            raise ValueError("A reaction needs at least one molecule on each side")

    @classmethod
    def from_sides(cls, lhs: Sequence[Molecule], rhs: Sequence[Molecule]) -> Reaction:
        return cls(tuple(lhs), tuple(rhs))

    @property
    def molecules(self) -> tuple[Molecule, ...]:
        """All molecules, reactants first."""
        return self.lhs + self.rhs


class TokenKind(Enum):
    ELEMENT = "element"
    COEFFICIENT = "coefficient"
    PAREN_OPEN = "("
    PAREN_CLOSE = ")"
    PLUS = "+"
    ARROW = "->"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    pos: int
    len: int
