"""Error types raised by the chemcalc core."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    INPUT = "input"
    BALANCING = "balancing"
    DATABASE = "database"
    USAGE = "usage"


class ChemError(Exception):
    """A failure caused by user input, the reaction itself or the element store.

    Attributes:
        kind: Category of the failure.
        desc: Human-readable description.
        span: ``(offset, length)`` into the original input text, when the
            failure can be pinned to a single token or molecule.
    """

    def __init__(
        self,
        kind: ErrorKind,
        desc: str,
        span: tuple[int, int] | None = None,
    ) -> None:
        super().__init__(desc)
        self.kind = kind
        self.desc = desc
        self.span = span

    def __repr__(self) -> str:
        return f"ChemError({self.kind.name}, {self.desc!r}, span={self.span})"

    @classmethod
    def input(cls, desc: str, pos: int, length: int = 1) -> ChemError:
        return cls(ErrorKind.INPUT, desc, (pos, length))
