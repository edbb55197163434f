"""Reaction balancing by Gaussian elimination.

A reaction is turned into a homogeneous linear system: one row per distinct
element, one column per molecule (reactants first, products negated). The
system is reduced with partial pivoting and solved by back substitution, with
every column past the last pivot row treated as a free variable fixed to 1.
The last column is always free, so reactions with as many elements as
molecules still have a non-trivial solution. The floating-point solution is
then scaled to the smallest positive integers.

Note: elimination runs in double precision. The integer conversion recovers
exact ratios with bounded-denominator fractions, which is reliable for the
small coefficients found in ordinary reactions.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from functools import reduce
from math import gcd, lcm
from typing import Sequence

import numpy as np

from chemcalc.constants import MAX_DENOMINATOR, PIVOT_TOLERANCE, ZERO_TOLERANCE
from chemcalc.errors import ChemError, ErrorKind
from chemcalc.grouping import element_counts
from chemcalc.models import Molecule, Reaction

logger = logging.getLogger(__name__)


class Matrix:
    """Dense row-major float matrix with bounds-checked access."""

    def __init__(self, height: int, width: int) -> None:
        self.height = height
        self.width = width
        self.buf = np.zeros((height, width), dtype=np.float64)

    @classmethod
    def from_reaction(cls, reaction: Reaction) -> Matrix:
        """Build the stoichiometric matrix of a reaction.

        Rows follow the order in which elements are first seen, reactants
        before products. Product columns are negated so that a balanced
        reaction is a solution of ``M @ x == 0``.
        """
        counts = [element_counts(molecule) for molecule in reaction.molecules]
        names: list[str] = []
        for molecule_counts in counts:
            for name in molecule_counts:
                if name not in names:
                    names.append(name)

        matrix = cls(len(names), len(counts))
        n_lhs = len(reaction.lhs)
        for row, name in enumerate(names):
            for col, molecule_counts in enumerate(counts):
                sign = 1.0 if col < n_lhs else -1.0
                matrix[row, col] = sign * molecule_counts.get(name, 0)
        logger.debug("Stoichiometric matrix for elements %s:\n%s", names, matrix.buf)
        return matrix

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = self._check(index)
        return float(self.buf[row, col])

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        row, col = self._check(index)
        self.buf[row, col] = value

    def __repr__(self) -> str:
        return f"Matrix({self.height}x{self.width})"

    def column_abs_max_index(self, column: int, start: int) -> int:
        """Row index at or below ``start`` with the largest ``|value|`` in ``column``.

        Ties resolve to the upper row.
        """
        self._check((start, column))
        return start + int(np.argmax(np.abs(self.buf[start:, column])))

    def switch_rows(self, row1: int, row2: int) -> None:
        self._check((row1, 0))
        self._check((row2, 0))
        if row1 != row2:
            self.buf[[row1, row2]] = self.buf[[row2, row1]]

    def add_row_to_row(self, dest: int, row: int, mult: float) -> None:
        """Add ``mult`` times ``row`` to ``dest`` in place."""
        self._check((dest, 0))
        self._check((row, 0))
        self.buf[dest] += mult * self.buf[row]

    def _check(self, index: tuple[int, int]) -> tuple[int, int]:
        row, col = index
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Index {index} out of range for {self!r}")
        return row, col


def pivot_count(mat: Matrix) -> int:
    """Number of pivot columns; the last column is never used as a pivot."""
    return min(mat.height, mat.width - 1)


def forward_elim(mat: Matrix) -> Matrix:
    """Reduce ``mat`` to row echelon form in place using partial pivoting.

    Raises:
        ChemError: BALANCING, if a pivot column has no usable entry.
    """
    for k in range(pivot_count(mat)):
        pivot = mat.column_abs_max_index(k, k)
        if abs(mat[pivot, k]) < PIVOT_TOLERANCE:
            raise ChemError(ErrorKind.BALANCING, "Could not balance reaction")
        logger.debug("Pivot for column %d: row %d (%g)", k, pivot, mat[pivot, k])
        mat.switch_rows(k, pivot)

        for i in range(k + 1, mat.height):
            mult = -(mat[i, k] / mat[k, k])
            mat.add_row_to_row(i, k, mult)
    return mat


def back_substitute(mat: Matrix) -> list[float]:
    """Solve a reduced matrix from the bottom row upwards.

    Columns without a pivot row are free variables and are set to 1.0. The
    values are returned back to front, last column first.
    """
    pivots = pivot_count(mat)
    values: list[float] = []
    for k in reversed(range(mat.width)):
        if k >= pivots:
            values.append(1.0)
            continue
        var = 0.0
        for i in range(k + 1, mat.width):
            var -= mat[k, i] * values[mat.width - 1 - i]
        values.append(var / mat[k, k])
    return values


def normalize_coefficients(values: Sequence[float]) -> list[int]:
    """Scale positive ratios to the smallest integer vector with the same ratios."""
    smallest = min(values)
    fractions = [
        Fraction(value / smallest).limit_denominator(MAX_DENOMINATOR) for value in values
    ]
    multiple = reduce(lcm, (frac.denominator for frac in fractions), 1)
    integers = [int(frac * multiple) for frac in fractions]
    divisor = reduce(gcd, integers)
    return [value // divisor for value in integers]


def is_balanced(reaction: Reaction, coefs: Sequence[int]) -> bool:
    """Check that every element has the same count on both sides."""
    totals: dict[str, int] = {}
    n_lhs = len(reaction.lhs)
    for index, (coef, molecule) in enumerate(zip(coefs, reaction.molecules, strict=True)):
        sign = 1 if index < n_lhs else -1
        for name, count in element_counts(molecule).items():
            totals[name] = totals.get(name, 0) + sign * coef * count
    return all(total == 0 for total in totals.values())


def balance_reaction(reaction: Reaction) -> list[int]:
    """Balance a parsed reaction.

    Args:
        reaction: Parsed reaction.

    Returns:
        One positive coefficient per molecule, reactants first, as the
        smallest integer solution.

    Raises:
        ChemError: INPUT, with the molecule's span, if an element of that
            molecule does not occur on the other side. BALANCING, if the
            elimination hits a zero pivot or yields no positive integer
            solution.
    """
    _check_element_sides(reaction)
    matrix = forward_elim(Matrix.from_reaction(reaction))
    values = list(reversed(back_substitute(matrix)))

    for value, molecule in zip(values, reaction.molecules):
        if abs(value) < ZERO_TOLERANCE:
            raise _missing_element_error(molecule)
    if any(value < 0 for value in values):
        raise ChemError(ErrorKind.BALANCING, "Could not balance reaction")

    coefs = normalize_coefficients(values)
    if not is_balanced(reaction, coefs):
        raise ChemError(ErrorKind.BALANCING, "Could not balance reaction")
    logger.debug("Balanced coefficients: %s", coefs)
    return coefs


def _check_element_sides(reaction: Reaction) -> None:
    """Reject a molecule carrying an element that the other side lacks."""
    lhs_names = {name for molecule in reaction.lhs for name in element_counts(molecule)}
    rhs_names = {name for molecule in reaction.rhs for name in element_counts(molecule)}
    for molecule in reaction.lhs:
        if not element_counts(molecule).keys() <= rhs_names:
            raise _missing_element_error(molecule)
    for molecule in reaction.rhs:
        if not element_counts(molecule).keys() <= lhs_names:
            raise _missing_element_error(molecule)


def _missing_element_error(molecule: Molecule) -> ChemError:
    return ChemError(
        ErrorKind.INPUT,
        f"An element in {molecule} is missing on the other side of the reaction",
        molecule.span,
    )
