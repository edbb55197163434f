"""Molar mass aggregation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from chemcalc.database import ElemData, ElementDatabase
from chemcalc.grouping import group_elements
from chemcalc.models import Molecule
from chemcalc.parser import parse_formula


@dataclass(frozen=True)
class MassContribution:
    short_name: str
    long_name: str
    count: int
    atomic_mass: float  # g/mol
    atomic_number: int


@dataclass(frozen=True)
class MassResult:
    molecule: Molecule
    rows: list[MassContribution]
    total: float  # g/mol


def molar_mass(molecule: Molecule, elem_data: Sequence[ElemData]) -> float:
    """Sum ``coef * mass`` over a grouped molecule.

    ``elem_data`` is matched to the molecule's elements by position.
    """
    coefs = np.array([elem.coef for elem in molecule], dtype=np.float64)
    masses = np.array([data.mass for data in elem_data], dtype=np.float64)
    return float(np.dot(coefs, masses))


def mass_breakdown(
    molecule: Molecule, elem_data: Sequence[ElemData]
) -> list[MassContribution]:
    return [
        MassContribution(
            short_name=data.short_name,
            long_name=data.long_name,
            count=elem.coef,
            atomic_mass=data.mass,
            atomic_number=data.atomic_number,
        )
        for elem, data in zip(molecule, elem_data, strict=True)
    ]


def compute_molar_mass(formula: str, database: ElementDatabase) -> MassResult:
    """Parse ``formula`` and compute its molar mass from ``database``.

    Each distinct element is looked up once, in order of first occurrence.
    """
    molecule = group_elements(parse_formula(formula))
    elem_data = database.lookup_molecule(molecule)
    return MassResult(
        molecule=molecule,
        rows=mass_breakdown(molecule, elem_data),
        total=molar_mass(molecule, elem_data),
    )
