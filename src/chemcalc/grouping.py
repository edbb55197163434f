"""Merging of duplicate elements inside a molecule."""

from __future__ import annotations

from chemcalc.models import Molecule, PerElem


def group_elements(molecule: Molecule) -> Molecule:
    """Return a molecule with one entry per distinct element.

    Coefficients of repeated elements are summed and the result keeps the
    order and span of each element's first occurrence, so ``CH3CH3`` becomes
    ``C2H6``. The input molecule is left untouched.
    """
    grouped: dict[str, PerElem] = {}
    for elem in molecule:
        if elem.name in grouped:
            grouped[elem.name].coef += elem.coef
        else:
            grouped[elem.name] = PerElem(elem.name, elem.coef, elem.pos, elem.len)
    return Molecule(list(grouped.values()))


def element_counts(molecule: Molecule) -> dict[str, int]:
    """Map each element name to its total count in the molecule."""
    return {elem.name: elem.coef for elem in group_elements(molecule)}
