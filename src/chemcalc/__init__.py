"""chemcalc core package."""

__version__ = "0.1.0"

from chemcalc.balance import balance_reaction
from chemcalc.errors import ChemError, ErrorKind
from chemcalc.grouping import group_elements
from chemcalc.mass import compute_molar_mass, molar_mass
from chemcalc.models import Molecule, PerElem, Reaction
from chemcalc.parser import Parser, parse_equation, parse_formula

__all__ = [
    "ChemError",
    "ErrorKind",
    "Molecule",
    "PerElem",
    "Parser",
    "Reaction",
    "balance_reaction",
    "compute_molar_mass",
    "group_elements",
    "molar_mass",
    "parse_equation",
    "parse_formula",
]
