"""Recursive-descent parser for chemical formulas and reactions.

The parser accepts the following grammar::

    Reaction    := Side WS* "->" WS* Side
    Side        := Molecule (WS* "+" WS* Side)*
    Molecule    := Periodic Molecule?
    Periodic    := Element Coefficient?
    Element     := UppercaseLetter LowercaseLetter* | "(" Molecule ")"
    Coefficient := Digit+

Every element, coefficient, parenthesis, plus sign and arrow is recorded as a
:class:`~chemcalc.models.Token` carrying its offset and length, and every
:class:`~chemcalc.errors.ChemError` raised here points at the offending span
of the input so the caller can underline it.
"""

from __future__ import annotations

import logging
import string
from typing import Callable

from chemcalc.constants import ARROW, LEGAL_SYMBOLS, MAX_NESTING_DEPTH, U32_MAX
from chemcalc.errors import ChemError
from chemcalc.models import Molecule, PerElem, Reaction, Token, TokenKind

logger = logging.getLogger(__name__)

_UPPER = frozenset(string.ascii_uppercase)
_LOWER = frozenset(string.ascii_lowercase)
_DIGITS = frozenset(string.digits)
_LETTERS = _UPPER | _LOWER
# u32 never needs more than ten digits
_MAX_COEFFICIENT_DIGITS = len(str(U32_MAX))


class Parser:
    """Parser over a single input string.

    Each instance owns its cursor, so separate parses never share state.
    """

    def __init__(self, text: str) -> None:
        self.input = text
        self.pos = 0
        self.paren_level = 0
        self.tokens: list[Token] = []

    def is_done(self) -> bool:
        """Return True if nothing but whitespace is left to parse."""
        return all(ch.isspace() for ch in self.input[self.pos:])

    def parse_reaction(self) -> Reaction:
        """Parse ``Side -> Side`` starting at the cursor."""
        lhs = self.parse_side()
        self._consume_whitespace()

        if not self.input.startswith(ARROW, self.pos):
            raise ChemError.input("Missing arrow (->) in chemical reaction", self.pos)
        self._push_token(TokenKind.ARROW, self.pos, len(ARROW))
        self.pos += len(ARROW)
        self._consume_whitespace()

        rhs = self.parse_side()
        return Reaction.from_sides(lhs, rhs)

    def parse_side(self) -> list[Molecule]:
        """Parse one or more molecules joined by ``+``.

        Trailing whitespace is consumed; anything else after the side is left
        for the caller.
        """
        molecules = [self.parse_molecule()]
        self._consume_whitespace()

        while not self._eof() and self._peek() == "+":
            self._push_token(TokenKind.PLUS, self.pos, 1)
            self.pos += 1
            self._consume_whitespace()
            molecules.append(self.parse_molecule())
            self._consume_whitespace()

        return molecules

    def parse_molecule(self) -> Molecule:
        """Parse a run of elements and groups with no separators."""
        elements = self._parse_periodic()
        while not self._eof() and (self._peek() in _LETTERS or self._peek() == "("):
            elements.extend(self._parse_periodic())

        if not self._eof() and self._peek() == ")" and self.paren_level == 0:
            raise ChemError.input("Missing opening parentheses", self.pos)
        if not self._eof() and not self._on_legal_char():
            raise ChemError.input("Unexpected character", self.pos)
        return Molecule(elements)

    def expect_done(self) -> None:
        """Fail unless only whitespace remains after the cursor."""
        self._consume_whitespace()
        if not self._eof():
            raise ChemError.input("Unexpected character", self.pos)

    def _parse_periodic(self) -> list[PerElem]:
        elements = self._parse_element()

        if not self._eof() and self._peek() in _DIGITS:
            start = self.pos
            coef = self._parse_coefficient()
            for elem in elements:
                product = elem.coef * coef
                if product > U32_MAX:
                    raise ChemError.input("Coefficient too large", start, self.pos - start)
                elem.coef = product

        return elements

    def _parse_element(self) -> list[PerElem]:
        if self._eof():
            raise ChemError.input("Found no periodic element", self.pos)

        start = self.pos
        first = self._consume_char()
        if first == "(":
            if self.paren_level >= MAX_NESTING_DEPTH:
                raise ChemError.input("Parentheses nested too deeply", start)
            self._push_token(TokenKind.PAREN_OPEN, start, 1)
            self.paren_level += 1
            molecule = self.parse_molecule()
            if self._eof() or self._peek() != ")":
                raise ChemError.input("Missing closing parentheses", self.pos)
            self._push_token(TokenKind.PAREN_CLOSE, self.pos, 1)
            self.pos += 1
            self.paren_level -= 1
            return molecule.elements

        if first in _UPPER:
            name = first + self._consume_while(lambda ch: ch in _LOWER)
            self._push_token(TokenKind.ELEMENT, start, len(name))
            return [PerElem(name=name, coef=1, pos=start, len=len(name))]

        raise ChemError.input(
            "Missing uppercase letter at the beginning of the element", start
        )

    def _parse_coefficient(self) -> int:
        start = self.pos
        digits = self._consume_while(lambda ch: ch in _DIGITS)
        if len(digits) > _MAX_COEFFICIENT_DIGITS or int(digits) > U32_MAX:
            raise ChemError.input("Could not parse coefficient", start, len(digits))
        value = int(digits)
        if value == 0:
            raise ChemError.input("Coefficient must be at least 1", start, len(digits))
        self._push_token(TokenKind.COEFFICIENT, start, len(digits))
        return value

    def _push_token(self, kind: TokenKind, pos: int, length: int) -> None:
        self.tokens.append(Token(kind, self.input[pos:pos + length], pos, length))

    def _peek(self) -> str:
        return self.input[self.pos]

    def _consume_char(self) -> str:
        ch = self.input[self.pos]
        self.pos += 1
        return ch

    def _consume_while(self, predicate: Callable[[str], bool]) -> str:
        start = self.pos
        while not self._eof() and predicate(self._peek()):
            self.pos += 1
        return self.input[start:self.pos]

    def _consume_whitespace(self) -> None:
        self._consume_while(str.isspace)

    def _eof(self) -> bool:
        return self.pos >= len(self.input)

    def _on_legal_char(self) -> bool:
        ch = self._peek()
        return ch in _LETTERS or ch in _DIGITS or ch in LEGAL_SYMBOLS or ch.isspace()


def parse_formula(text: str) -> Molecule:
    """Parse a standalone formula such as ``"(CH3)2"``.

    Leading and trailing whitespace is ignored; anything else left over,
    including whitespace inside the molecule, is rejected.
    """
    parser = Parser(text)
    parser._consume_whitespace()
    molecule = parser.parse_molecule()
    parser.expect_done()
    logger.debug("Parsed formula %r into %s", text, molecule)
    return molecule


def parse_equation(text: str) -> Reaction:
    """Parse a full reaction such as ``"C3H8 + O2 -> CO2 + H2O"``."""
    parser = Parser(text)
    parser._consume_whitespace()
    reaction = parser.parse_reaction()
    parser.expect_done()
    logger.debug(
        "Parsed reaction %r: %d reactant(s), %d product(s)",
        text,
        len(reaction.lhs),
        len(reaction.rhs),
    )
    return reaction


def tokenize(text: str) -> list[Token]:
    """Return the tokens of a formula or reaction.

    Inputs containing an arrow are parsed as reactions, all others as a
    single formula.
    """
    parser = Parser(text)
    parser._consume_whitespace()
    if ARROW in text:
        parser.parse_reaction()
    else:
        parser.parse_molecule()
    parser.expect_done()
    return parser.tokens
