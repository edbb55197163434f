"""Text rendering for molecules, reactions, mass tables and errors."""

from __future__ import annotations

from typing import Sequence

import typer

from chemcalc.errors import ChemError, ErrorKind
from chemcalc.mass import MassResult
from chemcalc.models import Reaction, Token, TokenKind

INDENT = "    "

TOKEN_COLORS = {
    TokenKind.ELEMENT: typer.colors.YELLOW,
    TokenKind.COEFFICIENT: typer.colors.CYAN,
    TokenKind.PAREN_OPEN: typer.colors.MAGENTA,
    TokenKind.PAREN_CLOSE: typer.colors.MAGENTA,
    TokenKind.PLUS: typer.colors.BLUE,
    TokenKind.ARROW: typer.colors.BLUE,
}


def format_reaction(reaction: Reaction, coefs: Sequence[int]) -> str:
    """Render a balanced reaction, e.g. ``1 C3H8 + 5 O2 -> 3 CO2 + 4 H2O``."""
    n_lhs = len(reaction.lhs)
    terms = [f"{coef} {molecule}" for coef, molecule in zip(coefs, reaction.molecules)]
    return " + ".join(terms[:n_lhs]) + " -> " + " + ".join(terms[n_lhs:])


def format_mass_table(result: MassResult) -> str:
    lines = [
        "abbrv.     amt.          M             name          Z",
        "------------------------------------------------------",
    ]
    for row in result.rows:
        lines.append(
            f"{row.short_name:<3}  {row.count:>10}    {row.atomic_mass:>12.8f}    "
            f"{row.long_name:^12}    {row.atomic_number:>3}"
        )
    lines.append(f"Total: {result.total:.3f}")
    return "\n".join(lines)


def format_pointer(input_text: str, span: tuple[int, int]) -> str:
    """Underline ``span`` of ``input_text`` with a ``^~~~`` marker."""
    pos, length = span
    marker = " " * pos + "^" + "~" * (length - 1)
    return f"{INDENT}{input_text}\n{INDENT}{marker}"


def format_error(error: ChemError, input_text: str | None = None) -> str:
    """Render an error; input errors with a span also point into the input."""
    if error.kind is ErrorKind.INPUT and error.span is not None and input_text is not None:
        return f"{error.desc}\n{format_pointer(input_text, error.span)}"
    return error.desc


def highlight(text: str, tokens: Sequence[Token]) -> str:
    """Colour each token of ``text``; characters between tokens are kept as-is."""
    out: list[str] = []
    cursor = 0
    for token in tokens:
        out.append(text[cursor:token.pos])
        out.append(typer.style(token.text, fg=TOKEN_COLORS[token.kind]))
        cursor = token.pos + token.len
    out.append(text[cursor:])
    return "".join(out)
