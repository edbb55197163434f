"""Command-line entrypoints for chemcalc."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from chemcalc import __version__
from chemcalc.balance import balance_reaction
from chemcalc.config import CalculatorConfiguration
from chemcalc.constants import DB_PATH_ENVVAR, LOG_LEVEL_ENVVAR
from chemcalc.database import FlatFileDatabase
from chemcalc.errors import ChemError, ErrorKind
from chemcalc.formatting import format_error, format_mass_table, format_reaction, highlight
from chemcalc.mass import compute_molar_mass
from chemcalc.parser import parse_equation, tokenize

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Compute molar masses and balance chemical reactions.",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"chemcalc {__version__}")
        raise typer.Exit()


def _log_level_callback(value: str) -> str:
    if value.upper() not in LOG_LEVELS:
        raise typer.BadParameter(f"expected one of {', '.join(LOG_LEVELS)}")
    return value.upper()


def _fail(ctx: typer.Context, error: ChemError, input_text: str) -> NoReturn:
    typer.echo(format_error(error, input_text), err=True)
    if error.kind is ErrorKind.USAGE:
        typer.echo(ctx.get_usage(), err=True)
        raise typer.Exit(code=2)
    raise typer.Exit(code=1)


def _require_text(value: str, what: str) -> None:
    if not value.strip():
        raise ChemError(ErrorKind.USAGE, f"Expected a {what}, got an empty argument")


@app.callback()
def main(
    ctx: typer.Context,
    db_path: Annotated[
        Path | None,
        typer.Option(
            "--db-path",
            envvar=DB_PATH_ENVVAR,
            help="Path to the element database (ShortName;Mass;LongName;AtomicNumber).",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            envvar=LOG_LEVEL_ENVVAR,
            callback=_log_level_callback,
            help="Logging level.",
        ),
    ] = "WARNING",
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """Compute molar masses and balance chemical reactions."""
    config = CalculatorConfiguration.build(db_path=db_path, log_level=log_level)
    logging.basicConfig(
        level=config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = config


@app.command()
def mass(
    ctx: typer.Context,
    formula: Annotated[str, typer.Argument(help="Chemical formula, e.g. (CH3)2CO.")],
) -> None:
    """Compute the molar mass of a formula."""
    config: CalculatorConfiguration = ctx.obj
    try:
        _require_text(formula, "formula")
        database = FlatFileDatabase(config.db_path)
        result = compute_molar_mass(formula, database)
        tokens = tokenize(formula)
    except ChemError as exc:
        logger.debug("mass %r failed: %r", formula, exc)
        _fail(ctx, exc, formula)

    typer.echo(highlight(formula, tokens).strip())
    typer.echo(format_mass_table(result))


@app.command()
def balance(
    ctx: typer.Context,
    reaction: Annotated[str, typer.Argument(help="Reaction, e.g. 'C3H8 + O2 -> CO2 + H2O'.")],
) -> None:
    """Balance a chemical reaction."""
    try:
        _require_text(reaction, "reaction")
        parsed = parse_equation(reaction)
        coefs = balance_reaction(parsed)
    except ChemError as exc:
        logger.debug("balance %r failed: %r", reaction, exc)
        _fail(ctx, exc, reaction)

    typer.echo(format_reaction(parsed, coefs))
