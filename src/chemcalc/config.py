"""Runtime configuration for the command-line tool."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path

from chemcalc.constants import DEFAULT_DB_FILENAME


def default_db_path() -> Path:
    """Path of the element database shipped with the package."""
    return Path(str(resources.files("chemcalc") / "data" / DEFAULT_DB_FILENAME))


@dataclass(frozen=True)
class CalculatorConfiguration:
    """Settings shared by the CLI commands.

    Attributes:
        db_path: Location of the semicolon-delimited element database.
        log_level: Name of the logging level, e.g. ``"DEBUG"``.
    """

    db_path: Path
    log_level: str = "WARNING"

    @classmethod
    def build(cls, db_path: Path | None = None, log_level: str | None = None) -> CalculatorConfiguration:
        return cls(
            db_path=db_path if db_path is not None else default_db_path(),
            log_level=(log_level or "WARNING").upper(),
        )
