"""Semicolon-delimited element database.

One element per line::

    ShortName;Mass;LongName;AtomicNumber
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from chemcalc.database.base import ElemData, ElementDatabase
from chemcalc.errors import ChemError, ErrorKind

logger = logging.getLogger(__name__)


class FlatFileDatabase(ElementDatabase):
    """Element store backed by a text file.

    The file is re-read on every lookup.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        if not self.path.is_file():
            raise _open_error(self.path)

    def lookup(self, short_name: str) -> ElemData:
        logger.debug("Looking up %s in %s", short_name, self.path)
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                for line in f:
                    if line.strip() and line.split(";", 1)[0].strip() == short_name:
                        return decode_line(line)
        except FileNotFoundError as exc:
            raise _open_error(self.path) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ChemError(ErrorKind.DATABASE, "Error reading the database") from exc

        raise ChemError(ErrorKind.DATABASE, f"Could not find element: {short_name!r}")


class MappingDatabase(ElementDatabase):
    """In-memory element store."""

    def __init__(self, records: Mapping[str, ElemData]):
        self.records = records

    def lookup(self, short_name: str) -> ElemData:
        record = self.records.get(short_name)
        if record is None:
            raise ChemError(ErrorKind.DATABASE, f"Could not find element: {short_name!r}")
        return record


def decode_line(line: str) -> ElemData:
    """Decode one ``ShortName;Mass;LongName;AtomicNumber`` record."""
    fields = [field.strip() for field in line.strip().split(";")]
    if len(fields) < 4:
        raise ChemError(ErrorKind.DATABASE, "Missing field in database")

    try:
        mass = float(fields[1])
        atomic_number = int(fields[3])
    except ValueError as exc:
        raise ChemError(ErrorKind.DATABASE, "Field in database corrupted") from exc
    if atomic_number < 0:
        raise ChemError(ErrorKind.DATABASE, "Field in database corrupted")

    return ElemData(
        short_name=fields[0],
        long_name=fields[2],
        mass=mass,
        atomic_number=atomic_number,
    )


def _open_error(path: Path) -> ChemError:
    return ChemError(
        ErrorKind.DATABASE, f"Could not open database file. Expected at: {str(path)!r}"
    )
