"""Shared constants."""

U32_MAX = 2**32 - 1
MAX_NESTING_DEPTH = 100

ARROW = "->"
LEGAL_SYMBOLS = frozenset("+->() \t\r\n")

# Pivots smaller than this are treated as zero during elimination.
PIVOT_TOLERANCE = 1e-12
# Back-substituted values smaller than this mark a molecule as unbalanceable.
ZERO_TOLERANCE = 1e-9
MAX_DENOMINATOR = 10_000

DEFAULT_DB_FILENAME = "elemdb.csv"
DB_PATH_ENVVAR = "CHEMCALC_DB_PATH"
LOG_LEVEL_ENVVAR = "CHEMCALC_LOG_LEVEL"
