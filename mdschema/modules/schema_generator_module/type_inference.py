"""Column type inference from raw string samples.

This module decides one column type per (record type, property) pair from
every value observed for it, and converts raw values to Python values for
row emission.

Functions:
    is_numeric(value): Full-string finite number check
    is_integral(value): Numeric value without fractional component
    infer_column_type(values): Pick TEXT, BOOLEAN, INTEGER or REAL
    convert_value(value, column_type): Raw string to typed Python value

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import math
from decimal import Decimal
from typing import Iterable, Optional, Union

from mdschema.constants import ColumnType, NUMBER_PATTERN

BOOLEAN_VALUES = frozenset({"0", "1"})

CellValue = Union[str, int, float, bool, None]


def is_numeric(value: str) -> bool:
    """Check that the whole string is a finite decimal number.

    Leading or trailing characters, hex literals, "inf" and "nan" are rejected.
    """
    if not isinstance(value, str) or not NUMBER_PATTERN.match(value):
        return False
    return math.isfinite(float(value))


def is_integral(value: str) -> bool:
    """Check that a numeric string has no fractional component ("3", "3.0", "1e3")."""
    if not is_numeric(value):
        return False
    number = Decimal(value)
    return number == number.to_integral_value()


def infer_column_type(values: Iterable[str]) -> ColumnType:
    """Infer a column type from all values observed for one column.

    1. any value not fully numeric -> TEXT
    2. more than one value, all exactly "0" or "1" -> BOOLEAN
    3. all values integral -> INTEGER
    4. otherwise -> REAL

    The result does not depend on the order of ``values``.

    Args:
        values: Raw string samples

    Returns:
        Inferred ColumnType (TEXT for an empty sample)
    """
    values = list(values)
    if not values or not all(is_numeric(value) for value in values):
        return ColumnType.TEXT

    if len(values) > 1 and all(value in BOOLEAN_VALUES for value in values):
        return ColumnType.BOOLEAN

    if all(is_integral(value) for value in values):
        return ColumnType.INTEGER

    return ColumnType.REAL


def convert_value(value: Optional[str], column_type: ColumnType) -> CellValue:
    """Convert a raw string to the Python value matching its column type.

    Empty strings and None become None.
    """
    if value is None or value == "":
        return None

    if column_type is ColumnType.BOOLEAN:
        return value == "1"
    if column_type is ColumnType.INTEGER:
        return int(Decimal(value))
    if column_type is ColumnType.REAL:
        return float(value)
    return value
