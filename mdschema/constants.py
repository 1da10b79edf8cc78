"""
Constants module for the mdschema conversion system.

This module contains string constants, enums, and compiled patterns
used throughout the application.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import re
from enum import Enum
from typing import Final


# File types
class SourceFormat(str, Enum):
    """Formats a document can be loaded from."""

    MD = "md"
    JSON = "json"


class DestinationFormat(str, Enum):
    """Formats a document can be written to."""

    MD = "md"
    JSON = "json"
    SQL = "sql"
    TS = "ts"
    PY = "py"


# Column types
class ColumnType(str, Enum):
    """Inferred column types with their rendering in each output language."""

    TEXT = "text"
    INTEGER = "integer"
    REAL = "real"
    BOOLEAN = "boolean"

    @property
    def sql(self) -> str:
        return _SQL_TYPES[self]

    @property
    def typescript(self) -> str:
        return _TYPESCRIPT_TYPES[self]

    @property
    def python(self) -> str:
        return _PYTHON_TYPES[self]


_SQL_TYPES = {
    ColumnType.TEXT: "TEXT",
    ColumnType.INTEGER: "INTEGER",
    ColumnType.REAL: "REAL",
    ColumnType.BOOLEAN: "INTEGER",
}

_TYPESCRIPT_TYPES = {
    ColumnType.TEXT: "string",
    ColumnType.INTEGER: "number",
    ColumnType.REAL: "number",
    ColumnType.BOOLEAN: "boolean",
}

_PYTHON_TYPES = {
    ColumnType.TEXT: "str",
    ColumnType.INTEGER: "int",
    ColumnType.REAL: "float",
    ColumnType.BOOLEAN: "bool",
}


# Markdown grammar
HEADING_PATTERN: Final = re.compile(r"^(?P<hashes>#+)\s(?P<name>.+?)(?:$|\((?P<type>.+?)\))")
PROPERTY_PATTERN: Final = re.compile(r"^(?:-\s+)?(?P<property>.+?): (?P<value>.+)")
MARKER_PATTERN: Final = re.compile(r"^\{(?P<identity>.+?)\}$")

# Anything outside [A-Za-z0-9_] becomes an underscore in identifiers
IDENTIFIER_ESCAPE_PATTERN: Final = re.compile(r"[^0-9A-Za-z_]")

# Full-string decimal number, optionally signed, optionally with exponent
NUMBER_PATTERN: Final = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


# Column roles
class ColumnRole(str, Enum):
    """Where the values of a synthesized column come from."""

    PARENT = "parent"
    UUID = "uuid"
    REFERENCE = "reference"
    VALUE = "value"


# Encoding
DEFAULT_ENCODING: Final = "utf-8"
