"""Data model shared by the schema generation pipeline.

A document is a forest of Record nodes. The parent relation never lives on a
Record: the parser keeps it in its own state and the flattener keeps it as an
index list in FlatDocument, so exported records are always plain trees.

Classes:
    Record: Heading node with properties and owned children
    FlatDocument: Preorder arena of records with parent indices
    TextValue / ReferenceMarker: Tagged property values
    Column, ForeignKey, TableKeys, Table: Synthesized relational schema

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from mdschema.constants import ColumnRole, ColumnType, MARKER_PATTERN
from mdschema.types import RecordDict


@dataclass
class Record:
    """A heading in the document tree."""
    depth: int
    name: str
    type: str
    properties: Dict[str, str] = field(default_factory=dict)
    children: List["Record"] = field(default_factory=list)

    def to_dict(self) -> RecordDict:
        """Return the exchange representation (no parent links)."""
        return {
            "depth": self.depth,
            "name": self.name,
            "type": self.type,
            "children": [child.to_dict() for child in self.children],
            "properties": dict(self.properties),
        }


def copy_forest(records: List[Record]) -> List[Record]:
    """Deep copy a forest so pipeline passes never touch the caller's records."""
    return copy.deepcopy(records)


@dataclass
class FlatDocument:
    """Preorder arena produced by the flattener.

    ``parents[i]`` is the index of the parent of ``records[i]`` or None for
    roots; a parent index is always smaller than its child's index.
    """
    records: List[Record] = field(default_factory=list)
    parents: List[Optional[int]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def parent_of(self, index: int) -> Optional[Record]:
        parent_index = self.parents[index]
        return None if parent_index is None else self.records[parent_index]


# Tagged property values

@dataclass(frozen=True)
class TextValue:
    """A literal property value, still in its raw string form."""
    raw: str


@dataclass(frozen=True)
class ReferenceMarker:
    """A ``{identity}`` property value pointing at another record."""
    identity: str

    def render(self) -> str:
        return "{" + self.identity + "}"


PropertyValue = Union[TextValue, ReferenceMarker]


def is_marker(value: str) -> bool:
    """Check whether a raw value has the exact form ``{identity}``."""
    return MARKER_PATTERN.match(value) is not None


def classify_value(value: str) -> PropertyValue:
    """Tag a raw property value as a literal or a reference marker."""
    match = MARKER_PATTERN.match(value)
    if match:
        return ReferenceMarker(match.group("identity"))
    return TextValue(value)


# Synthesized schema

@dataclass
class Column:
    """One column of a synthesized table."""
    name: str
    role: ColumnRole
    type: ColumnType = ColumnType.TEXT
    required: bool = False
    property: Optional[str] = None
    references: Optional[str] = None


@dataclass
class ForeignKey:
    column: str
    table: str
    target_column: str


@dataclass
class TableKeys:
    primary: Tuple[str, ...] = ()
    foreign: List[ForeignKey] = field(default_factory=list)


@dataclass
class Table:
    """Columns, keys and rows synthesized for one record type."""
    type: str
    name: str
    columns: List[Column] = field(default_factory=list)
    keys: TableKeys = field(default_factory=TableKeys)
    rows: List[Tuple[Any, ...]] = field(default_factory=list)

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def column(self, name: str) -> Column:
        for column in self.columns:
            if column.name == name:
                return column
        raise KeyError(name)

    def row_dicts(self) -> List[Dict[str, Any]]:
        """Rows as column-name mappings, handy for inspection and tests."""
        names = self.column_names
        return [dict(zip(names, row)) for row in self.rows]


Schema = Dict[str, Table]
