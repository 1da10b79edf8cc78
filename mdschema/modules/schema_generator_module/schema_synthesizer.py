"""Schema synthesizer: turn resolved records into per-type table definitions.

For every record type, in first-seen order, this module builds the column
list, the primary and foreign keys, and one row per surviving instance.

Column layout of a table for type ``t``:
    ``t_<parent type>_uuid``   parent link, only when some ``t`` has a parent
    ``t_uuid``                 the record's own identifier
    ``t_<property>``           one per plain property, type inferred
    ``t_<property>_<ref>_uuid`` one per property holding only ``{name}`` markers

Known limitation: when a type appears under several parent types, only the
first parent type seen is modelled; instances under other parents still write
their parent's identifier into the same link column.

Functions:
    synthesize_schema(flat, identities): Build the ordered schema
    build_schema(records, unique_depth, id_factory): Run the whole pipeline

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from mdschema.constants import ColumnRole, ColumnType
from mdschema.types import IdFactory
from mdschema.utils.naming_utils import escape_identifier, pluralize
from .flattener import flatten
from .identity_resolver import IdentityMap, resolve_identities
from .records import (
    Column, FlatDocument, ForeignKey, Record, ReferenceMarker, Schema, Table,
    classify_value
)
from .type_inference import CellValue, convert_value, infer_column_type

from mdschema.utils.logging_utils import get_module_logger, get_module_metrics
logger = get_module_logger(__name__)
metrics = get_module_metrics(__name__)


@dataclass
class _TypeGroup:
    """Records of one escaped type, collected in document order."""
    type: str
    indices: List[int] = field(default_factory=list)
    parent_type: Optional[str] = None
    samples: Dict[str, List[str]] = field(default_factory=dict)


def synthesize_schema(flat: FlatDocument, identities: IdentityMap) -> Schema:
    """Build tables, keys and rows from a flattened, resolved document.

    Args:
        flat: Flattened document whose properties were merged by the resolver
        identities: Identity map from ``resolve_identities``

    Returns:
        Ordered mapping of escaped type name to Table

    Raises:
        ReferenceException: If a ``{name}`` marker matches no identity
    """
    groups = _group_by_type(flat)
    schema: Schema = {}

    for type_name, group in groups.items():
        table = Table(type=type_name, name=pluralize(type_name))
        _build_columns(table, group, flat, identities)
        _build_rows(table, group, flat, identities)
        schema[type_name] = table

        logger.debug(
            f"Table {table.name}: {len(table.columns)} columns, "
            f"{len(table.keys.foreign)} foreign keys"
        )
        metrics.record_count("rows", len(table.rows), table=table.name)

    logger.info(f"Synthesized {len(schema)} tables from {len(flat)} records")
    return schema


def build_schema(
    records: List[Record],
    unique_depth: int = 0,
    id_factory: Optional[IdFactory] = None
) -> Tuple[Schema, FlatDocument, IdentityMap]:
    """Flatten, resolve and synthesize a forest in one call.

    The records are mutated by identity resolution; pass a copy when the
    caller needs the original forest afterwards.
    """
    flat = flatten(records)
    identities = resolve_identities(flat, unique_depth, id_factory)
    return synthesize_schema(flat, identities), flat, identities


def _group_by_type(flat: FlatDocument) -> Dict[str, _TypeGroup]:
    groups: Dict[str, _TypeGroup] = {}

    for index, record in enumerate(flat.records):
        type_name = escape_identifier(record.type)
        group = groups.get(type_name)
        if group is None:
            group = groups[type_name] = _TypeGroup(type_name)

        group.indices.append(index)

        parent = flat.parent_of(index)
        if parent is not None:
            parent_type = escape_identifier(parent.type)
            if group.parent_type is None:
                group.parent_type = parent_type
            elif parent_type != group.parent_type:
                logger.warning(
                    f"Type '{type_name}' appears under '{parent_type}' but is linked "
                    f"to '{group.parent_type}' only"
                )

        for name, value in record.properties.items():
            group.samples.setdefault(name, []).append(value)

    return groups


def _build_columns(table: Table, group: _TypeGroup, flat: FlatDocument, identities: IdentityMap) -> None:
    type_name = group.type
    uuid_column = f"{type_name}_uuid"
    primary: Tuple[str, ...] = (uuid_column,)

    if group.parent_type:
        parent_column = f"{type_name}_{group.parent_type}_uuid"
        table.columns.append(Column(parent_column, ColumnRole.PARENT, ColumnType.TEXT, required=True))
        table.keys.foreign.append(
            ForeignKey(parent_column, pluralize(group.parent_type), f"{group.parent_type}_uuid")
        )
        primary = (parent_column, uuid_column)

    table.columns.append(Column(uuid_column, ColumnRole.UUID, ColumnType.TEXT, required=True))
    table.keys.primary = primary

    for name, values in group.samples.items():
        present = [value for value in values if value != ""]
        tagged = [classify_value(value) for value in present]
        markers = [value for value in tagged if isinstance(value, ReferenceMarker)]

        if markers and len(markers) == len(tagged):
            target, _ = identities.resolve(markers[0].identity, flat)
            for marker in markers[1:]:
                identities.resolve(marker.identity, flat)

            target_type = escape_identifier(target.type)
            column_name = _unique_name(
                table, escape_identifier(f"{type_name}_{name}_{target_type}_uuid")
            )
            table.columns.append(
                Column(column_name, ColumnRole.REFERENCE, ColumnType.TEXT,
                       property=name, references=pluralize(target_type))
            )
            table.keys.foreign.append(
                ForeignKey(column_name, pluralize(target_type), f"{target_type}_uuid")
            )
            continue

        if markers:
            logger.warning(
                f"Property '{name}' of type '{type_name}' mixes references and "
                f"literals; storing it as text"
            )

        column_name = _unique_name(table, f"{type_name}_{escape_identifier(name)}")
        table.columns.append(
            Column(column_name, ColumnRole.VALUE, infer_column_type(present), property=name)
        )


def _unique_name(table: Table, name: str) -> str:
    """Suffix a column name until it does not clash with an existing column."""
    taken = set(table.column_names)
    if name not in taken:
        return name

    suffix = 2
    while f"{name}_{suffix}" in taken:
        suffix += 1
    logger.warning(f"Column '{name}' already exists in {table.name}; using '{name}_{suffix}'")
    return f"{name}_{suffix}"


def _build_rows(table: Table, group: _TypeGroup, flat: FlatDocument, identities: IdentityMap) -> None:
    seen = set()

    for index in group.indices:
        own_id = identities.id_of(index)
        parent_index = flat.parents[index]
        parent_id = identities.id_of(parent_index) if parent_index is not None else None

        key = (parent_id, own_id) if group.parent_type else (own_id,)
        if key in seen:
            # Merged identities share one property set, so the first row stands
            continue
        seen.add(key)

        if group.parent_type and parent_id is None:
            logger.warning(
                f"Record '{flat.records[index].name}' of type '{group.type}' has no parent; "
                f"its {table.keys.primary[0]} is NULL"
            )

        properties = flat.records[index].properties
        table.rows.append(tuple(
            _cell(column, properties, own_id, parent_id, flat, identities)
            for column in table.columns
        ))


def _cell(
    column: Column,
    properties: Dict[str, str],
    own_id: str,
    parent_id: Optional[str],
    flat: FlatDocument,
    identities: IdentityMap
) -> CellValue:
    if column.role is ColumnRole.PARENT:
        return parent_id
    if column.role is ColumnRole.UUID:
        return own_id

    value = properties.get(column.property)
    if value is None or value == "":
        return None

    if column.role is ColumnRole.REFERENCE:
        marker = classify_value(value)
        _, target_id = identities.resolve(marker.identity, flat)
        return target_id

    return convert_value(value, column.type)
