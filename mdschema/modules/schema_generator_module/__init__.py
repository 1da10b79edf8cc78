"""Schema generator module for turning markdown records into relational tables.

This module parses heading-structured markdown into a record tree, flattens
it, merges records that share an identity, infers column types and
synthesizes per-type tables with primary and foreign keys.

Modules:
    records: Record tree, flat arena, tagged values and table structures
    markdown_parser: Build the record tree from markdown text
    flattener: Preorder arena with parent indices
    identity_resolver: Merge records by name and assign identifiers
    type_inference: Column type inference and value conversion
    schema_synthesizer: Columns, keys and rows per record type

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from .records import (
    Column, FlatDocument, ForeignKey, Record, ReferenceMarker, Schema, Table,
    TableKeys, TextValue, classify_value, copy_forest, is_marker
)
from .markdown_parser import parse_markdown
from .flattener import flatten
from .identity_resolver import IdentityMap, generate_uuid, identity_key, resolve_identities
from .type_inference import convert_value, infer_column_type, is_numeric
from .schema_synthesizer import build_schema, synthesize_schema

__all__ = [
    'Column',
    'FlatDocument',
    'ForeignKey',
    'Record',
    'ReferenceMarker',
    'Schema',
    'Table',
    'TableKeys',
    'TextValue',
    'classify_value',
    'copy_forest',
    'is_marker',
    'parse_markdown',
    'flatten',
    'IdentityMap',
    'generate_uuid',
    'identity_key',
    'resolve_identities',
    'convert_value',
    'infer_column_type',
    'is_numeric',
    'build_schema',
    'synthesize_schema',
]
