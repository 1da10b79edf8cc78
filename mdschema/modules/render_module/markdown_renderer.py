"""Markdown pretty-printer for record trees.

Renders records back into the heading dialect the parser reads: names and
property names in title case, reference markers re-wrapped in braces, blank
lines between blocks. Parsing the output yields the same tree.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from typing import List

from mdschema.modules.schema_generator_module.records import Record, ReferenceMarker, classify_value
from mdschema.utils.naming_utils import ucwords

PROPERTY_BULLET = "-   "


def render_property(name: str, value: str) -> str:
    tagged = classify_value(value)
    if isinstance(tagged, ReferenceMarker):
        value = "{" + ucwords(tagged.identity) + "}"
    return f"{PROPERTY_BULLET}{ucwords(name)}: {value}"


def render_record(record: Record) -> str:
    """Render one record and its subtree."""
    blocks = [f"{'#' * record.depth} {ucwords(record.name)} ({record.type})"]

    if record.properties:
        blocks.append("\n".join(
            render_property(name, value) for name, value in record.properties.items()
        ))

    blocks.append("\n\n".join(render_record(child) for child in record.children))

    return "\n\n".join(blocks).strip()


def render_markdown(records: List[Record]) -> str:
    """Render a forest as a markdown document ending in a newline."""
    return "\n\n".join(render_record(record) for record in records).strip() + "\n"
