"""Flatten a record forest into a preorder arena.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from typing import List, Optional

from .records import FlatDocument, Record


def flatten(records: List[Record]) -> FlatDocument:
    """Preorder traversal of a forest.

    Every record appears after its parent, and ``parents`` holds the arena
    index of each record's parent. This pass is authoritative for parent
    links; whatever the parser knew is not consulted.

    Args:
        records: Root records

    Returns:
        FlatDocument sharing the given Record objects
    """
    flat = FlatDocument()
    for record in records:
        _visit(record, None, flat)
    return flat


def _visit(record: Record, parent_index: Optional[int], flat: FlatDocument) -> None:
    index = len(flat.records)
    flat.records.append(record)
    flat.parents.append(parent_index)
    for child in record.children:
        _visit(child, index, flat)
