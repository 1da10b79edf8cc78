"""JSON exchange format for record trees.

Each node is ``{depth, name, type, children, properties}``; nodes nest
recursively and never carry parent links. Incoming documents are validated
with pydantic before they become records.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from mdschema.exceptions import DocumentStructureException, JSONParsingException
from mdschema.modules.schema_generator_module.records import Record
from mdschema.types import RecordDict

from mdschema.utils.logging_utils import get_module_logger
logger = get_module_logger(__name__)


class RecordNode(BaseModel):
    """One node of the exchange format."""
    depth: int = Field(ge=1)
    name: str
    type: str
    children: List["RecordNode"] = Field(default_factory=list)
    properties: Dict[str, str] = Field(default_factory=dict)

    @field_validator('name', 'type')
    @classmethod
    def validate_not_blank(cls, v):
        """Names and types identify tables and rows, so they cannot be blank."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @model_validator(mode="after")
    def validate_child_depths(self):
        """Children sit strictly deeper than their parent."""
        for child in self.children:
            if child.depth <= self.depth:
                raise ValueError(
                    f"child '{child.name}' at depth {child.depth} is not deeper than "
                    f"'{self.name}' at depth {self.depth}"
                )
        return self

    def to_record(self) -> Record:
        return Record(
            depth=self.depth,
            name=self.name,
            type=self.type,
            properties=dict(self.properties),
            children=[child.to_record() for child in self.children],
        )


RecordNode.model_rebuild()


class RecordDocument(BaseModel):
    """A whole exchange document: an ordered list of root nodes."""
    roots: List[RecordNode]

    @model_validator(mode="after")
    def validate_root_depths(self):
        """Root nodes are always at depth 1."""
        for root in self.roots:
            if root.depth != 1:
                raise ValueError(f"root '{root.name}' has depth {root.depth}, expected 1")
        return self


def records_to_dicts(records: List[Record]) -> List[RecordDict]:
    return [record.to_dict() for record in records]


def records_to_json(records: List[Record], indent: Optional[int] = None) -> str:
    """Serialize a forest to the exchange format."""
    return json.dumps(records_to_dicts(records), indent=indent, ensure_ascii=False)


def records_from_json(text: str, source: str = "<string>") -> List[Record]:
    """Parse and validate an exchange document.

    Args:
        text: JSON text holding a list of nodes
        source: Name used in error messages

    Returns:
        Forest of records

    Raises:
        JSONParsingException: If the text is not valid JSON
        DocumentStructureException: If the JSON does not match the exchange format
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise JSONParsingException(source, e) from e

    return records_from_data(data, source)


def records_from_data(data: Any, source: str = "<data>") -> List[Record]:
    """Validate already-decoded exchange data and build records."""
    if not isinstance(data, list):
        raise DocumentStructureException(source, "expected a list of root records")

    try:
        document = RecordDocument(roots=data)
    except ValidationError as e:
        raise DocumentStructureException(source, "invalid record node", {"errors": e.error_count()}) from e

    records = [node.to_record() for node in document.roots]
    logger.debug(f"Loaded {len(records)} root records from {source}")
    return records
