"""Document facade tying the parser, the schema pipeline and the renderers together.

A MarkdownDatabase holds a forest of records loaded from markdown or JSON and
renders it as markdown, JSON, SQL, TypeScript or Python declarations. Every
schema build runs on a deep copy of the forest, so the held records are never
mutated and never gain parent links.

Classes:
    MarkdownDatabase: Load, convert and save documents

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union

from tqdm import tqdm

from mdschema.config import SchemaConfig
from mdschema.constants import DestinationFormat, SourceFormat
from mdschema.exceptions import UnsupportedFormatException
from mdschema.logging_config import LogContext
from mdschema.modules.render_module.declaration_renderer import render_python, render_typescript
from mdschema.modules.render_module.json_exchange import records_from_json, records_to_dicts, records_to_json
from mdschema.modules.render_module.markdown_renderer import render_markdown
from mdschema.modules.render_module.sql_renderer import render_sql
from mdschema.modules.schema_generator_module.markdown_parser import parse_markdown
from mdschema.modules.schema_generator_module.records import Record, Schema, copy_forest
from mdschema.modules.schema_generator_module.schema_synthesizer import build_schema
from mdschema.types import FilePath, IdFactory, RecordDict
from mdschema.utils.file_utils import FileOperations, get_extension
from mdschema.utils.logging_decorators import with_operation_logging

from mdschema.utils.logging_utils import get_module_logger
logger = get_module_logger(__name__)


class MarkdownDatabase:
    """A document of records with conversions to every output format."""

    def __init__(self, records: List[Record], id_factory: Optional[IdFactory] = None):
        """
        Args:
            records: Root records of the document
            id_factory: Identifier factory used for every schema build
                (defaults to random version 4 UUIDs)
        """
        self.records = records
        self.id_factory = id_factory
        self._markdown: Optional[str] = None

    # Loading

    @classmethod
    def from_markdown(cls, markdown: Union[str, Sequence[str]], **kwargs) -> "MarkdownDatabase":
        """Parse one markdown text, or several joined in order."""
        if isinstance(markdown, str):
            return cls(parse_markdown(markdown), **kwargs)
        return cls.join([cls.from_markdown(text) for text in markdown], **kwargs)

    @classmethod
    def from_json(cls, text: str, source: str = "<string>", **kwargs) -> "MarkdownDatabase":
        return cls(records_from_json(text, source), **kwargs)

    @classmethod
    def from_file(cls, location: Union[FilePath, Sequence[FilePath]], **kwargs) -> "MarkdownDatabase":
        """Load a ``.md`` or ``.json`` file, or several files joined in order.

        Raises:
            UnsupportedFormatException: If an extension is not md or json
            FileProcessingException: If a file cannot be read
        """
        if isinstance(location, (str, Path)):
            return cls(_load_records(Path(location)), **kwargs)

        locations = [Path(item) for item in location]
        documents = [
            cls(_load_records(path))
            for path in tqdm(locations, desc="Loading documents", unit="files", disable=len(locations) < 2)
        ]
        return cls.join(documents, **kwargs)

    @classmethod
    def join(cls, documents: Sequence["MarkdownDatabase"], **kwargs) -> "MarkdownDatabase":
        """Concatenate the root records of several documents."""
        records: List[Record] = []
        for document in documents:
            records.extend(document.records)
        return cls(records, **kwargs)

    # Schema

    @with_operation_logging("build_schema", count_label="tables")
    def build_schema(
        self,
        unique_depth: Optional[int] = None,
        id_factory: Optional[IdFactory] = None
    ) -> Schema:
        """Run flatten, identity resolution and synthesis on a copy of the records.

        Args:
            unique_depth: Records with depth <= unique_depth are never merged
                (defaults to SchemaConfig.get_unique_depth())
            id_factory: Identifier factory overriding the one given at construction

        Returns:
            Ordered mapping of type name to Table

        Raises:
            ReferenceException: If a reference marker names an unknown identity
        """
        if unique_depth is None:
            unique_depth = SchemaConfig.get_unique_depth()

        schema, _, _ = build_schema(
            copy_forest(self.records), unique_depth, id_factory or self.id_factory
        )
        return schema

    # Rendering

    def to_dicts(self) -> List[RecordDict]:
        return records_to_dicts(self.records)

    def to_json(self, indent: Optional[int] = None) -> str:
        return records_to_json(self.records, indent)

    def to_markdown(self) -> str:
        if self._markdown is None:
            self._markdown = render_markdown(self.records)
        return self._markdown

    def to_sql(self, unique_depth: Optional[int] = None) -> str:
        return render_sql(self.build_schema(unique_depth))

    def to_typescript(self, unique_depth: Optional[int] = None) -> str:
        return render_typescript(self.build_schema(unique_depth))

    def to_python(self, unique_depth: Optional[int] = None) -> str:
        return render_python(self.build_schema(unique_depth))

    def render(self, destination: Union[str, DestinationFormat], unique_depth: Optional[int] = None) -> str:
        """Render the document in the given destination format.

        Raises:
            UnsupportedFormatException: If the format is unknown
        """
        try:
            destination = DestinationFormat(destination)
        except ValueError:
            raise UnsupportedFormatException(str(destination), "destination")

        if destination is DestinationFormat.MD:
            return self.to_markdown()
        if destination is DestinationFormat.JSON:
            return self.to_json()
        if destination is DestinationFormat.SQL:
            return self.to_sql(unique_depth)
        if destination is DestinationFormat.TS:
            return self.to_typescript(unique_depth)
        return self.to_python(unique_depth)

    def to_file(self, location: FilePath, unique_depth: Optional[int] = None) -> str:
        """Render by file extension and write the result.

        Returns:
            The written content
        """
        path = Path(location)
        try:
            content = self.render(get_extension(path), unique_depth)
        except UnsupportedFormatException:
            raise UnsupportedFormatException(str(path), "destination")

        FileOperations.write_text(path, content)
        logger.info(f"Wrote {path}")
        return content


def _load_records(path: Path) -> List[Record]:
    with LogContext(document=str(path)):
        try:
            source = SourceFormat(get_extension(path, "source"))
        except ValueError:
            raise UnsupportedFormatException(str(path), "source")

        content = FileOperations.read_text(path)
        if source is SourceFormat.MD:
            records = parse_markdown(content)
        else:
            records = records_from_json(content, str(path))

        logger.info(f"Loaded {len(records)} root records from {path}")
        return records
