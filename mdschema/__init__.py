"""
mdschema: derive relational schemas from heading-structured markdown.

Headings declare typed records, bullet lines declare their properties, and
``{name}`` values reference other records. A document converts to SQL,
TypeScript or Python declarations, and round-trips through markdown and JSON.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from mdschema.exceptions import (
    MDSchemaException,
    DataProcessingException,
    ParseException,
    ReferenceException,
    DocumentStructureException,
    FileProcessingException,
    JSONParsingException,
    ConfigurationException,
    UnsupportedFormatException,
    InvalidConfigurationException
)
from mdschema.modules.document_module import MarkdownDatabase

__version__ = "0.1.0"

__all__ = [
    'MarkdownDatabase',
    'MDSchemaException',
    'DataProcessingException',
    'ParseException',
    'ReferenceException',
    'DocumentStructureException',
    'FileProcessingException',
    'JSONParsingException',
    'ConfigurationException',
    'UnsupportedFormatException',
    'InvalidConfigurationException',
]
