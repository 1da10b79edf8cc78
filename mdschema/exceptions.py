"""
Exception hierarchy for mdschema.

Every error carries a human readable message and a ``details`` mapping with
the values needed to locate the problem (line number, file, identity).
``str()`` renders both, which is what the command line prints.

    MDSchemaException
    ├── DataProcessingException
    │   ├── ParseException
    │   ├── ReferenceException
    │   ├── DocumentStructureException
    │   ├── FileProcessingException
    │   └── JSONParsingException
    └── ConfigurationException
        ├── UnsupportedFormatException
        └── InvalidConfigurationException

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union


class MDSchemaException(Exception):
    """Root of all errors raised by mdschema."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = dict(details or {})
        super().__init__(message)

    def __str__(self):
        if not self.details:
            return self.message
        rendered = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({rendered})"


class DataProcessingException(MDSchemaException):
    """Errors caused by the content of a document."""


class ParseException(DataProcessingException):
    """A heading has no parenthesized record type."""

    def __init__(self, heading: str, line_number: Optional[int] = None):
        self.heading = heading
        self.line_number = line_number
        details = {} if line_number is None else {"line": line_number}
        super().__init__(f'Unknown type for "{heading}"', details)


class ReferenceException(DataProcessingException):
    """A ``{name}`` marker names an identity no record has."""

    def __init__(self, identity: str, details: Optional[Dict[str, Any]] = None):
        self.identity = identity
        super().__init__(f'Unable to find reference "{identity}"', details)


class DocumentStructureException(DataProcessingException):
    """Decoded exchange data does not have the shape of a record forest."""

    def __init__(self, document_id: str, issue: str, details: Optional[Dict[str, Any]] = None):
        self.document_id = document_id
        self.issue = issue
        super().__init__(
            f"{document_id} is not a valid record document: {issue}",
            {"document": document_id, **(details or {})}
        )


class FileProcessingException(DataProcessingException):
    """A source or destination file could not be read or written."""

    def __init__(self, file_path: Union[str, Path], operation: str, original_error: Optional[Exception] = None):
        self.file_path = Path(file_path)
        self.operation = operation
        self.original_error = original_error

        details: Dict[str, Any] = {"file": str(file_path)}
        if original_error is not None:
            details["cause"] = f"{type(original_error).__name__}: {original_error}"
        super().__init__(f"Could not {operation} {file_path}", details)


class JSONParsingException(DataProcessingException):
    """A JSON source is not syntactically valid."""

    def __init__(self, source: str, original_error: Optional[Exception] = None):
        self.source = source
        details: Dict[str, Any] = {}
        if isinstance(original_error, json.JSONDecodeError):
            details.update(line=original_error.lineno, column=original_error.colno, reason=original_error.msg)
        elif original_error is not None:
            details["reason"] = str(original_error)
        super().__init__(f"{source} is not valid JSON", details)


class ConfigurationException(MDSchemaException):
    """Errors caused by options, file extensions or environment settings."""


class UnsupportedFormatException(ConfigurationException):
    """A file extension or format name maps to no known source or destination."""

    def __init__(self, location: str, direction: str = "destination"):
        self.location = location
        self.direction = direction
        super().__init__("Unsupported format.", {"location": location, "direction": direction})


class InvalidConfigurationException(ConfigurationException):
    """A configuration value is present but unusable."""

    def __init__(self, config_key: str, reason: str, details: Optional[Dict[str, Any]] = None):
        self.config_key = config_key
        super().__init__(
            f"{config_key}: {reason}",
            {"config_key": config_key, **(details or {})}
        )
