"""
Utility modules for the mdschema conversion system.

This package contains common utilities shared by the pipeline stages,
the renderers, and the command line.
"""

from .file_utils import (
    FileOperations,
    get_extension
)

from .naming_utils import (
    escape_identifier,
    pluralize,
    ucwords,
    pascal_case
)

__all__ = [
    # File utilities
    'FileOperations',
    'get_extension',

    # Naming utilities
    'escape_identifier',
    'pluralize',
    'ucwords',
    'pascal_case'
]
