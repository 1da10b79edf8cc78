"""
File operation utilities for the mdschema conversion system.

This module provides the text file operations used by the document facade,
with consistent error handling and logging.
"""

from pathlib import Path
from typing import Union

from mdschema.logging_config import get_logger
from mdschema.exceptions import FileProcessingException, UnsupportedFormatException
from mdschema.constants import DEFAULT_ENCODING

logger = get_logger(__name__)


class FileOperations:
    """Centralized file operations with consistent error handling."""

    @staticmethod
    def read_text(file_path: Path, encoding: str = DEFAULT_ENCODING) -> str:
        """
        Read a text file with proper error handling.

        Args:
            file_path: Path to the file
            encoding: File encoding (default: utf-8)

        Returns:
            File contents

        Raises:
            FileProcessingException: If file cannot be read
        """
        try:
            with open(file_path, 'r', encoding=encoding) as f:
                content = f.read()
            logger.debug(f"Successfully read {len(content)} characters from: {file_path}")
            return content
        except Exception as e:
            raise FileProcessingException(file_path, "read", e) from e

    @staticmethod
    def write_text(file_path: Path, content: str, encoding: str = DEFAULT_ENCODING) -> None:
        """
        Write a text file, creating parent directories as needed.

        Args:
            file_path: Path to write
            content: Text to write
            encoding: File encoding (default: utf-8)

        Raises:
            FileProcessingException: If file cannot be written
        """
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'w', encoding=encoding) as f:
                f.write(content)
            logger.debug(f"Successfully wrote {len(content)} characters to: {file_path}")
        except Exception as e:
            raise FileProcessingException(file_path, "write", e) from e


def get_extension(location: Union[str, Path], direction: str = "destination") -> str:
    """Return the lowercased extension of a path without the dot.

    Raises:
        UnsupportedFormatException: If the path has no extension
    """
    suffix = Path(location).suffix
    if not suffix:
        raise UnsupportedFormatException(str(location), direction)
    return suffix[1:].lower()

