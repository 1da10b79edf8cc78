"""
Type definitions for the mdschema conversion system.

This module provides type aliases and TypedDict definitions for the data
structures that cross the package boundary.
"""

from typing import Callable, Dict, List, Union, TypedDict
from pathlib import Path


# Basic type aliases
FilePath = Union[str, Path]
IdFactory = Callable[[], str]


class RecordDict(TypedDict):
    """Exchange representation of one record node."""
    depth: int
    name: str
    type: str
    children: List["RecordDict"]
    properties: Dict[str, str]
