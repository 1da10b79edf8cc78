"""Render module for turning records and schemas into text.

Modules:
    sql_renderer: DROP / CREATE TABLE / INSERT statements
    declaration_renderer: TypeScript and Python type declarations
    markdown_renderer: Markdown pretty-printer for record trees
    json_exchange: JSON exchange format with validation

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from .sql_renderer import render_sql
from .declaration_renderer import render_python, render_typescript
from .markdown_renderer import render_markdown
from .json_exchange import records_from_json, records_to_dicts, records_to_json

__all__ = [
    'render_sql',
    'render_python',
    'render_typescript',
    'render_markdown',
    'records_from_json',
    'records_to_dicts',
    'records_to_json',
]
