"""Document module exposing the MarkdownDatabase facade.

Modules:
    markdown_database: Load documents from markdown or JSON and convert them

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from .markdown_database import MarkdownDatabase

__all__ = ['MarkdownDatabase']
