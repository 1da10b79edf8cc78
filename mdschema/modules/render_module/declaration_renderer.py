"""Type declarations for synthesized tables.

Each table becomes one named container with one property per column. The
uuid and parent-link columns are required; every other column is optional.

Functions:
    render_typescript(schema): TypeScript namespaces with an interface each
    render_python(schema): Python dataclasses

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import keyword
from typing import List

from mdschema.config import SchemaConfig
from mdschema.modules.schema_generator_module.records import Schema, Table
from mdschema.utils.naming_utils import pascal_case

INDENT = "    "


def container_name(table: Table) -> str:
    """PascalCase container name for a table's type.

    Names starting with a digit or equal to a Python keyword get a leading
    underscore.
    """
    name = pascal_case(table.type)
    if not name or name[0].isdigit() or keyword.iskeyword(name):
        name = "_" + name
    return name


def render_typescript(schema: Schema) -> str:
    base = SchemaConfig.DECLARATION_BASE_CLASS
    blocks: List[str] = [
        f"class {base}<Properties> {{\n"
        f"{INDENT}data: Properties;\n"
        f"\n"
        f"{INDENT}constructor(properties: Properties) {{\n"
        f"{INDENT * 2}this.data = properties;\n"
        f"{INDENT}}}\n"
        f"}}"
    ]

    for table in schema.values():
        fields = [
            f"{INDENT * 2}{column.name}{'' if column.required else '?'}: {column.type.typescript};"
            for column in table.columns
        ]
        blocks.append(
            f"export namespace {container_name(table)} {{\n"
            f"{INDENT}export interface Object {{\n"
            + "\n".join(fields) + "\n"
            f"{INDENT}}}\n"
            f"\n"
            f"{INDENT}export class Instance extends {base}<Object> {{}}\n"
            f"}}"
        )

    return "\n\n".join(blocks) + "\n"


def render_python(schema: Schema) -> str:
    blocks: List[str] = [
        '"""Record declarations generated by mdschema."""\n'
        "\n"
        "from dataclasses import dataclass\n"
        "from typing import Optional"
    ]

    for table in schema.values():
        # Required columns come first in every table, so defaults stay at the end
        fields = []
        for column in table.columns:
            if column.required:
                fields.append(f"{INDENT}{_python_field(column.name)}: {column.type.python}")
            else:
                fields.append(f"{INDENT}{_python_field(column.name)}: Optional[{column.type.python}] = None")

        blocks.append(
            "@dataclass\n"
            f"class {container_name(table)}:\n"
            + "\n".join(fields)
        )

    return "\n\n\n".join(blocks) + "\n"


def _python_field(name: str) -> str:
    return "_" + name if name[:1].isdigit() else name
