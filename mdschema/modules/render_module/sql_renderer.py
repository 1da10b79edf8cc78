"""SQL rendering of a synthesized schema.

Output order: DROP statements (reverse table order), CREATE TABLE statements,
INSERT statements. Identifiers are backtick-quoted.

Functions:
    render_sql(schema): Full script for a schema
    render_create_table(table): CREATE TABLE statement for one table
    render_insert(table): INSERT statement for one table
    render_value(value): SQL literal for one cell

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from typing import List

from mdschema.modules.schema_generator_module.records import Schema, Table
from mdschema.modules.schema_generator_module.type_inference import CellValue, is_numeric

INDENT = "    "


def quote_identifier(name: str) -> str:
    return f"`{name}`"


def render_value(value: CellValue) -> str:
    """Render a cell as a SQL literal.

    None is NULL, booleans are 1/0, numbers and numeric strings are bare,
    everything else is single-quoted with embedded quotes doubled.
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return repr(value)
    if is_numeric(value):
        return value
    return "'" + value.replace("'", "''") + "'"


def render_create_table(table: Table) -> str:
    columns = [f"{quote_identifier(column.name)} {column.type.sql}" for column in table.columns]

    keys = ["PRIMARY KEY (" + ", ".join(quote_identifier(name) for name in table.keys.primary) + ")"]
    for foreign_key in table.keys.foreign:
        keys.append(
            f"FOREIGN KEY ({quote_identifier(foreign_key.column)}) "
            f"REFERENCES {quote_identifier(foreign_key.table)} "
            f"({quote_identifier(foreign_key.target_column)})"
        )

    return (
        f"CREATE TABLE IF NOT EXISTS {quote_identifier(table.name)} (\n"
        f"{INDENT}" + f",\n{INDENT}".join(columns) + ",\n\n"
        f"{INDENT}" + f",\n{INDENT}".join(keys) + "\n);"
    )


def render_insert(table: Table) -> str:
    columns = ", ".join(quote_identifier(name) for name in table.column_names)
    rows = [
        "(" + ", ".join(render_value(value) for value in row) + ")"
        for row in table.rows
    ]
    return (
        f"INSERT INTO {quote_identifier(table.name)}\n"
        f"{INDENT}({columns}) VALUES\n"
        f"{INDENT}" + f",\n{INDENT}".join(rows) + ";"
    )


def render_sql(schema: Schema) -> str:
    """Render DROP, CREATE and INSERT statements for every table."""
    tables = list(schema.values())
    statements: List[str] = []

    statements.extend(
        f"DROP TABLE IF EXISTS {quote_identifier(table.name)};" for table in reversed(tables)
    )
    statements.extend(render_create_table(table) for table in tables)
    statements.extend(render_insert(table) for table in tables if table.rows)

    return "\n\n".join(statements)
