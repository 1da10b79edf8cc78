import json
import sqlite3

import pytest

from mdschema.exceptions import DocumentStructureException, JSONParsingException
from mdschema.modules.render_module.declaration_renderer import (
    container_name,
    render_python,
    render_typescript,
)
from mdschema.modules.render_module.json_exchange import records_from_data, records_from_json, records_to_json
from mdschema.modules.render_module.markdown_renderer import render_markdown, render_property
from mdschema.modules.render_module.sql_renderer import (
    render_create_table,
    render_insert,
    render_sql,
    render_value,
)
from mdschema.modules.schema_generator_module.markdown_parser import parse_markdown
from mdschema.modules.schema_generator_module.records import Table
from mdschema.modules.schema_generator_module.schema_synthesizer import build_schema


def _schema(text, id_factory=None, unique_depth=0):
    return build_schema(parse_markdown(text), unique_depth, id_factory)[0]


# SQL

@pytest.mark.parametrize("value, expected", [
    (None, "NULL"),
    (True, "1"),
    (False, "0"),
    (42, "42"),
    (2.5, "2.5"),
    ("17", "17"),
    ("221b", "'221b'"),
    ("O'Neil", "'O''Neil'"),
])
def test_render_value(value, expected):
    assert render_value(value) == expected


def test_render_create_table(building_md, sequential_ids):
    buildings = _schema(building_md, sequential_ids)["building"]
    assert render_create_table(buildings) == (
        "CREATE TABLE IF NOT EXISTS `buildings` (\n"
        "    `building_uuid` TEXT,\n"
        "    `building_house_number` TEXT,\n"
        "\n"
        "    PRIMARY KEY (`building_uuid`)\n"
        ");"
    )


def test_render_create_table_with_foreign_key(building_md, sequential_ids):
    occupants = _schema(building_md, sequential_ids)["occupant"]
    statement = render_create_table(occupants)
    assert "PRIMARY KEY (`occupant_building_uuid`, `occupant_uuid`)" in statement
    assert "FOREIGN KEY (`occupant_building_uuid`) REFERENCES `buildings` (`building_uuid`)" in statement


def test_render_insert(building_md, sequential_ids):
    buildings = _schema(building_md, sequential_ids)["building"]
    assert render_insert(buildings) == (
        "INSERT INTO `buildings`\n"
        "    (`building_uuid`, `building_house_number`) VALUES\n"
        "    ('id-1', '221b');"
    )


def test_render_sql_statement_order(building_md, sequential_ids):
    script = render_sql(_schema(building_md, sequential_ids))
    statements = script.split("\n\n")

    assert statements[0] == "DROP TABLE IF EXISTS `occupants`;"
    assert statements[1] == "DROP TABLE IF EXISTS `buildings`;"
    assert script.index("CREATE TABLE IF NOT EXISTS `buildings`") < script.index("CREATE TABLE IF NOT EXISTS `occupants`")
    assert script.index("CREATE TABLE IF NOT EXISTS `occupants`") < script.index("INSERT INTO `buildings`")


def test_render_sql_skips_insert_for_empty_tables():
    script = render_sql({"thing": Table(type="thing", name="things")})
    assert "INSERT" not in script


def test_sql_script_runs_in_sqlite(crew_md, episodes_md):
    for text in (crew_md, episodes_md):
        script = render_sql(_schema(text))
        connection = sqlite3.connect(":memory:")
        try:
            connection.executescript(script)
            # Running twice must work thanks to the DROP statements
            connection.executescript(script)
        finally:
            connection.close()


def test_sql_rows_resolve_references(crew_md):
    script = render_sql(_schema(crew_md))
    connection = sqlite3.connect(":memory:")
    try:
        connection.executescript(script)
        rows = connection.execute(
            "SELECT p.person_age FROM ships s "
            "JOIN persons p ON p.person_uuid = s.ship_pilot_person_uuid"
        ).fetchall()
    finally:
        connection.close()
    assert rows == [(29,)]


# Declarations

def test_container_name():
    assert container_name(Table(type="space_ship", name="space_ships")) == "SpaceShip"
    assert container_name(Table(type="3d_model", name="3d_models")) == "_3dModel"
    assert container_name(Table(type="none", name="nones")) == "_None"
    assert container_name(Table(type="true", name="trues")) == "_True"


def test_render_typescript(building_md):
    source = render_typescript(_schema(building_md))

    assert source.startswith("class MDSchemaRecord<Properties> {")
    assert "export namespace Building {" in source
    assert "        building_uuid: string;" in source
    assert "        building_house_number?: string;" in source
    assert "export namespace Occupant {" in source
    assert "        occupant_building_uuid: string;" in source
    assert source.count("export class Instance extends MDSchemaRecord<Object> {}") == 2


def test_render_typescript_maps_column_types(episodes_md):
    source = render_typescript(_schema(episodes_md))
    assert "episode_runtime?: number;" in source
    assert "episode_aired?: boolean;" in source


def test_render_python_is_importable(building_md, episodes_md):
    source = render_python(_schema(building_md))
    namespace = {}
    exec(compile(source, "<generated>", "exec"), namespace)

    occupant = namespace["Occupant"](occupant_building_uuid="b", occupant_uuid="o")
    assert occupant.occupant_forename is None
    assert "occupant_building_uuid: str\n" in source

    source = render_python(_schema(episodes_md))
    assert "episode_aired: Optional[bool] = None" in source


# Markdown

def test_render_property_restores_marker_case():
    assert render_property("pilot", "{bob smith}") == "-   Pilot: {Bob Smith}"
    assert render_property("house number", "221b") == "-   House Number: 221b"


def test_render_markdown_layout():
    text = render_markdown(parse_markdown(
        "# voyager (ship)\n- captain: {alice}\n- class: intrepid\n## bridge (deck)\n"
    ))
    assert text == (
        "# Voyager (ship)\n"
        "\n"
        "-   Captain: {Alice}\n"
        "-   Class: intrepid\n"
        "\n"
        "## Bridge (deck)\n"
    )


def test_markdown_round_trip(building_md, crew_md):
    for text in (building_md, crew_md):
        records = parse_markdown(text)
        rendered = render_markdown(records)
        assert parse_markdown(rendered) == records
        assert render_markdown(parse_markdown(rendered)) == rendered


# JSON

def test_json_round_trip(building_md):
    records = parse_markdown(building_md)
    text = records_to_json(records, indent=2)

    data = json.loads(text)
    assert data[0]["name"] == "221b baker street"
    assert data[0]["children"][0]["properties"] == {"forename": "Sherlock", "surname": "Holmes"}
    assert "parent" not in data[0]["children"][0]

    assert records_from_json(text) == records


def test_json_defaults_for_missing_children_and_properties():
    records = records_from_data([{"depth": 1, "name": "a", "type": "t"}])
    assert records[0].children == []
    assert records[0].properties == {}


def test_invalid_json_raises():
    with pytest.raises(JSONParsingException):
        records_from_json("[{", "broken.json")


@pytest.mark.parametrize("data", [
    {"depth": 1, "name": "a", "type": "t"},
    [{"depth": 0, "name": "a", "type": "t"}],
    [{"depth": 1, "name": " ", "type": "t"}],
    [{"depth": 1, "name": "a"}],
    [{"depth": 1, "name": "a", "type": "t", "children": [{"depth": 2, "name": "b"}]}],
    [{"depth": 2, "name": "a", "type": "t"}],
    [{"depth": 3, "name": "a", "type": "t", "children": [{"depth": 1, "name": "b", "type": "t"}]}],
    [{"depth": 1, "name": "a", "type": "t", "children": [{"depth": 1, "name": "b", "type": "t"}]}],
    [{"depth": 1, "name": "a", "type": "t", "children": [
        {"depth": 3, "name": "b", "type": "t", "children": [{"depth": 2, "name": "c", "type": "t"}]},
    ]}],
])
def test_invalid_structure_raises(data):
    with pytest.raises(DocumentStructureException):
        records_from_data(data, "doc.json")


def test_json_children_may_skip_depths():
    records = records_from_data([
        {"depth": 1, "name": "a", "type": "t", "children": [{"depth": 3, "name": "b", "type": "t"}]},
    ])
    assert records[0].children[0].depth == 3


def test_render_python_compiles_keyword_types():
    source = render_python(_schema("# X (none)\n- Flag: yes\n# Y (false)\n"))
    namespace = {}
    exec(compile(source, "<generated>", "exec"), namespace)

    assert "class _None:" in source
    assert namespace["_False"](false_uuid="y").false_uuid == "y"
