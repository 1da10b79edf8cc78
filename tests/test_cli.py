import json

import pytest

from mdschema.main_entry_points import convert_document


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_converts_to_output_file(tmp_path, building_md):
    source = _write(tmp_path / "building.md", building_md)
    target = tmp_path / "building.sql"

    convert_document.main([source, "--output", str(target)])

    script = target.read_text(encoding="utf-8")
    assert "CREATE TABLE IF NOT EXISTS `occupants`" in script


def test_prints_format_to_stdout(tmp_path, capsys, crew_md):
    source = _write(tmp_path / "crew.md", crew_md)

    convert_document.main([source, "--format", "json"])

    data = json.loads(capsys.readouterr().out)
    assert [node["name"] for node in data] == ["alice", "bob", "voyager"]


def test_unique_depth_option(tmp_path, capsys, episodes_md):
    source = _write(tmp_path / "episodes.md", episodes_md)

    convert_document.main([source, "--format", "sql", "--unique-depth", "1"])

    out = capsys.readouterr().out
    insert = out[out.index("INSERT INTO `episodes`"):]
    assert insert.count("\n    ('") == 2


def test_requires_output_or_format(tmp_path, crew_md):
    source = _write(tmp_path / "crew.md", crew_md)
    with pytest.raises(SystemExit) as excinfo:
        convert_document.main([source])
    assert excinfo.value.code == 2


def test_missing_input_exits(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        convert_document.main([str(tmp_path / "nope.md"), "--format", "md"])
    assert excinfo.value.code == 2


def test_conversion_error_exits_with_one(tmp_path):
    source = _write(tmp_path / "ship.md", "# Voyager (ship)\n- Pilot: {Pilot}\n")
    with pytest.raises(SystemExit) as excinfo:
        convert_document.main([source, "--format", "sql"])
    assert excinfo.value.code == 1


def test_unsupported_output_exits_with_one(tmp_path, crew_md):
    source = _write(tmp_path / "crew.md", crew_md)
    with pytest.raises(SystemExit) as excinfo:
        convert_document.main([source, "--output", str(tmp_path / "crew.xml")])
    assert excinfo.value.code == 1
