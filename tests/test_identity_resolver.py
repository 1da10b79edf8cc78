import pytest

from mdschema.exceptions import ReferenceException
from mdschema.modules.schema_generator_module.flattener import flatten
from mdschema.modules.schema_generator_module.identity_resolver import (
    generate_uuid,
    identity_key,
    resolve_identities,
)
from mdschema.modules.schema_generator_module.markdown_parser import parse_markdown
from mdschema.modules.schema_generator_module.records import Record


def test_identity_key_respects_unique_depth():
    record = Record(depth=1, name="episode 1", type="episode")
    assert identity_key(record, 4, unique_depth=0) == "episode 1"
    assert identity_key(record, 4, unique_depth=1) == ("episode 1", 4)


def test_generate_uuid_is_version_4():
    value = generate_uuid()
    assert len(value) == 36
    assert value[14] == "4"
    assert value != generate_uuid()


def test_same_name_merges_with_later_values_winning(episodes_md, sequential_ids):
    flat = flatten(parse_markdown(episodes_md))
    identities = resolve_identities(flat, 0, sequential_ids)

    assert identities.keys == ["episode 1", "episode 1"]
    assert identities.id_of(0) == identities.id_of(1) == "id-1"
    assert identities.records_for("episode 1") == [0, 1]

    expected = {"title": "Pilot", "runtime": "45", "aired": "1"}
    assert flat.records[0].properties == expected
    assert flat.records[1].properties == expected
    assert flat.records[0].properties is not flat.records[1].properties


def test_unique_depth_keeps_records_distinct(episodes_md, sequential_ids):
    flat = flatten(parse_markdown(episodes_md))
    identities = resolve_identities(flat, 1, sequential_ids)

    assert identities.keys == [("episode 1", 0), ("episode 1", 1)]
    assert identities.key_of(1) == ("episode 1", 1)
    assert identities.id_of(0) == "id-1"
    assert identities.id_of(1) == "id-2"
    assert flat.records[0].properties == {"title": "Pilot", "runtime": "42"}


def test_merge_spans_depths_and_parents(sequential_ids):
    flat = flatten(parse_markdown(
        "# Ship (ship)\n"
        "## Alice (person)\n"
        "- Age: 30\n"
        "# Station (station)\n"
        "## Alice (person)\n"
        "- Rank: captain\n"
    ))
    identities = resolve_identities(flat, 0, sequential_ids)

    assert identities.id_of(1) == identities.id_of(3)
    assert flat.records[1].properties == {"age": "30", "rank": "captain"}


def test_resolve_returns_first_member_and_id(crew_md, sequential_ids):
    flat = flatten(parse_markdown(crew_md))
    identities = resolve_identities(flat, 0, sequential_ids)

    record, identifier = identities.resolve("bob", flat)
    assert record.type == "person"
    assert identifier == "id-2"


def test_resolve_unknown_identity_raises(crew_md):
    flat = flatten(parse_markdown(crew_md))
    identities = resolve_identities(flat)

    with pytest.raises(ReferenceException) as excinfo:
        identities.resolve("pilot", flat)
    assert excinfo.value.identity == "pilot"
    assert 'Unable to find reference "pilot"' in str(excinfo.value)


def test_unique_records_cannot_be_referenced(crew_md):
    flat = flatten(parse_markdown(crew_md))
    identities = resolve_identities(flat, unique_depth=1)

    with pytest.raises(ReferenceException):
        identities.resolve("alice", flat)


def test_unique_keys_do_not_collide_with_plain_names(sequential_ids):
    flat = flatten(parse_markdown(
        "# A (a)\n"
        "- X: 1\n"
        "## A_0 (b)\n"
        "- Y: 2\n"
    ))
    identities = resolve_identities(flat, 1, sequential_ids)

    assert identities.keys == [("a", 0), "a_0"]
    assert identities.id_of(0) == "id-1"
    assert identities.id_of(1) == "id-2"
    assert flat.records[0].properties == {"x": "1"}
    assert flat.records[1].properties == {"y": "2"}


def test_name_shaped_like_unique_key_is_not_a_reference():
    flat = flatten(parse_markdown("# A (a)\n# Ref (r)\n"))
    identities = resolve_identities(flat, unique_depth=1)

    with pytest.raises(ReferenceException):
        identities.resolve("a_0", flat)
