import itertools

import pytest

from mdschema.constants import ColumnType
from mdschema.modules.schema_generator_module.type_inference import (
    convert_value,
    infer_column_type,
    is_integral,
    is_numeric,
)


@pytest.mark.parametrize("value", ["0", "-12", "+3.5", ".5", "1e3", "2.", "6.02E23"])
def test_is_numeric_accepts_decimal_numbers(value):
    assert is_numeric(value)


@pytest.mark.parametrize("value", ["", "221b", "0x1f", "inf", "nan", " 1", "1 ", "1e999", "1,000"])
def test_is_numeric_rejects_partial_and_non_finite(value):
    assert not is_numeric(value)


def test_is_integral():
    assert is_integral("3")
    assert is_integral("3.0")
    assert is_integral("1e3")
    assert not is_integral("3.5")
    assert not is_integral("123456789012345678901234.5")
    assert not is_integral("abc")


@pytest.mark.parametrize("values, expected", [
    (["0", "1", "1"], ColumnType.BOOLEAN),
    (["1"], ColumnType.INTEGER),
    (["0", "1", "2"], ColumnType.INTEGER),
    (["3", "4.0"], ColumnType.INTEGER),
    (["3", "4.5"], ColumnType.REAL),
    (["3", "four"], ColumnType.TEXT),
    (["221b"], ColumnType.TEXT),
    ([], ColumnType.TEXT),
])
def test_infer_column_type(values, expected):
    assert infer_column_type(values) is expected


def test_inference_ignores_value_order():
    samples = ["1", "0", "2.5", "7"]
    results = {infer_column_type(order) for order in itertools.permutations(samples)}
    assert results == {ColumnType.REAL}

    samples = ["1", "0", "x"]
    results = {infer_column_type(order) for order in itertools.permutations(samples)}
    assert results == {ColumnType.TEXT}


def test_convert_value():
    assert convert_value("1", ColumnType.BOOLEAN) is True
    assert convert_value("0", ColumnType.BOOLEAN) is False
    assert convert_value("42", ColumnType.INTEGER) == 42
    assert convert_value("4.0", ColumnType.INTEGER) == 4
    assert convert_value("1e3", ColumnType.INTEGER) == 1000
    assert convert_value("123456789012345678901234.0", ColumnType.INTEGER) == 123456789012345678901234
    assert convert_value("2.5", ColumnType.REAL) == 2.5
    assert convert_value("221b", ColumnType.TEXT) == "221b"


def test_convert_empty_values_to_none():
    assert convert_value("", ColumnType.INTEGER) is None
    assert convert_value(None, ColumnType.TEXT) is None
