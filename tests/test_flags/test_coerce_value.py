from datetime import datetime
from enum import Enum
from typing import Literal, Union

import pytest

from cmdtree.flags.utils import coerce_bool, coerce_value, type_name


class Mode(Enum):
    DEV = "dev"
    PROD = "prod"


class Level(Enum):
    LOW = 0
    HIGH = 1


@pytest.mark.parametrize(
    "value, target_type, expected",
    [
        ("42", int, 42),
        ("3.14", float, 3.14),
        ("True", bool, True),
        ("off", bool, False),
        ("hello", str, "hello"),
        ("", str, ""),
    ],
)
def test_coerce_value_basic(value, target_type, expected):
    assert coerce_value(value, target_type) == expected


def test_coerce_bool_is_strict():
    assert coerce_bool("yes") is True
    assert coerce_bool("0") is False
    with pytest.raises(ValueError):
        coerce_bool("maybe")


def test_coerce_value_unions():
    assert coerce_value("42", int | float) == 42
    assert coerce_value("3.14", int | float) == 3.14
    assert coerce_value("abc", Union[int, str]) == "abc"
    assert coerce_value("", int | str) == ""
    with pytest.raises(ValueError) as excinfo:
        coerce_value("abc", int | float)
    assert "could not be coerced" in str(excinfo.value)


def test_coerce_value_enums():
    assert coerce_value("dev", Mode) == Mode.DEV
    assert coerce_value("PROD", Mode) == Mode.PROD
    assert coerce_value("1", Level) == Level.HIGH
    assert coerce_value("LOW", Level) == Level.LOW
    with pytest.raises(ValueError):
        coerce_value("staging", Mode)
    with pytest.raises(ValueError):
        coerce_value("3", Level)


def test_coerce_value_literal():
    assert coerce_value("dev", Literal["dev", "prod"]) == "dev"
    with pytest.raises(ValueError):
        coerce_value("staging", Literal["dev", "prod"])


def test_coerce_value_datetime():
    value = coerce_value("2025-03-04 12:30", datetime)
    assert value == datetime(2025, 3, 4, 12, 30)
    with pytest.raises(ValueError):
        coerce_value("not a date", datetime)


def test_type_name():
    assert type_name(str) == "string"
    assert type_name(int) == "int"
    assert type_name(Mode) == "mode"
    assert type_name(int | str) == "value"
