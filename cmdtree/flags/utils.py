# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains value coercion utilities for cmdtree flag parsing.

This module converts the raw strings found on a command line into the Python
types flags are declared with, including `Enum`, `bool`, `datetime`, `Literal`
and unions of those.

Functions:
- coerce_bool: Convert a string to a boolean.
- coerce_enum: Convert a string or raw value to an Enum instance.
- coerce_value: General-purpose coercion to a target type.
- type_name: Short, help-friendly name for a flag's value type.
"""
import types
from datetime import datetime
from enum import EnumMeta
from typing import Any, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser

TRUE_STRINGS = frozenset({"true", "t", "1", "yes", "y", "on"})
FALSE_STRINGS = frozenset({"false", "f", "0", "no", "n", "off"})


def coerce_bool(value: Any) -> bool:
    """
    Convert a string to a boolean.

    Accepts the usual truthy and falsy spellings ('true', 'yes', '0', 'off', ...).
    Anything else is rejected rather than guessed at.

    Raises:
        ValueError: If the value is not a recognised boolean spelling.
    """
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in TRUE_STRINGS:
        return True
    if normalized in FALSE_STRINGS:
        return False
    raise ValueError(f"'{value}' is not a valid boolean")


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Convert a raw value or string to an Enum instance.

    Tries to resolve by name, then by value coerced to the members' base type.

    Raises:
        ValueError: If the value cannot be resolved to a valid Enum member.
    """
    if isinstance(value, enum_type):
        return value

    if isinstance(value, str):
        try:
            return enum_type[value]
        except KeyError:
            pass

    base_type = type(next(iter(enum_type)).value)
    try:
        coerced_value = base_type(value)
        return enum_type(coerced_value)
    except (ValueError, TypeError):
        values = [str(enum.value) for enum in enum_type]
        raise ValueError(f"'{value}' should be one of {{{', '.join(values)}}}") from None


def coerce_value(value: Any, target_type: Any) -> Any:
    """
    Attempt to convert a string to the given target type.

    Handles Union, Literal, Enum, bool and datetime; any other callable type is
    simply applied to the value.

    Raises:
        ValueError: If conversion fails or the value is invalid.
    """
    origin = get_origin(target_type)
    args = get_args(target_type)

    if origin is Literal:
        if value not in args:
            raise ValueError(
                f"Value '{value}' is not a valid literal for type {target_type}"
            )
        return value

    if isinstance(target_type, types.UnionType) or origin is Union:
        for arg in args:
            try:
                return coerce_value(value, arg)
            except (ValueError, TypeError):
                continue
        raise ValueError(f"Value '{value}' could not be coerced to any of {args}")

    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)

    if target_type is bool:
        return coerce_bool(value)

    if target_type is datetime:
        if isinstance(value, datetime):
            return value
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as error:
            raise ValueError(f"Value '{value}' could not be parsed as a datetime") from error

    return target_type(value)


def type_name(target_type: Any) -> str:
    """Return the name shown for a value type in usage text."""
    if target_type is str:
        return "string"
    if isinstance(target_type, type):
        return target_type.__name__.lower()
    return "value"
