"""
cmdtree CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .flag import Flag
from .flag_action import FlagAction
from .flag_set import FlagSet, NormalizeFn, ParseErrorsAllowlist
from .utils import coerce_bool, coerce_enum, coerce_value

__all__ = [
    "Flag",
    "FlagAction",
    "FlagSet",
    "NormalizeFn",
    "ParseErrorsAllowlist",
    "coerce_bool",
    "coerce_enum",
    "coerce_value",
]
