# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `FlagAction`, an enum used to standardize how a flag stores the values
it receives on the command line.

Each member maps to a familiar `argparse`-like action. Boolean and counting
actions carry a "no-value default": the text a flag is set to when it appears
without a value (`--verbose` rather than `--verbose=true`). Flags with a
no-value default never consume the following token as their value, which is
what lets the argument splitter tell flag values apart from sub-command names.

Exports:
    - FlagAction: Enum of allowed actions for flags.

Example:
    FlagAction("store_true") → FlagAction.STORE_TRUE
    FlagAction("true")       → FlagAction.STORE_TRUE (via alias)
"""
from __future__ import annotations

from enum import Enum


class FlagAction(Enum):
    """
    Defines the action to be taken when a flag is encountered.

    Members:
        STORE: Store the provided value (default).
        STORE_TRUE: Boolean flag, `True` when present.
        STORE_FALSE: Boolean flag, `False` when present.
        APPEND: Append each occurrence's value to a list.
        EXTEND: Extend a list with comma-separated values.
        COUNT: Count the number of occurrences.

    Aliases:
        - "true" → "store_true"
        - "false" → "store_false"
        - "bool" → "store_true"
    """

    STORE = "store"
    STORE_TRUE = "store_true"
    STORE_FALSE = "store_false"
    APPEND = "append"
    EXTEND = "extend"
    COUNT = "count"

    @classmethod
    def choices(cls) -> list[FlagAction]:
        """Return a list of all flag actions."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "true": "store_true",
            "false": "store_false",
            "bool": "store_true",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> FlagAction:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def no_opt_default(self) -> str | None:
        """The value used when the flag appears without one, if any."""
        return {
            FlagAction.STORE_TRUE: "true",
            FlagAction.STORE_FALSE: "false",
            FlagAction.COUNT: "+1",
        }.get(self)

    @property
    def collects(self) -> bool:
        """Whether the flag's value is a list built up across occurrences."""
        return self in (FlagAction.APPEND, FlagAction.EXTEND)

    def __str__(self) -> str:
        """Return the string representation of the flag action."""
        return self.value
