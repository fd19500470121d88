# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Flag` dataclass used by `FlagSet` to represent a single named
command-line option.

A `Flag` describes one option (its long name, optional one-letter shorthand,
action, value type, default and help text) and also holds the parse state of
the current invocation: the current `value` and whether the user `changed` it.
Flag instances are shared between every `FlagSet` they are merged into, so a
value parsed through a command's merged set is visible through the ancestor
set that declared it.

Key Attributes:
- `name`: Long name, used as `--name`
- `shorthand`: Optional single letter, used as `-n`
- `action`: `FlagAction` describing how values are stored
- `type`: Type coercion target for raw strings
- `no_opt_default`: Value used when the flag appears without one
- `annotations`: Opaque `str -> list[str]` metadata (see `cmdtree.annotations`)
"""
from __future__ import annotations

from copy import copy
from dataclasses import dataclass, field
from typing import Any

from cmdtree.annotations import BASH_COMP_ONE_REQUIRED_FLAG
from cmdtree.flags.flag_action import FlagAction
from cmdtree.flags.utils import coerce_bool, coerce_value, type_name


@dataclass(eq=False)
class Flag:
    """
    Represents a command-line flag and its parse state.

    Attributes:
        name (str): Long name of the flag, without dashes.
        shorthand (str): One-letter alias, without the dash. Empty for none.
        usage (str): Help text for the flag.
        action (FlagAction): How occurrences are stored.
        type (Any): Type (or callable) raw strings are coerced to.
        default (Any): Value before any occurrence is parsed.
        choices (list[Any] | None): Allowed values, if restricted.
        no_opt_default (str | None): Value used when given without one.
        hidden (bool): Hide the flag from usage output.
        deprecated (str): If set, a notice printed when the flag is used.
        shorthand_deprecated (str): Same, for use through the shorthand only.
        annotations (dict[str, list[str]]): Opaque string-keyed metadata.
        value (Any): Current value.
        changed (bool): Whether the user set the flag in this invocation.
    """

    name: str
    shorthand: str = ""
    usage: str = ""
    action: FlagAction = FlagAction.STORE
    type: Any = str
    default: Any = None
    choices: list[Any] | None = None
    no_opt_default: str | None = None
    hidden: bool = False
    deprecated: str = ""
    shorthand_deprecated: str = ""
    annotations: dict[str, list[str]] = field(default_factory=dict)
    value: Any = field(default=None, init=False)
    changed: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.action = FlagAction(self.action)
        if self.no_opt_default is None:
            self.no_opt_default = self.action.no_opt_default
        if self.default is None:
            self.default = self._implicit_default()
        self.value = copy(self.default)

    def _implicit_default(self) -> Any:
        if self.action == FlagAction.STORE_TRUE:
            return False
        if self.action == FlagAction.STORE_FALSE:
            return True
        if self.action == FlagAction.COUNT:
            return 0
        if self.action.collects:
            return []
        return None

    @property
    def has_no_opt_default(self) -> bool:
        """Whether the flag can appear without a value."""
        return bool(self.no_opt_default)

    @property
    def required(self) -> bool:
        """Whether the flag carries the one-required annotation."""
        marker = self.annotations.get(BASH_COMP_ONE_REQUIRED_FLAG)
        return bool(marker) and marker[0] == "true"

    def _coerce(self, raw: str) -> Any:
        value = coerce_value(raw, self.type)
        if self.choices and value not in self.choices:
            choices = ", ".join(str(choice) for choice in self.choices)
            raise ValueError(f"'{raw}' is not one of {{{choices}}}")
        return value

    def set(self, raw: str) -> None:
        """
        Apply one occurrence of the flag.

        Raises:
            ValueError: If the raw value cannot be coerced.
        """
        if self.action in (FlagAction.STORE_TRUE, FlagAction.STORE_FALSE):
            self.value = coerce_bool(raw)
        elif self.action == FlagAction.COUNT:
            if raw == "+1":
                self.value = (self.value or 0) + 1
            else:
                self.value = int(raw)
        elif self.action == FlagAction.APPEND:
            item = self._coerce(raw)
            self.value = [*self.value, item] if self.changed else [item]
        elif self.action == FlagAction.EXTEND:
            items = [self._coerce(part.strip()) for part in raw.split(",") if part.strip()]
            self.value = [*self.value, *items] if self.changed else items
        else:
            self.value = self._coerce(raw)
        self.changed = True

    def reset(self) -> None:
        """Restore the default value and clear the changed marker."""
        self.value = copy(self.default)
        self.changed = False

    def type_text(self) -> str:
        """Value placeholder shown in usage output."""
        if self.action in (FlagAction.STORE_TRUE, FlagAction.STORE_FALSE):
            return ""
        if self.action == FlagAction.COUNT:
            return ""
        name = type_name(self.type)
        return f"{name}s" if self.action.collects else name

    def default_text(self) -> str:
        """Default value as shown in usage output, or an empty string."""
        if self.action in (FlagAction.STORE_TRUE, FlagAction.COUNT):
            return ""
        if self.default in (None, "", []):
            return ""
        if isinstance(self.default, str):
            return f'"{self.default}"'
        if isinstance(self.default, list):
            return "[" + ",".join(str(item) for item in self.default) + "]"
        return str(self.default)

    def __str__(self) -> str:
        shorthand = f"-{self.shorthand}, " if self.shorthand else ""
        return f"Flag({shorthand}--{self.name}, action={self.action}, value={self.value!r})"
