# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for cmdtree command trees.

A config file (YAML or TOML) describes the root command; every command entry
may nest further `commands`, or point at another config file with `config`
whose root becomes the entry's command. Hooks are import paths resolved with
`cmdtree.importer.resolve_hook`.

Example (YAML):
    use: app
    short: Example application
    flags:
      - name: verbose
        shorthand: v
        action: store_true
        persistent: true
    commands:
      - use: build TARGET
        aliases: [b]
        run: my_app.hooks:build
        args: exact_args:1
        flags:
          - name: output
            shorthand: o
            default: dist
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from cmdtree import args as positional
from cmdtree.command import Command
from cmdtree.defaults import DefaultFlagRegistry
from cmdtree.flags import FlagAction
from cmdtree.importer import resolve_hook
from cmdtree.lifecycle import LifecycleEvent
from cmdtree.logger import logger

MAX_CONFIG_DEPTH = 5

TYPE_NAMES: dict[str, type] = {
    "str": str,
    "string": str,
    "int": int,
    "float": float,
    "bool": bool,
    "datetime": datetime,
}

FIXED_VALIDATORS = {
    "no_args": positional.no_args,
    "arbitrary_args": positional.arbitrary_args,
    "only_valid_args": positional.only_valid_args,
}

COUNTED_VALIDATORS = {
    "minimum_n_args": positional.minimum_n_args,
    "maximum_n_args": positional.maximum_n_args,
    "exact_args": positional.exact_args,
}


class RawFlag(BaseModel):
    """Raw flag model for cmdtree configuration."""

    name: str
    shorthand: str = ""
    action: FlagAction = FlagAction.STORE
    type: str = "str"
    default: Any = None
    usage: str = ""
    choices: list[Any] | None = None
    required: bool = False
    persistent: bool = False
    hidden: bool = False
    deprecated: str = ""

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        if value not in TYPE_NAMES:
            valid = ", ".join(TYPE_NAMES)
            raise ValueError(f"Unknown flag type '{value}'. Must be one of: {valid}")
        return value

    @field_validator("shorthand")
    @classmethod
    def validate_shorthand(cls, value: str) -> str:
        if len(value) > 1:
            raise ValueError("shorthand must be a single character")
        return value

    def flag_strings(self) -> list[str]:
        strings = [f"--{self.name}"]
        if self.shorthand:
            strings.append(f"-{self.shorthand}")
        return strings


class RawCommand(BaseModel):
    """Raw command model for cmdtree configuration."""

    use: str = ""
    config: str | None = None
    aliases: list[str] = Field(default_factory=list)
    suggest_for: list[str] = Field(default_factory=list)
    short: str = ""
    long: str = ""
    example: str = ""
    version: str = ""
    deprecated: str = ""
    hidden: bool = False
    silence_errors: bool = False
    silence_usage: bool = False
    traverse_children: bool = False
    disable_flag_parsing: bool = False
    valid_args: list[str] = Field(default_factory=list)
    args: str | None = None

    global_pre_run: str | None = None
    pre_run: str | None = None
    run: str | None = None
    post_run: str | None = None
    global_post_run: str | None = None

    flags: list[RawFlag] = Field(default_factory=list)
    commands: list[RawCommand] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_use_or_config(self) -> RawCommand:
        if not self.use and not self.config:
            raise ValueError("Each command needs either 'use' or 'config'.")
        return self


def resolve_args_validator(form: str) -> positional.PositionalArgs:
    """
    Build a positional-arguments validator from its config form:
    `no_args`, `arbitrary_args`, `only_valid_args`, `minimum_n_args:N`,
    `maximum_n_args:N`, `exact_args:N` or `range_args:LOW:HIGH`.

    Raises:
        ValueError: If the form is unknown or its counts are not integers.
    """
    name, *counts = form.split(":")
    if name in FIXED_VALIDATORS and not counts:
        return FIXED_VALIDATORS[name]
    try:
        numbers = [int(count) for count in counts]
    except ValueError as error:
        raise ValueError(f"Invalid argument counts in '{form}'") from error
    if name in COUNTED_VALIDATORS and len(numbers) == 1:
        return COUNTED_VALIDATORS[name](numbers[0])
    if name == "range_args" and len(numbers) == 2:
        return positional.range_args(*numbers)
    raise ValueError(f"Unknown args validator: '{form}'")


def _add_flags(command: Command, raw_flags: list[RawFlag]) -> None:
    for raw_flag in raw_flags:
        target = command.persistent_flags() if raw_flag.persistent else command.local_flags()
        target.add_flag(
            *raw_flag.flag_strings(),
            action=raw_flag.action,
            type=TYPE_NAMES[raw_flag.type],
            default=raw_flag.default,
            usage=raw_flag.usage,
            choices=raw_flag.choices,
            required=raw_flag.required,
            hidden=raw_flag.hidden,
            deprecated=raw_flag.deprecated,
        )


def convert_command(
    raw_command: RawCommand, *, parent_path: Path | None = None, depth: int = 0
) -> Command:
    """Build a command, its flags and its sub-commands from a raw entry."""
    if raw_command.config:
        config_path = Path(raw_command.config)
        if parent_path and not config_path.is_absolute():
            config_path = (parent_path.parent / config_path).resolve()
        return loader(config_path, _depth=depth + 1)

    hooks = {
        event.value: resolve_hook(path)
        for event in LifecycleEvent
        if (path := getattr(raw_command, event.value))
    }
    command = Command(
        **raw_command.model_dump(
            exclude={"config", "args", "flags", "commands", *hooks},
            exclude_none=True,
        ),
        **hooks,
    )
    if raw_command.args:
        command.args = resolve_args_validator(raw_command.args)
    _add_flags(command, raw_command.flags)
    for raw_child in raw_command.commands:
        command.add_command(
            convert_command(raw_child, parent_path=parent_path, depth=depth)
        )
    return command


def loader(
    file_path: Path | str,
    default_flags: DefaultFlagRegistry | None = None,
    _depth: int = 0,
) -> Command:
    """
    Load a command tree from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the config file.
        default_flags (DefaultFlagRegistry | None): Registry handed to the
            loaded root. Ignored for files included through `config`.

    Returns:
        Command: The root command described by the file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the format is unsupported, the content is not a
            command mapping, or includes nest too deeply.
        pydantic.ValidationError: If an entry does not match the schema.
    """
    if _depth > MAX_CONFIG_DEPTH:
        raise ValueError(f"Maximum config depth exceeded ({MAX_CONFIG_DEPTH} levels deep)")

    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(config_file)
        elif suffix == ".toml":
            raw_config = toml.load(config_file)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    if not isinstance(raw_config, dict):
        raise ValueError(
            "Configuration file must contain a command mapping.\n"
            "Example:\n"
            "use: app\n"
            "commands:\n"
            "  - use: build\n"
            "    run: my_module:build"
        )

    logger.debug("[config] Loading command tree from %s", path)
    root = convert_command(RawCommand(**raw_config), parent_path=path, depth=_depth)
    if default_flags is not None and _depth == 0:
        root.default_flags = default_flags
    return root
