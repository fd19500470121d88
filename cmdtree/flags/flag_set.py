# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `FlagSet`, the named collection of flags that every
collection of a command's `FlagScope` is made of, and the parser that applies
command-line arguments to it.

Key Features:
- Declarative registration via `add_flag("--output", "-o", ...)`
- Long (`--name`, `--name=value`, `--name value`) and short (`-n`, `-n value`,
  `-n=value`, `-nvalue`) forms, POSIX bundling of boolean shorthands (`-abc`)
- Interspersed positional arguments, terminated by `--`
- Unknown flags can be tolerated through a `ParseErrorsAllowlist`
- Optional name normalization applied on registration and lookup
- Deprecation notices written to the set's `output`

Merging sets with `add_flag_set()` shares `Flag` instances rather than
copying them, and keeps the first definition of any name.

Example Usage:
    flags = FlagSet("deploy")
    flags.add_flag("--env", "-e", choices=["prod", "dev"], required=True)
    flags.add_flag("--verbose", "-v", action="store_true")
    flags.parse(["-v", "--env", "prod", "api"])

    # flags.get("env") == "prod", flags.args() == ["api"]
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Callable, Iterable, TextIO

from cmdtree.annotations import BASH_COMP_ONE_REQUIRED_FLAG
from cmdtree.exceptions import FlagDefinitionError, FlagParseError
from cmdtree.flags.flag import Flag
from cmdtree.flags.flag_action import FlagAction
from cmdtree.flags.utils import coerce_value

NormalizeFn = Callable[["FlagSet", str], str]


@dataclass
class ParseErrorsAllowlist:
    """Parse errors that should be ignored instead of raised."""

    unknown_flags: bool = False


class FlagSet:
    """
    A named set of flags and the parser for them.

    Attributes:
        name (str): Name used in error messages.
        sort_flags (bool): Visit flags sorted by name rather than in insertion order.
        allowlist (ParseErrorsAllowlist): Parse errors to ignore.
    """

    def __init__(
        self,
        name: str = "",
        *,
        output: TextIO | None = None,
        normalize_fn: NormalizeFn | None = None,
        sort_flags: bool = True,
    ) -> None:
        self.name: str = name
        self.sort_flags: bool = sort_flags
        self.allowlist: ParseErrorsAllowlist = ParseErrorsAllowlist()
        self._output: TextIO | None = output
        self._normalize_fn: NormalizeFn | None = normalize_fn
        self._formal: dict[str, Flag] = {}
        self._shorthands: dict[str, Flag] = {}
        self._actual: dict[str, Flag] = {}
        self._args: list[str] = []
        self._parsed: bool = False

    @property
    def output(self) -> TextIO:
        """Destination for deprecation notices; standard error by default."""
        return self._output if self._output is not None else sys.stderr

    @output.setter
    def output(self, output: TextIO | None) -> None:
        self._output = output

    @property
    def normalize_fn(self) -> NormalizeFn | None:
        return self._normalize_fn

    @normalize_fn.setter
    def normalize_fn(self, normalize_fn: NormalizeFn | None) -> None:
        """Set the normalization function and re-key the flags already registered."""
        self._normalize_fn = normalize_fn
        self._formal = {self.normalize(flag.name): flag for flag in self._formal.values()}
        self._actual = {self.normalize(flag.name): flag for flag in self._actual.values()}

    def normalize(self, name: str) -> str:
        if self._normalize_fn is None:
            return name
        return self._normalize_fn(self, name)

    @property
    def parsed(self) -> bool:
        """Whether `parse()` has been called."""
        return self._parsed

    def _validate_flags(self, flags: tuple[str, ...]) -> tuple[str, str]:
        """Split flag strings into a long name and a shorthand."""
        if not flags:
            raise FlagDefinitionError("No flags provided")
        name = ""
        shorthand = ""
        for flag in flags:
            if not isinstance(flag, str):
                raise FlagDefinitionError(f"Flag '{flag}' must be a string")
            if flag.startswith("--"):
                if len(flag) < 3 or flag[2] == "-" or "=" in flag:
                    raise FlagDefinitionError(f"Invalid long flag '{flag}'")
                if name:
                    raise FlagDefinitionError(f"Only one long flag is allowed, got '{flag}'")
                name = flag[2:]
            elif flag.startswith("-"):
                if len(flag) != 2 or flag[1] in "-=":
                    raise FlagDefinitionError(
                        f"Flag '{flag}' must be a single character or start with '--'"
                    )
                if shorthand:
                    raise FlagDefinitionError(f"Only one shorthand is allowed, got '{flag}'")
                shorthand = flag[1]
            else:
                raise FlagDefinitionError(f"Flag '{flag}' must start with '-' or '--'")
        return name or shorthand, shorthand

    def add_flag(
        self,
        *flags: str,
        action: str | FlagAction = "store",
        type: Any = str,
        default: Any = None,
        usage: str = "",
        choices: Iterable | None = None,
        required: bool = False,
        no_opt_default: str | None = None,
        hidden: bool = False,
        deprecated: str = "",
        annotations: dict[str, list[str]] | None = None,
    ) -> Flag:
        """
        Define a new flag and register it.

        Args:
            *flags (str): The long and/or short form, e.g. "--verbose", "-v".
            action (str | FlagAction): How occurrences are stored (default: "store").
            type (type): Type to coerce values to.
            default (Any): Value when the flag is not given.
            usage (str): Help text.
            choices (Iterable | None): Allowed values.
            required (bool): Annotate the flag as one-required.
            no_opt_default (str | None): Value used when given without one.
            hidden (bool): Hide from usage output.
            deprecated (str): Deprecation notice.
            annotations (dict | None): Initial annotations.

        Returns:
            Flag: The registered flag.
        """
        name, shorthand = self._validate_flags(flags)
        try:
            action = FlagAction(action)
        except ValueError as error:
            raise FlagDefinitionError(str(error)) from error
        if choices is not None:
            if isinstance(choices, dict):
                raise FlagDefinitionError("choices cannot be a dict")
            if action in (FlagAction.STORE_TRUE, FlagAction.STORE_FALSE, FlagAction.COUNT):
                raise FlagDefinitionError(f"choices cannot be specified for {action} flags")
            choices = list(choices)
        if default is not None and action == FlagAction.STORE:
            try:
                coerced = coerce_value(default, type)
            except (ValueError, TypeError) as error:
                raise FlagDefinitionError(
                    f"Default value {default!r} for '{name}' cannot be coerced: {error}"
                ) from error
            if isinstance(default, str):
                default = coerced
        flag = Flag(
            name=name,
            shorthand=shorthand,
            usage=usage,
            action=action,
            type=type,
            default=default,
            choices=choices,
            no_opt_default=no_opt_default,
            hidden=hidden,
            deprecated=deprecated,
            annotations=dict(annotations or {}),
        )
        self.add(flag)
        if required:
            self.mark_required(flag.name)
        return flag

    def add(self, flag: Flag) -> None:
        """Register an existing `Flag` instance."""
        key = self.normalize(flag.name)
        if key in self._formal:
            raise FlagDefinitionError(f"{self.name} flag redefined: {flag.name}")
        if flag.shorthand:
            if len(flag.shorthand) != 1:
                raise FlagDefinitionError(
                    f"{flag.shorthand!r} shorthand is more than one ASCII character"
                )
            used = self._shorthands.get(flag.shorthand)
            if used is not None:
                raise FlagDefinitionError(
                    f"unable to redefine {flag.shorthand!r} shorthand in {self.name!r} "
                    f"flagset: it's already used for {used.name!r} flag"
                )
            self._shorthands[flag.shorthand] = flag
        self._formal[key] = flag

    def add_flag_set(self, other: FlagSet | None) -> None:
        """Add every flag of `other` whose name is not already defined here."""
        if other is None:
            return
        for flag in other.flags:
            if self.lookup(flag.name) is None:
                self.add(flag)

    @property
    def flags(self) -> list[Flag]:
        """Registered flags, sorted by name unless `sort_flags` is off."""
        if self.sort_flags:
            return [self._formal[key] for key in sorted(self._formal)]
        return list(self._formal.values())

    def lookup(self, name: str) -> Flag | None:
        return self._formal.get(self.normalize(name))

    def short_lookup(self, name: str) -> Flag | None:
        if not name:
            return None
        return self._shorthands.get(name[0])

    def _require(self, name: str) -> Flag:
        flag = self.lookup(name)
        if flag is None:
            raise FlagDefinitionError(f"flag {name!r} does not exist in {self.name!r}")
        return flag

    def visit_all(self, fn: Callable[[Flag], None]) -> None:
        """Call `fn` for every flag."""
        for flag in self.flags:
            fn(flag)

    def visit(self, fn: Callable[[Flag], None]) -> None:
        """Call `fn` for every flag set during the last parse."""
        for key in sorted(self._actual) if self.sort_flags else list(self._actual):
            fn(self._actual[key])

    def has_flags(self) -> bool:
        return bool(self._formal)

    def has_available_flags(self) -> bool:
        """Whether any flag is not hidden."""
        return any(not flag.hidden for flag in self._formal.values())

    def changed(self, name: str) -> bool:
        flag = self.lookup(name)
        return flag is not None and flag.changed

    def get(self, name: str) -> Any:
        """Return the current value of a flag."""
        flag = self.lookup(name)
        if flag is None:
            raise FlagDefinitionError(f"flag accessed but not defined: {name}")
        return flag.value

    def values(self) -> dict[str, Any]:
        """Current values of every flag, keyed by name."""
        return {flag.name: flag.value for flag in self.flags}

    def set(self, name: str, value: str) -> None:
        """Set a flag by name as if it had been given on the command line."""
        flag = self.lookup(name)
        if flag is None:
            raise FlagParseError(f"no such flag -{name}")
        self._apply(flag, value, f"--{flag.name}")

    def set_annotation(self, name: str, key: str, values: list[str]) -> None:
        self._require(name).annotations[key] = list(values)

    def mark_required(self, name: str) -> None:
        """Annotate a flag as one that must be set by the user."""
        self.set_annotation(name, BASH_COMP_ONE_REQUIRED_FLAG, ["true"])

    def mark_hidden(self, name: str) -> None:
        self._require(name).hidden = True

    def mark_deprecated(self, name: str, message: str) -> None:
        if not message:
            raise FlagDefinitionError(f"deprecated message for flag {name!r} must be set")
        self._require(name).deprecated = message

    def mark_shorthand_deprecated(self, name: str, message: str) -> None:
        if not message:
            raise FlagDefinitionError(f"deprecated message for flag {name!r} must be set")
        self._require(name).shorthand_deprecated = message

    def args(self) -> list[str]:
        """Positional arguments left over by the last parse."""
        return list(self._args)

    def arg(self, index: int) -> str:
        """Positional argument at `index`, or an empty string."""
        if 0 <= index < len(self._args):
            return self._args[index]
        return ""

    def _apply(self, flag: Flag, value: str, origin: str) -> None:
        try:
            flag.set(value)
        except (ValueError, TypeError) as error:
            raise FlagParseError(
                f'invalid argument "{value}" for "{origin}" flag: {error}'
            ) from error
        self._actual[self.normalize(flag.name)] = flag
        if flag.deprecated:
            self.output.write(f"Flag --{flag.name} has been deprecated, {flag.deprecated}\n")

    def _origin(self, flag: Flag) -> str:
        if flag.shorthand:
            return f"-{flag.shorthand}, --{flag.name}"
        return f"--{flag.name}"

    @staticmethod
    def _strip_unknown_value(args: list[str]) -> list[str]:
        if not args:
            return args
        if args[0].startswith("-"):
            return args
        if len(args) > 1:
            return args[1:]
        return []

    def _parse_long(self, token: str, args: list[str]) -> list[str]:
        name = token[2:]
        if not name or name[0] in "-=":
            raise FlagParseError(f"bad flag syntax: {token}")
        name, has_value, value = name.partition("=")
        flag = self.lookup(name)
        if flag is None:
            if self.allowlist.unknown_flags:
                return args if has_value else self._strip_unknown_value(args)
            raise FlagParseError(f"unknown flag: --{name}")
        if has_value:
            pass
        elif flag.has_no_opt_default:
            value = flag.no_opt_default or ""
        elif args:
            value, args = args[0], args[1:]
        else:
            raise FlagParseError(f"flag needs an argument: {token}")
        self._apply(flag, value, self._origin(flag))
        return args

    def _parse_single_short(
        self, shorthands: str, args: list[str]
    ) -> tuple[str, list[str]]:
        letter = shorthands[0]
        rest = shorthands[1:]
        flag = self.short_lookup(letter)
        if flag is None:
            if self.allowlist.unknown_flags:
                if len(shorthands) > 2 and shorthands[1] == "=":
                    return "", args
                return rest, self._strip_unknown_value(args)
            raise FlagParseError(f"unknown shorthand flag: {letter!r} in -{shorthands}")
        if len(shorthands) > 2 and shorthands[1] == "=":
            value, rest = shorthands[2:], ""
        elif flag.has_no_opt_default:
            value = flag.no_opt_default or ""
        elif len(shorthands) > 1:
            value, rest = shorthands[1:], ""
        elif args:
            value, args = args[0], args[1:]
        else:
            raise FlagParseError(f"flag needs an argument: {letter!r} in -{shorthands}")
        if flag.shorthand_deprecated:
            self.output.write(
                f"Flag shorthand -{flag.shorthand} has been deprecated, "
                f"{flag.shorthand_deprecated}\n"
            )
        self._apply(flag, value, self._origin(flag))
        return rest, args

    def _parse_short(self, token: str, args: list[str]) -> list[str]:
        shorthands = token[1:]
        while shorthands:
            shorthands, args = self._parse_single_short(shorthands, args)
        return args

    def parse(self, arguments: Iterable[str]) -> None:
        """
        Parse command-line arguments into the registered flags.

        Positional arguments may appear between flags; everything after `--`
        is positional. Leftover positionals are available from `args()`.

        Raises:
            FlagParseError: On bad syntax, unknown flags, missing values or
                values that cannot be coerced.
        """
        self._parsed = True
        self._args = []
        args = list(arguments)
        while args:
            token, args = args[0], args[1:]
            if len(token) < 2 or token[0] != "-":
                self._args.append(token)
                continue
            if token[1] == "-":
                if len(token) == 2:
                    self._args.extend(args)
                    break
                args = self._parse_long(token, args)
            else:
                args = self._parse_short(token, args)

    def reset(self) -> None:
        """Restore every flag to its default and forget the last parse."""
        for flag in self._formal.values():
            flag.reset()
        self._actual = {}
        self._args = []
        self._parsed = False

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __str__(self) -> str:
        names = ", ".join(flag.name for flag in self.flags)
        return f"FlagSet(name={self.name!r}, flags=[{names}])"
