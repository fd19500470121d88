# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Validators for the positional arguments a command accepts.

Assign one to `Command.args`; it is called as `validator(command, args)` with
the positional arguments left after flag parsing, and raises
`PositionalArgsError` to reject them.

Example:
    Command(use="rm FILE...", args=minimum_n_args(1), run=remove)
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from cmdtree.exceptions import PositionalArgsError

if TYPE_CHECKING:
    from cmdtree.command import Command

PositionalArgs = Callable[["Command", list[str]], None]


def no_args(command: Command, args: list[str]) -> None:
    """Reject any positional argument."""
    if args:
        raise PositionalArgsError(
            f'unknown command "{args[0]}" for "{command.command_path()}"'
        )


def arbitrary_args(command: Command, args: list[str]) -> None:
    """Accept any positional arguments."""


def only_valid_args(command: Command, args: list[str]) -> None:
    """Accept only values listed in `valid_args` or `arg_aliases`."""
    if not command.valid_args:
        return
    accepted = {value.split("\t", 1)[0] for value in command.valid_args}
    accepted.update(command.arg_aliases)
    for value in args:
        if value not in accepted:
            raise PositionalArgsError(
                f'invalid argument "{value}" for "{command.command_path()}"'
            )


def minimum_n_args(count: int) -> PositionalArgs:
    """Require at least `count` positional arguments."""

    def validator(command: Command, args: list[str]) -> None:
        if len(args) < count:
            raise PositionalArgsError(
                f"requires at least {count} arg(s), only received {len(args)}"
            )

    return validator


def maximum_n_args(count: int) -> PositionalArgs:
    """Allow at most `count` positional arguments."""

    def validator(command: Command, args: list[str]) -> None:
        if len(args) > count:
            raise PositionalArgsError(
                f"accepts at most {count} arg(s), received {len(args)}"
            )

    return validator


def exact_args(count: int) -> PositionalArgs:
    """Require exactly `count` positional arguments."""

    def validator(command: Command, args: list[str]) -> None:
        if len(args) != count:
            raise PositionalArgsError(f"accepts {count} arg(s), received {len(args)}")

    return validator


def range_args(minimum: int, maximum: int) -> PositionalArgs:
    """Require between `minimum` and `maximum` positional arguments, inclusive."""

    def validator(command: Command, args: list[str]) -> None:
        if not minimum <= len(args) <= maximum:
            raise PositionalArgsError(
                f"accepts between {minimum} and {maximum} arg(s), received {len(args)}"
            )

    return validator


def match_all(*validators: PositionalArgs) -> PositionalArgs:
    """Run several validators; the first failure wins."""

    def validator(command: Command, args: list[str]) -> None:
        for check in validators:
            check(command, args)

    return validator
