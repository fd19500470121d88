# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Resolves the command an argument list targets.

`Dispatcher.find()` descends from the root one positional token at a time.
At each level the node's merged flag set tells `strip_flags` which flags
consume a value, the first positional token is matched against the node's
children (by name or alias, exact match only), and on a match that token is
removed from the arguments and the child becomes the current node. The first
token that matches nothing ends the descent; it and every other remaining
token belong to the resolved command.

`Dispatcher.traverse()` is the variant used when the root sets
`traverse_children`: the flags seen before each sub-command token are parsed
by the node they precede, so parent commands can act on their own local
flags.

Example:
    command, args = Dispatcher(root).find(["build", "--verbose", "api"])
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from cmdtree.exceptions import UnknownCommandError
from cmdtree.logger import logger
from cmdtree.splitter import (
    args_minus_first,
    has_no_opt_default,
    is_flag_arg,
    short_has_no_opt_default,
    strip_flags,
)
from cmdtree.suggestions import SuggestionEngine

if TYPE_CHECKING:
    from cmdtree.command import Command


class Dispatcher:
    """
    Descends a command tree along the positional tokens of an argument list.

    Args:
        root (Command): The command dispatch starts from.
    """

    def __init__(self, root: Command) -> None:
        self.root = root

    def _reset_state(self) -> None:
        pending = [self.root]
        while pending:
            node = pending.pop()
            node.called_as.name = ""
            node.called_as.is_called = False
            node.flag_scope.reset_values()
            pending.extend(node.commands())

    def find(self, args: list[str]) -> tuple[Command, list[str]]:
        """
        Return the resolved command and the arguments that belong to it.

        Raises:
            UnknownCommandError: If the resolved command cannot run, has
                sub-commands, declares no positional-args validator and was
                still given positional tokens.
        """
        self._reset_state()
        command = self.root
        remaining = list(args)
        while True:
            positionals = strip_flags(remaining, command.flags())
            if not positionals:
                break
            token = positionals[0]
            child = command.find_next(token)
            if child is None:
                break
            logger.debug("[Dispatcher] %r → %s", token, child.name)
            remaining = args_minus_first(remaining, token)
            command = child

        self._check_unknown(command, remaining)
        return command, remaining

    def _check_unknown(self, command: Command, remaining: list[str]) -> None:
        if command.args is not None:
            return
        if command.runnable() or not command.has_sub_commands():
            return
        positionals = strip_flags(remaining, command.flags())
        if not positionals:
            return
        typed = positionals[0]
        suggestions = SuggestionEngine.for_command(command).suggest(command, typed)
        logger.debug(
            "[Dispatcher] Unknown command %r for %s (suggestions: %s)",
            typed,
            command.command_path(),
            suggestions,
        )
        error = UnknownCommandError(typed, command.command_path(), suggestions)
        error.command = command
        raise error

    def traverse(self, args: list[str]) -> tuple[Command, list[str]]:
        """
        Return the resolved command and its arguments, parsing every
        ancestor's flags on the way down.

        Raises:
            FlagParseError: If an ancestor's flags fail to parse.
        """
        self._reset_state()
        command = self.root
        remaining = list(args)
        descended = True
        while descended:
            descended = False
            flags: list[str] = []
            in_flag = False
            for index, arg in enumerate(remaining):
                if arg.startswith("--") and "=" not in arg:
                    in_flag = not has_no_opt_default(arg[2:], command.flags())
                    flags.append(arg)
                    continue
                if (
                    arg.startswith("-")
                    and "=" not in arg
                    and len(arg) == 2
                    and not short_has_no_opt_default(arg[1:], command.flags())
                ):
                    in_flag = True
                    flags.append(arg)
                    continue
                if in_flag:
                    in_flag = False
                    flags.append(arg)
                    continue
                if is_flag_arg(arg):
                    flags.append(arg)
                    continue

                child = command.find_next(arg)
                if child is None:
                    break
                command.parse_flags(flags)
                logger.debug("[Dispatcher] %r → %s (traverse)", arg, child.name)
                command = child
                remaining = remaining[index + 1 :]
                descended = True
                break
        return command, remaining
