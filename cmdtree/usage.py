# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Usage and help rendering for commands.

`usage_text()` builds the usage block as a `rich.text.Text` (usage line,
aliases, examples, available sub-commands, local and inherited flags);
`help_text()` prefixes it with the command's long or short description.
`render_usage()` and `render_help()` print them through a rich console bound
to the command's streams: usage goes to the error stream (it accompanies
errors), help to the output stream.

Sub-command names are padded to the widest child name recorded in the
parent's `max_lengths`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text

from cmdtree.flags import Flag, FlagAction

if TYPE_CHECKING:
    from cmdtree.command import Command

MIN_NAME_PADDING = 11


def name_padding(command: Command) -> int:
    """Width a command's name is padded to in its parent's command list."""
    parent = command.parent
    if parent is not None and parent.max_lengths.name > MIN_NAME_PADDING:
        return parent.max_lengths.name
    return MIN_NAME_PADDING


def flag_usages(flags: list[Flag]) -> list[str]:
    """One aligned usage line per visible flag."""
    entries: list[tuple[str, str]] = []
    for flag in flags:
        if flag.hidden:
            continue
        if flag.shorthand and not flag.shorthand_deprecated:
            line = f"  -{flag.shorthand}, --{flag.name}"
        else:
            line = f"      --{flag.name}"
        type_text = flag.type_text()
        if type_text:
            line += f" {type_text}"
        if flag.action == FlagAction.STORE and flag.no_opt_default:
            line += f'[="{flag.no_opt_default}"]'

        description = flag.usage
        default_text = flag.default_text()
        if default_text:
            description += f" (default {default_text})"
        if flag.deprecated:
            description += f" (DEPRECATED: {flag.deprecated})"
        entries.append((line, description))

    width = max((len(line) for line, _ in entries), default=0)
    return [f"{line:<{width}}   {description}".rstrip() for line, description in entries]


def _local_flags(command: Command) -> list[Flag]:
    inherited = command.inherited_flags()
    return [flag for flag in command.flags().flags if inherited.lookup(flag.name) is None]


def _heading(text: Text, title: str) -> None:
    text.append("\n\n")
    text.append(title, style="usage.heading")


def usage_text(command: Command) -> Text:
    """The usage block of `command`."""
    text = Text()
    text.append("Usage:", style="usage.heading")
    if command.runnable():
        text.append(f"\n  {command.use_line()}")
    if command.has_available_sub_commands():
        text.append(f"\n  {command.command_path()} [command]")

    if command.aliases:
        _heading(text, "Aliases:")
        text.append(f"\n  {command.name_and_aliases()}")

    if command.has_example():
        _heading(text, "Examples:")
        text.append(f"\n{command.example}")

    if command.has_available_sub_commands():
        _heading(text, "Available Commands:")
        for child in command.commands():
            if not child.is_available_command():
                continue
            text.append("\n  ")
            text.append(f"{child.name:<{name_padding(child)}}", style="usage.command")
            text.append(f" {child.short}".rstrip())

    local_lines = flag_usages(_local_flags(command))
    if local_lines:
        _heading(text, "Flags:")
        for line in local_lines:
            text.append(f"\n{line}", style="usage.flag")

    inherited_lines = flag_usages(command.inherited_flags().flags)
    if inherited_lines:
        _heading(text, "Global Flags:")
        for line in inherited_lines:
            text.append(f"\n{line}", style="usage.flag")

    if command.has_available_sub_commands():
        text.append(
            f'\n\nUse "{command.command_path()} [command] --help" '
            "for more information about a command.",
            style="usage.dim",
        )
    return text


def help_text(command: Command) -> Text:
    """The description of `command` followed by its usage block."""
    text = Text()
    description = (command.long or command.short).rstrip()
    if description:
        text.append(description)
        text.append("\n\n")
    if command.runnable() or command.has_sub_commands():
        text.append_text(usage_text(command))
    return text


def render_usage(command: Command) -> None:
    """Default usage function: print the usage block to the error stream."""
    console = command.get_streams().console(stderr=True)
    console.print(usage_text(command), soft_wrap=True)


def render_help(command: Command, args: list[str]) -> None:
    """Default help function: print description and usage to the output stream."""
    console = command.get_streams().console()
    console.print(help_text(command), soft_wrap=True)
