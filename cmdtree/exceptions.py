# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used in the cmdtree CLI framework.

These exceptions provide structured error handling for the failure cases of
building a command tree, parsing flags against it, and executing the command
an invocation resolves to.

All exceptions inherit from `CmdTreeError`, the base exception for the framework.

Exception Hierarchy:
- CmdTreeError
    ├── TreeStructureError
    ├── InvalidHookError
    ├── FlagError
    │   ├── FlagDefinitionError
    │   └── FlagParseError
    ├── RequiredFlagError
    ├── NotExecutableError
    ├── UnknownCommandError
    └── PositionalArgsError

Exceptions raised while executing a command carry the resolved command on
their `command` attribute once it is known. Exceptions raised by user hooks
are never wrapped and propagate as they are.
"""
from __future__ import annotations

from typing import Any


class CmdTreeError(Exception):
    """Base exception for the cmdtree framework."""

    command: Any = None


class TreeStructureError(CmdTreeError):
    """Exception raised when a command would become its own child."""


class InvalidHookError(CmdTreeError):
    """Exception raised when a lifecycle hook is not callable."""


class FlagError(CmdTreeError):
    """Base exception for flag definition and parsing problems."""


class FlagDefinitionError(FlagError):
    """Exception raised when a flag is defined twice or defined badly."""


class FlagParseError(FlagError):
    """Exception raised when command-line arguments cannot be parsed as flags."""


class RequiredFlagError(CmdTreeError):
    """Exception raised when one or more required flags were not set."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        joined = '", "'.join(self.missing)
        super().__init__(f'required flag(s) "{joined}" not set')


class NotExecutableError(CmdTreeError):
    """Exception raised when the resolved command has no run hook."""


class UnknownCommandError(CmdTreeError):
    """Exception raised when a positional token matches no sub-command."""

    def __init__(self, name: str, command_path: str, suggestions: list[str] | None = None):
        self.name = name
        self.command_path = command_path
        self.suggestions = list(suggestions or [])
        message = f'unknown command "{name}" for "{command_path}"'
        if self.suggestions:
            message += "\n\nDid you mean this?\n"
            message += "".join(f"\t{suggestion}\n" for suggestion in self.suggestions)
        super().__init__(message)


class PositionalArgsError(CmdTreeError):
    """Exception raised when positional arguments fail a command's validator."""
