# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Command` node of a cmdtree command tree.

A command is one named node of a hierarchical CLI (`app`, `app build`,
`app build image`, ...). It owns:

- its children and a non-owning reference to its parent
- a `FlagScope` with local, persistent, inherited and merged flag sets
- a `Lifecycle` of five optional hooks (`global_pre_run`, `pre_run`, `run`,
  `post_run`, `global_post_run`)
- help metadata (short and long descriptions, examples, aliases, version)

Any command of a tree can be executed; execution always starts from the root,
dispatches the argument list to the command it targets, parses that
command's flags, validates positional arguments and required flags, and runs
the hook sequence.

Example:
    root = Command(use="app", short="An example application")
    build = Command(use="build TARGET", aliases=["b"], run=build_target)
    build.local_flags().add_flag("--verbose", "-v", action="store_true")
    root.add_command(build)
    root.execute(["b", "--verbose", "api"])
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
    model_validator,
)

from cmdtree.args import arbitrary_args
from cmdtree.defaults import DefaultFlagRegistry
from cmdtree.dispatcher import Dispatcher
from cmdtree.exceptions import (
    CmdTreeError,
    FlagParseError,
    NotExecutableError,
    RequiredFlagError,
    TreeStructureError,
)
from cmdtree.flags import FlagSet, NormalizeFn, ParseErrorsAllowlist
from cmdtree.lifecycle import Lifecycle, LifecycleEvent, LifecycleExecutor
from cmdtree.logger import logger
from cmdtree.scope import FlagScope
from cmdtree.streams import Streams
from cmdtree.usage import help_text, render_help, render_usage, usage_text

FlagErrorFn = Callable[["Command", FlagParseError], "Exception | None"]
HelpFn = Callable[["Command", list[str]], None]
UsageFn = Callable[["Command"], None]


def _default_flag_error(command: Command, error: FlagParseError) -> Exception | None:
    return error


@dataclass
class CalledAs:
    """The literal token a command was reached by during the current dispatch."""

    name: str = ""
    is_called: bool = False


@dataclass
class MaxLengths:
    """Longest `use`, command path and name among a command's direct children."""

    use: int = 0
    path: int = 0
    name: int = 0

    def reset(self) -> None:
        self.use = self.path = self.name = 0

    def update_from(self, child: Command) -> None:
        self.use = max(self.use, len(child.use))
        self.path = max(self.path, len(child.command_path()))
        self.name = max(self.name, len(child.name))


class Command(BaseModel):
    """
    One node of a command tree.

    Hooks can be given directly as keyword arguments (`run=...`,
    `pre_run=...`, `global_pre_run=...`, ...) and are stored on the command's
    `lifecycle`. Every hook is called as `hook(command, args)`.

    Attributes:
        use (str): One-line usage; its first word is the command's name.
        aliases (list[str]): Alternate names accepted during dispatch.
        suggest_for (list[str]): Tokens this command is suggested for.
        short (str): Description shown in the parent's command list.
        long (str): Description shown in the command's own help.
        example (str): Examples shown in help.
        valid_args (list[str]): Accepted positional values, for `only_valid_args`.
        arg_aliases (list[str]): Extra accepted values, for `only_valid_args`.
        args (Callable | None): Positional-arguments validator.
        deprecated (str): Deprecation message; hides the command when set.
        annotations (dict[str, str]): Free-form metadata for tooling.
        version (str): Enables a `--version` flag when set.
        hidden (bool): Hide the command from command lists.
        silence_errors (bool): Do not print `Error: ...` on failure.
        silence_usage (bool): Do not print usage on failure.
        disable_flag_parsing (bool): Pass every argument to the hooks as-is.
        disable_flags_in_use_line (bool): Omit `[flags]` from the usage line.
        disable_suggestions (bool): Never suggest commands on dispatch failure.
        suggestions_minimum_distance (int): Largest edit distance suggested.
        traverse_children (bool): Parse every ancestor's flags during dispatch.
        allowlist (ParseErrorsAllowlist): Parse errors to ignore.
        flag_error_fn (Callable | None): Maps flag parse errors to the error
            to raise, or None to ignore them. Inherited by descendants.
        help_fn (Callable | None): Replaces help rendering. Inherited.
        usage_fn (Callable | None): Replaces usage rendering. Inherited.
        context (Any): Opaque caller object, passed down to the executed command.
        default_flags (DefaultFlagRegistry | None): Flags every command of the
            tree sees. Only read on the root.
        streams (Streams | None): Input and output streams. Inherited.
        lifecycle (Lifecycle): The command's hooks.
    """

    use: str
    aliases: list[str] = Field(default_factory=list)
    suggest_for: list[str] = Field(default_factory=list)
    short: str = ""
    long: str = ""
    example: str = ""
    valid_args: list[str] = Field(default_factory=list)
    arg_aliases: list[str] = Field(default_factory=list)
    args: Callable[..., Any] | None = None
    deprecated: str = ""
    annotations: dict[str, str] = Field(default_factory=dict)
    version: str = ""
    hidden: bool = False
    silence_errors: bool = False
    silence_usage: bool = False
    disable_flag_parsing: bool = False
    disable_flags_in_use_line: bool = False
    disable_suggestions: bool = False
    suggestions_minimum_distance: int = 2
    traverse_children: bool = False
    allowlist: ParseErrorsAllowlist = Field(default_factory=ParseErrorsAllowlist)
    flag_error_fn: Callable[..., Any] | None = None
    help_fn: Callable[..., Any] | None = None
    usage_fn: Callable[..., Any] | None = None
    context: Any = None
    default_flags: DefaultFlagRegistry | None = None
    streams: Streams | None = None
    lifecycle: Lifecycle = Field(default_factory=Lifecycle)

    _parent: Command | None = PrivateAttr(default=None)
    _commands: list[Command] = PrivateAttr(default_factory=list)
    _commands_sorted: bool = PrivateAttr(default=True)
    _called_as: CalledAs = PrivateAttr(default_factory=CalledAs)
    _max_lengths: MaxLengths = PrivateAttr(default_factory=MaxLengths)
    _flag_scope: FlagScope | None = PrivateAttr(default=None)
    _global_normalization: NormalizeFn | None = PrivateAttr(default=None)
    _args: list[str] | None = PrivateAttr(default=None)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @model_validator(mode="before")
    @classmethod
    def collect_hooks(cls, data: Any) -> Any:
        """Move hook keyword arguments onto the command's lifecycle."""
        if not isinstance(data, dict):
            return data
        names = [event.value for event in LifecycleEvent if event.value in data]
        if not names:
            return data
        data = dict(data)
        lifecycle = data.get("lifecycle") or Lifecycle()
        for name in names:
            hook = data.pop(name)
            if hook is not None:
                lifecycle.register(name, hook)
        data["lifecycle"] = lifecycle
        return data

    @field_validator("suggestions_minimum_distance")
    @classmethod
    def check_minimum_distance(cls, distance: int) -> int:
        if distance <= 0:
            raise ValueError("suggestions_minimum_distance must be greater than 0")
        return distance

    def model_post_init(self, _: Any) -> None:
        self._flag_scope = FlagScope(self.name)

    @property
    def name(self) -> str:
        """The first word of `use`."""
        name, _, _ = self.use.partition(" ")
        return name

    @property
    def parent(self) -> Command | None:
        return self._parent

    @property
    def called_as(self) -> CalledAs:
        return self._called_as

    @property
    def max_lengths(self) -> MaxLengths:
        return self._max_lengths

    @property
    def flag_scope(self) -> FlagScope:
        assert self._flag_scope is not None
        return self._flag_scope

    def has_parent(self) -> bool:
        return self._parent is not None

    def has_sub_commands(self) -> bool:
        return bool(self._commands)

    def has_available_sub_commands(self) -> bool:
        return any(child.is_available_command() for child in self._commands)

    def has_alias(self, alias: str) -> bool:
        return alias in self.aliases

    def name_and_aliases(self) -> str:
        return ", ".join([self.name, *self.aliases])

    def has_example(self) -> bool:
        return bool(self.example)

    def runnable(self) -> bool:
        return self.lifecycle.is_runnable()

    def is_available_command(self) -> bool:
        """Whether the command is listed in its parent's help."""
        if self.deprecated or self.hidden:
            return False
        return self.runnable() or self.has_available_sub_commands()

    def visit_parents(self, fn: Callable[[Command], Any]) -> None:
        """Call `fn` on every ancestor, nearest first."""
        node = self._parent
        while node is not None:
            fn(node)
            node = node._parent

    def root(self) -> Command:
        node = self
        while node._parent is not None:
            node = node._parent
        return node

    def path(self) -> str:
        """Names from the root down to this command, separated by spaces."""
        names = [self.name]
        self.visit_parents(lambda ancestor: names.append(ancestor.name))
        return " ".join(reversed(names))

    def command_path(self) -> str:
        return self.path()

    def use_line(self) -> str:
        """The full usage line, including the parent's command path."""
        if self._parent is not None:
            line = f"{self._parent.command_path()} {self.use}"
        else:
            line = self.use
        if self.disable_flags_in_use_line:
            return line
        if self.flags().has_available_flags() and "[flags]" not in line:
            line += " [flags]"
        return line

    def commands(self) -> list[Command]:
        """Children sorted by name."""
        if not self._commands_sorted:
            self._commands.sort(key=lambda child: child.name)
            self._commands_sorted = True
        return list(self._commands)

    def add_command(self, *commands: Command) -> None:
        """
        Add one or more children.

        Raises:
            TreeStructureError: If any of the commands is this command. The
                tree is left untouched.
        """
        for command in commands:
            if command is self:
                raise TreeStructureError("command can't be a child of itself")
        for command in commands:
            command._parent = self
            self._max_lengths.update_from(command)
            if self._global_normalization is not None:
                command.set_global_normalization(self._global_normalization)
            self._commands.append(command)
            self._commands_sorted = False
            logger.debug("[Command:%s] Added sub-command %s.", self.name, command.name)

    def remove_command(self, *commands: Command) -> None:
        """Remove the given children, matched by identity."""
        kept: list[Command] = []
        for child in self._commands:
            if any(child is command for command in commands):
                child._parent = None
                logger.debug("[Command:%s] Removed sub-command %s.", self.name, child.name)
                continue
            kept.append(child)
        self._commands = kept
        self._max_lengths.reset()
        for child in self._commands:
            self._max_lengths.update_from(child)

    def reset_commands(self) -> None:
        """Detach from the parent and drop every child and inherited flag."""
        self._parent = None
        self._commands = []
        self._commands_sorted = True
        self._max_lengths.reset()
        self.flag_scope.clear_inherited()

    def find_next(self, token: str) -> Command | None:
        """The direct child named or aliased `token`, recording how it was called."""
        for child in self._commands:
            if child.name == token or child.has_alias(token):
                child.called_as.name = token
                return child
        return None

    def set_args(self, args: list[str]) -> None:
        """Arguments used by `execute()` instead of `sys.argv[1:]`."""
        self._args = list(args)

    def set_global_normalization(self, normalize_fn: NormalizeFn | None) -> None:
        """Set the flag-name normalization function of this command's flag sets."""
        self._global_normalization = normalize_fn
        self.flag_scope.normalize_fn = normalize_fn

    def global_normalization(self) -> NormalizeFn | None:
        return self._global_normalization

    def flags(self) -> FlagSet:
        """The merged flag set this command's arguments are parsed with."""
        return self.flag_scope.merge(self)

    def local_flags(self) -> FlagSet:
        """Flags that apply to this command only."""
        return self.flag_scope.local

    def persistent_flags(self) -> FlagSet:
        """Flags that apply to this command and every descendant."""
        return self.flag_scope.persistent

    def inherited_flags(self) -> FlagSet:
        """Persistent flags of every ancestor."""
        self.flags()
        return self.flag_scope.inherited

    def mark_flag_required(self, name: str) -> None:
        """
        Mark a local or persistent flag of this command as required.

        Raises:
            FlagDefinitionError: If no such flag is defined.
        """
        if self.local_flags().lookup(name) is None:
            self.persistent_flags().mark_required(name)
        else:
            self.local_flags().mark_required(name)

    def parse_flags(self, args: list[str]) -> None:
        """
        Parse `args` with the merged flag set.

        Deprecation notices written while parsing are echoed to the error
        stream.

        Raises:
            FlagParseError: If the arguments cannot be parsed.
        """
        if self.disable_flag_parsing:
            return
        buffer = self.flag_scope.error_buffer
        start = len(buffer.getvalue())
        flags = self.flags()
        flags.allowlist = self.allowlist
        flags.parse(args)
        notices = buffer.getvalue()[start:]
        if notices:
            self.get_streams().print_err(notices)

    def _nearest(self, attribute: str) -> Any:
        node: Command | None = self
        while node is not None:
            value = getattr(node, attribute)
            if value is not None:
                return value
            node = node._parent
        return None

    def flag_error_function(self) -> FlagErrorFn:
        return self._nearest("flag_error_fn") or _default_flag_error

    def help_function(self) -> HelpFn:
        return self._nearest("help_fn") or render_help

    def usage_function(self) -> UsageFn:
        return self._nearest("usage_fn") or render_usage

    def get_streams(self) -> Streams:
        """This command's streams, else the nearest ancestor's, else the `sys` streams."""
        return self._nearest("streams") or Streams()

    def set_output_stream(self, out: Any) -> None:
        if self.streams is None:
            self.streams = Streams()
        self.streams.set_out(out)

    def set_error_stream(self, err: Any) -> None:
        if self.streams is None:
            self.streams = Streams()
        self.streams.set_err(err)

    def set_input_stream(self, in_: Any) -> None:
        if self.streams is None:
            self.streams = Streams()
        self.streams.set_in(in_)

    def init_default_help_flag(self) -> None:
        """Add `-h, --help` to the merged flag set unless a `help` flag exists."""
        flags = self.flags()
        if flags.lookup("help") is not None:
            return
        flags.add_flag(
            "--help",
            *(["-h"] if flags.short_lookup("h") is None else []),
            action="store_true",
            usage=f"help for {self.name}",
        )

    def init_default_version_flag(self) -> None:
        """Add `-v, --version` to the merged flag set when the command has a version."""
        if not self.version:
            return
        flags = self.flags()
        if flags.lookup("version") is not None:
            return
        flags.add_flag(
            "--version",
            *(["-v"] if flags.short_lookup("v") is None else []),
            action="store_true",
            usage=f"version for {self.name}",
        )

    def _requested(self, name: str) -> bool:
        flag = self.flags().lookup(name)
        return flag is not None and flag.changed and bool(flag.value)

    def validate_args(self, args: list[str]) -> None:
        """
        Run the positional-arguments validator; any arguments are accepted when
        none is set.

        Raises:
            PositionalArgsError: If the validator rejects `args`.
        """
        validator = self.args or arbitrary_args
        validator(self, args)

    def validate_required_flags(self) -> None:
        """
        Raises:
            RequiredFlagError: Listing every required flag that was not set.
        """
        if self.disable_flag_parsing:
            return
        missing = [
            flag.name for flag in self.flags().flags if flag.required and not flag.changed
        ]
        if missing:
            raise RequiredFlagError(missing)

    def execute(self, args: list[str] | None = None, context: Any = None) -> Command:
        """
        Dispatch `args` from the root and execute the command they resolve to.

        `args` defaults to the arguments given to `set_args()`, then to
        `sys.argv[1:]`. On failure `Error: <message>` and the usage of the
        resolved command are printed to the error stream, unless silenced,
        and the exception is raised.

        Returns:
            Command: The executed command.
        """
        if self._parent is not None:
            return self.root().execute(args, context)
        if context is not None:
            self.context = context
        if args is None:
            args = self._args if self._args is not None else sys.argv[1:]

        dispatcher = Dispatcher(self)
        try:
            if self.traverse_children:
                command, remaining = dispatcher.traverse(args)
            else:
                command, remaining = dispatcher.find(args)
        except CmdTreeError as error:
            if not self.silence_errors:
                streams = self.get_streams()
                streams.print_errln("Error:", error)
                streams.print_errln(f"Run '{self.command_path()} --help' for usage.")
            raise

        command.called_as.is_called = True
        if not command.called_as.name:
            command.called_as.name = command.name
        logger.debug("[Command:%s] Resolved %s.", self.name, command.command_path())

        try:
            command._execute(remaining)
        except Exception as error:
            if isinstance(error, CmdTreeError) and error.command is None:
                error.command = command
            if not command.silence_errors and not self.silence_errors:
                command.get_streams().print_errln("Error:", error)
            if not command.silence_usage and not self.silence_usage:
                command.usage_function()(command)
            raise
        return command

    def _execute(self, args: list[str]) -> None:
        streams = self.get_streams()
        if self.deprecated:
            streams.print_errln(f'Command "{self.name}" is deprecated, {self.deprecated}')

        self.init_default_help_flag()
        self.init_default_version_flag()

        try:
            self.parse_flags(args)
        except FlagParseError as error:
            replacement = self.flag_error_function()(self, error)
            if replacement is not None:
                raise replacement
            logger.debug("[Command:%s] Ignored flag error: %s", self.name, error)

        if self._requested("help"):
            self.help_function()(self, args)
            return
        if self.version and self._requested("version"):
            streams.println(f"{self.name} version {self.version}")
            return
        if not self.runnable():
            raise NotExecutableError(f'command "{self.command_path()}" is not executable')

        if self.context is None:
            self.context = self.root().context

        positional = list(args) if self.disable_flag_parsing else self.flags().args()
        self.validate_args(positional)
        LifecycleExecutor(self, before_run=self.validate_required_flags).run(positional)

    def usage_string(self) -> str:
        return usage_text(self).plain

    def help_string(self) -> str:
        return help_text(self).plain

    def print_usage(self) -> None:
        self.usage_function()(self)

    def print_help(self) -> None:
        self.help_function()(self, [])

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __str__(self) -> str:
        return (
            f"Command(use={self.use!r}, aliases={self.aliases}, "
            f"commands={[child.name for child in self.commands()]})"
        )
