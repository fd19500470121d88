# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Lifecycle` hook slots of a command and the `LifecycleExecutor`
that runs them.

A command executes its hooks in a fixed order:

    global_pre_run → pre_run → run → post_run → global_post_run

`pre_run`, `run` and `post_run` belong to the executed command itself. The two
global hooks are looked up from the executed command upwards; the nearest
command that defines one supplies it, and only that one fires. A command is
runnable only when it has a `run` hook.

Every hook is called as `hook(command, args)` with the executed command and
its positional arguments. Hooks report failure by raising; the exception
stops the sequence (later hooks, `global_post_run` included, do not run) and
propagates unchanged.

Key Components:
- LifecycleEvent: Enum naming the five hook slots
- Lifecycle: The hook slots of one command
- LifecycleExecutor: Runs the sequence for a resolved command

Usage:
    lifecycle = Lifecycle(run=deploy)
    lifecycle.register(LifecycleEvent.PRE_RUN, check_credentials)
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from cmdtree.exceptions import InvalidHookError, NotExecutableError
from cmdtree.logger import logger

if TYPE_CHECKING:
    from cmdtree.command import Command

Hook = Callable[..., Any]


class LifecycleEvent(Enum):
    """
    Enum for the lifecycle hook slots of a command.

    Members:
        GLOBAL_PRE_RUN: Before everything; nearest ancestor-or-self definition.
        PRE_RUN: Before `run`; the command's own.
        RUN: The command's action. Required for execution.
        POST_RUN: After `run`; the command's own.
        GLOBAL_POST_RUN: After everything; nearest ancestor-or-self definition.

    Aliases:
        "persistent_pre_run" → "global_pre_run"
        "persistent_post_run" → "global_post_run"
        "pre" → "pre_run"
        "post" → "post_run"
    """

    GLOBAL_PRE_RUN = "global_pre_run"
    PRE_RUN = "pre_run"
    RUN = "run"
    POST_RUN = "post_run"
    GLOBAL_POST_RUN = "global_post_run"

    @classmethod
    def choices(cls) -> list[LifecycleEvent]:
        """Return a list of all lifecycle events, in execution order."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "persistent_pre_run": "global_pre_run",
            "persistent_post_run": "global_post_run",
            "pre": "pre_run",
            "post": "post_run",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> LifecycleEvent:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower().replace("-", "_")
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        """Return the string representation of the lifecycle event."""
        return self.value


@dataclass
class Lifecycle:
    """The five optional hook slots of one command."""

    global_pre_run: Hook | None = None
    pre_run: Hook | None = None
    run: Hook | None = None
    post_run: Hook | None = None
    global_post_run: Hook | None = None

    def register(self, event: LifecycleEvent | str, hook: Hook) -> None:
        """
        Set the hook for a lifecycle slot, replacing any previous one.

        Raises:
            ValueError: If the event is invalid.
            InvalidHookError: If the hook is not callable.
        """
        event = LifecycleEvent(event)
        if not callable(hook):
            raise InvalidHookError(f"{event} hook must be callable, got {hook!r}")
        setattr(self, event.value, hook)

    def get(self, event: LifecycleEvent | str) -> Hook | None:
        return getattr(self, LifecycleEvent(event).value)

    def clear(self, event: LifecycleEvent | str | None = None) -> None:
        """Clear one slot, or all of them when `event` is None."""
        events = [LifecycleEvent(event)] if event else LifecycleEvent.choices()
        for member in events:
            setattr(self, member.value, None)

    def is_runnable(self) -> bool:
        return self.run is not None

    def __str__(self) -> str:
        """Return the hooks of each slot, one line per slot."""
        lines = ["<Lifecycle>"]
        for event in LifecycleEvent:
            hook = self.get(event)
            name = getattr(hook, "__name__", repr(hook)) if hook else "—"
            lines.append(f"  {event.value}: {name}")
        return "\n".join(lines)


class LifecycleExecutor:
    """
    Runs the hook sequence of a resolved command.

    Args:
        command (Command): The command being executed.
        before_run (Callable | None): Called right before `run`, after
            `pre_run`. Used for validation that should see pre-run effects.
    """

    def __init__(
        self, command: Command, before_run: Callable[[], None] | None = None
    ) -> None:
        self.command = command
        self.before_run = before_run

    def find_global(self, event: LifecycleEvent) -> Hook | None:
        """Nearest definition of `event`, searching from the command upwards."""
        node: Command | None = self.command
        while node is not None:
            hook = node.lifecycle.get(event)
            if hook is not None:
                return hook
            node = node.parent
        return None

    def sequence(self) -> list[tuple[LifecycleEvent, Hook | None]]:
        lifecycle = self.command.lifecycle
        return [
            (LifecycleEvent.GLOBAL_PRE_RUN, self.find_global(LifecycleEvent.GLOBAL_PRE_RUN)),
            (LifecycleEvent.PRE_RUN, lifecycle.pre_run),
            (LifecycleEvent.RUN, lifecycle.run),
            (LifecycleEvent.POST_RUN, lifecycle.post_run),
            (LifecycleEvent.GLOBAL_POST_RUN, self.find_global(LifecycleEvent.GLOBAL_POST_RUN)),
        ]

    def run(self, args: list[str]) -> None:
        """
        Run every defined hook in order.

        Raises:
            NotExecutableError: If the command has no `run` hook.
            Exception: Whatever a hook raises, unchanged.
        """
        if not self.command.lifecycle.is_runnable():
            raise NotExecutableError(
                f'command "{self.command.command_path()}" is not executable'
            )
        for event, hook in self.sequence():
            if event == LifecycleEvent.RUN and self.before_run is not None:
                self.before_run()
            if hook is None:
                continue
            logger.debug("[Command:%s] Running %s hook.", self.command.name, event)
            try:
                hook(self.command, args)
            except Exception as error:
                logger.debug(
                    "[Command:%s] %s hook raised %s: %s",
                    self.command.name,
                    event,
                    type(error).__name__,
                    error,
                )
                raise
