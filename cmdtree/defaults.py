# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `DefaultFlagRegistry`, the set of flags every command of a tree sees.

A registry is built by the application and handed to the root command
(`Command(use="app", default_flags=registry)`). The first time any command of
that tree merges its flags, the registry's flags are added to the root's
persistent set, which makes them inherited by every descendant. The registry
is never consulted as ambient module state, so two trees in one process can
carry different defaults.

Example:
    registry = DefaultFlagRegistry.with_help()
    registry.add_flag("--config", usage="path to the config file")
    root = Command(use="app", default_flags=registry)
"""
from __future__ import annotations

from typing import Any

from cmdtree.flags import Flag, FlagSet


class DefaultFlagRegistry:
    """Flags merged once into the persistent set of the root they are given to."""

    def __init__(self, flags: FlagSet | None = None) -> None:
        self.flags: FlagSet = flags if flags is not None else FlagSet("defaults")

    def add_flag(self, *flags: str, **options: Any) -> Flag:
        """Register a default flag. Accepts the same options as `FlagSet.add_flag`."""
        return self.flags.add_flag(*flags, **options)

    @classmethod
    def with_help(cls) -> DefaultFlagRegistry:
        """A registry holding only the conventional `-h, --help` flag."""
        registry = cls()
        registry.add_flag("--help", "-h", action="store_true", usage="help for this command")
        return registry

    def __str__(self) -> str:
        return f"DefaultFlagRegistry({self.flags})"
