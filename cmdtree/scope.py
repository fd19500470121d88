# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `FlagScope`, the owner of a command's flag collections.

Every command holds one scope with four collections, each created on first
access and reused afterwards:

- `local`: flags that apply to this command only.
- `persistent`: flags this command defines for itself and all descendants.
- `inherited`: the union of every ancestor's persistent flags (computed).
- `full`: local ∪ persistent ∪ inherited, the set arguments are parsed with
  (computed).

`merge()` computes `inherited` and `full` once and memoizes the result. A flag
added to an ancestor's persistent set after a descendant has merged does not
show up in that descendant's `full` set; callers holding on to the merged set
keep seeing exactly what they saw the first time. Define flags before
dispatching.

All collections of one scope share a single error buffer, which receives
deprecation notices written while parsing.
"""
from __future__ import annotations

import io
from typing import TYPE_CHECKING

from cmdtree.flags import FlagSet, NormalizeFn
from cmdtree.logger import logger

if TYPE_CHECKING:
    from cmdtree.command import Command


class FlagScope:
    """
    Lazily created, lazily merged flag collections for one command.

    Attributes:
        name (str): Name given to every collection (the command's name).
    """

    def __init__(self, name: str = "") -> None:
        self.name: str = name
        self._normalize_fn: NormalizeFn | None = None
        self._error_buffer: io.StringIO | None = None
        self._local: FlagSet | None = None
        self._persistent: FlagSet | None = None
        self._inherited: FlagSet | None = None
        self._full: FlagSet | None = None
        self._merged: bool = False

    @property
    def error_buffer(self) -> io.StringIO:
        """The output sink shared by all collections of this scope."""
        if self._error_buffer is None:
            self._error_buffer = io.StringIO()
        return self._error_buffer

    @property
    def normalize_fn(self) -> NormalizeFn | None:
        return self._normalize_fn

    @normalize_fn.setter
    def normalize_fn(self, normalize_fn: NormalizeFn | None) -> None:
        self._normalize_fn = normalize_fn
        for flag_set in self._existing():
            flag_set.normalize_fn = normalize_fn

    def _existing(self) -> list[FlagSet]:
        return [
            flag_set
            for flag_set in (self._local, self._persistent, self._inherited, self._full)
            if flag_set is not None
        ]

    def _new_set(self, sort_flags: bool = True) -> FlagSet:
        return FlagSet(
            self.name,
            output=self.error_buffer,
            normalize_fn=self._normalize_fn,
            sort_flags=sort_flags,
        )

    @property
    def local(self) -> FlagSet:
        if self._local is None:
            self._local = self._new_set()
        return self._local

    @property
    def persistent(self) -> FlagSet:
        if self._persistent is None:
            self._persistent = self._new_set()
        return self._persistent

    @property
    def inherited(self) -> FlagSet:
        if self._inherited is None:
            self._inherited = self._new_set(sort_flags=False)
        return self._inherited

    @property
    def full(self) -> FlagSet:
        """The full set as it currently stands; see `merge()` to populate it."""
        if self._full is None:
            self._full = self._new_set()
        return self._full

    @property
    def is_merged(self) -> bool:
        return self._merged

    def clear_inherited(self) -> None:
        """Forget the inherited and full sets; the next `merge()` rebuilds both."""
        self._inherited = None
        self._full = None
        self._merged = False

    def reset_values(self) -> None:
        """Restore every flag of the existing collections to its default."""
        for flag_set in self._existing():
            flag_set.reset()

    def merge(self, command: Command) -> FlagSet:
        """
        Return the full flag set of `command`, computing it on the first call.

        Ancestors are collected nearest-first and their persistent sets are
        added in that order; because the first definition of a name wins, a
        nearer ancestor shadows a farther one. The root's default registry is
        folded into the root's persistent set first. The full set is then
        built from local, persistent and inherited flags in that order, so a
        command's own definitions shadow inherited ones.

        Raises:
            FlagDefinitionError: If two merged flags claim the same shorthand.
        """
        if self._merged:
            return self.full

        ancestors: list[Command] = []
        command.visit_parents(ancestors.append)
        root = ancestors[-1] if ancestors else command
        if root.default_flags is not None:
            root.persistent_flags().add_flag_set(root.default_flags.flags)

        inherited = self.inherited
        for ancestor in ancestors:
            inherited.add_flag_set(ancestor.persistent_flags())

        full = self.full
        full.add_flag_set(self.local)
        full.add_flag_set(self.persistent)
        full.add_flag_set(inherited)
        self._merged = True
        logger.debug(
            "[FlagScope:%s] Merged %d local, %d persistent, %d inherited flag(s).",
            self.name,
            len(self.local.flags),
            len(self.persistent.flags),
            len(inherited.flags),
        )
        return full

    def __str__(self) -> str:
        return f"FlagScope(name={self.name!r}, merged={self._merged})"
