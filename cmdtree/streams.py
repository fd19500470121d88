# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Input, output and error streams of a command.

Each stream falls back to the matching `sys` stream until one is set, so a
command tree writes to the terminal by default and to any file-like object
(an `io.StringIO` in tests) once configured. Commands without their own
`Streams` use their nearest ancestor's.
"""
from __future__ import annotations

import sys
from typing import Any, TextIO

from rich.console import Console

from cmdtree.themes import get_nord_theme


class Streams:
    """The in/out/err streams used by a command tree."""

    def __init__(
        self,
        in_: TextIO | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self._in = in_
        self._out = out
        self._err = err

    @property
    def in_(self) -> TextIO:
        return self._in if self._in is not None else sys.stdin

    def set_in(self, in_: TextIO | None) -> None:
        self._in = in_

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def set_out(self, out: TextIO | None) -> None:
        self._out = out

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def set_err(self, err: TextIO | None) -> None:
        self._err = err

    def print(self, *values: Any) -> None:
        print(*values, sep="", end="", file=self.out)

    def println(self, *values: Any) -> None:
        print(*values, file=self.out)

    def printf(self, template: str, *values: Any) -> None:
        self.print(template % values if values else template)

    def print_err(self, *values: Any) -> None:
        print(*values, sep="", end="", file=self.err)

    def print_errln(self, *values: Any) -> None:
        print(*values, file=self.err)

    def print_errf(self, template: str, *values: Any) -> None:
        self.print_err(template % values if values else template)

    def console(self, stderr: bool = False) -> Console:
        """A rich console writing to the output (or error) stream."""
        return Console(
            file=self.err if stderr else self.out,
            theme=get_nord_theme(),
            highlight=False,
        )

    def __str__(self) -> str:
        return f"Streams(in={self.in_!r}, out={self.out!r}, err={self.err!r})"
