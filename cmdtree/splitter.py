# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Pure token helpers used while dispatching a command line.

`strip_flags` separates the positional tokens of an argument list from its
flags, using a command's merged flag set to know which flags take a value:

    flags: --verbose (store_true), --output (store)
    strip_flags(["--verbose", "--output", "file.txt", "run"], flags) == ["run"]

Rules, applied in one left-to-right pass:
- `--` ends the scan; only what came before it is considered.
- `--name` without `=` consumes the next token as its value unless `name` has
  a no-value default. If at most one token is left the scan stops.
- `-x` (exactly two characters, no `=`) behaves the same for shorthand `x`.
- Any other non-empty token not starting with `-` is positional.
- All remaining dash tokens (`--name=v`, `-x=v`, `-abc`, boolean flags) stand
  alone and are dropped.

Unknown flags are assumed to take a value. A value-taking flag at the end of
the list is not an error here; flag parsing reports it later.
"""
from __future__ import annotations

from cmdtree.flags import FlagSet


def has_no_opt_default(name: str, flags: FlagSet) -> bool:
    """Whether the long flag `name` can appear without a value."""
    flag = flags.lookup(name)
    if flag is None:
        return False
    return flag.has_no_opt_default


def short_has_no_opt_default(name: str, flags: FlagSet) -> bool:
    """Whether the shorthand flag `name[0]` can appear without a value."""
    if not name:
        return False
    flag = flags.short_lookup(name[0])
    if flag is None:
        return False
    return flag.has_no_opt_default


def _takes_value(token: str, flags: FlagSet) -> bool:
    if "=" in token:
        return False
    if token.startswith("--"):
        return not has_no_opt_default(token[2:], flags)
    if token.startswith("-") and len(token) == 2:
        return not short_has_no_opt_default(token[1:], flags)
    return False


def strip_flags(args: list[str], flags: FlagSet) -> list[str]:
    """Return the positional tokens of `args`, in order."""
    commands: list[str] = []
    index = 0
    while index < len(args):
        token = args[index]
        index += 1
        if token == "--":
            break
        if _takes_value(token, flags):
            if len(args) - index <= 1:
                break
            index += 1
            continue
        if token and not token.startswith("-"):
            commands.append(token)
    return commands


def args_minus_first(args: list[str], token: str) -> list[str]:
    """Remove only the first occurrence of `token` from `args`."""
    for index, arg in enumerate(args):
        if arg == token:
            return args[:index] + args[index + 1 :]
    return list(args)


def is_flag_arg(arg: str) -> bool:
    """Whether `arg` looks like a flag (`--name...` or `-x...`)."""
    return (len(arg) >= 3 and arg[1] == "-") or (
        len(arg) >= 2 and arg[0] == "-" and arg[1] != "-"
    )
