"""
cmdtree CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import os
import sys
from pathlib import Path
from typing import Any

from cmdtree.command import Command
from cmdtree.config import loader
from cmdtree.defaults import DefaultFlagRegistry
from cmdtree.exceptions import CmdTreeError
from cmdtree.version import __version__


def find_cmdtree_config() -> Path | None:
    candidates = [
        Path.cwd() / "cmdtree.yaml",
        Path.cwd() / "cmdtree.toml",
        Path.cwd() / ".cmdtree.yaml",
        Path.cwd() / ".cmdtree.toml",
        Path(os.environ.get("CMDTREE_CONFIG", "cmdtree.yaml")),
        Path.home() / ".config" / "cmdtree" / "cmdtree.yaml",
        Path.home() / ".config" / "cmdtree" / "cmdtree.toml",
    ]
    return next((p for p in candidates if p.is_file()), None)


def bootstrap() -> Path | None:
    config_path = find_cmdtree_config()
    if config_path and str(config_path.parent) not in sys.path:
        sys.path.insert(0, str(config_path.parent))
    return config_path


def show_missing_config(command: Command, args: list[str]) -> None:
    command.print_help()


def main(argv: list[str] | None = None) -> Any:
    registry = DefaultFlagRegistry.with_help()
    config_path = bootstrap()
    if config_path:
        root = loader(config_path, default_flags=registry)
    else:
        root = Command(
            use="cmdtree",
            short="Run a command tree described by a config file",
            long=(
                "No cmdtree.yaml or cmdtree.toml was found.\n"
                "Create one in the current directory or point CMDTREE_CONFIG at it."
            ),
            version=__version__,
            default_flags=registry,
            run=show_missing_config,
        )
    try:
        root.execute(sys.argv[1:] if argv is None else argv)
    except CmdTreeError:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
