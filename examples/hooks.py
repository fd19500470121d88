"""Hooks referenced by cmdtree.yaml."""

from cmdtree import Command


def build(command: Command, args: list[str]) -> None:
    output = command.flags().get("output")
    command.get_streams().println(f"building {', '.join(args)} into {output}")


def clean(command: Command, args: list[str]) -> None:
    command.get_streams().println("cleaned")


def announce(command: Command, args: list[str]) -> None:
    if command.flags().get("verbose"):
        command.get_streams().println(f"running {command.command_path()}")
