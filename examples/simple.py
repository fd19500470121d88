import random

from cmdtree import Command, DefaultFlagRegistry
from cmdtree.args import exact_args, no_args
from cmdtree.utils import setup_logging

setup_logging(log_filename=None)


def connect(command: Command, args: list[str]) -> None:
    if command.flags().get("verbose"):
        command.get_streams().println(f"connecting for {command.command_path()}")


def deploy(command: Command, args: list[str]) -> None:
    region = command.flags().get("region")
    if random.random() < 0.1:
        raise RuntimeError("Random failure!")
    command.get_streams().println(f"Deployed {args[0]} to {region}")


def status(command: Command, args: list[str]) -> None:
    command.get_streams().println("all services healthy")


root = Command(
    use="ops",
    short="Operate the demo services",
    version="0.1.0",
    default_flags=DefaultFlagRegistry.with_help(),
    global_pre_run=connect,
)
root.persistent_flags().add_flag("--verbose", "-V", action="store_true", usage="verbose output")

deploy_cmd = Command(
    use="deploy SERVICE",
    aliases=["d"],
    short="Deploy a service",
    example="  ops deploy api --region eu-west-1",
    args=exact_args(1),
    run=deploy,
)
deploy_cmd.local_flags().add_flag(
    "--region", "-r", choices=["us-east-1", "eu-west-1"], required=True, usage="target region"
)

status_cmd = Command(use="status", short="Show service health", args=no_args, run=status)

root.add_command(deploy_cmd, status_cmd)

if __name__ == "__main__":
    root.execute()
