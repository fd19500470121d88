import pytest

from cmdtree.args import arbitrary_args
from cmdtree.command import Command
from cmdtree.dispatcher import Dispatcher
from cmdtree.exceptions import UnknownCommandError


def noop(command, args):
    pass


@pytest.fixture
def root():
    root = Command(use="app")
    root.persistent_flags().add_flag("--output", "-o")
    build = Command(use="build", aliases=["b"], run=noop)
    build.local_flags().add_flag("--flag", action="store_true")
    remote = Command(use="remote")
    remote.add_command(Command(use="add", run=noop), Command(use="remove", run=noop))
    root.add_command(build, remote, Command(use="secret", hidden=True, run=noop))
    return root


def child(command, name):
    return next(c for c in command.commands() if c.name == name)


def test_alias_dispatch(root):
    command, args = Dispatcher(root).find(["b", "--flag"])
    assert command is child(root, "build")
    assert args == ["--flag"]
    assert command.called_as.name == "b"


def test_nested_dispatch_keeps_remaining_args(root):
    command, args = Dispatcher(root).find(["remote", "add", "origin", "url"])
    assert command.path() == "app remote add"
    assert args == ["origin", "url"]


def test_flag_values_are_not_commands(root):
    command, args = Dispatcher(root).find(["--output", "build", "remote", "add"])
    assert command.path() == "app remote add"
    assert args == ["--output", "build"]


def test_called_as_reset_between_dispatches(root):
    dispatcher = Dispatcher(root)
    dispatcher.find(["b"])
    build = child(root, "build")
    assert build.called_as.name == "b"
    dispatcher.find(["remote"])
    assert build.called_as.name == ""


def test_empty_args_resolve_to_root(root):
    command, args = Dispatcher(root).find([])
    assert command is root
    assert args == []


def test_unmatched_token_belongs_to_runnable_command(root):
    command, args = Dispatcher(root).find(["build", "extra", "--flag"])
    assert command is child(root, "build")
    assert args == ["extra", "--flag"]


def test_unknown_command_with_suggestions(root):
    with pytest.raises(UnknownCommandError) as excinfo:
        Dispatcher(root).find(["biuld"])
    error = excinfo.value
    assert error.suggestions == ["build"]
    assert error.command is root
    assert str(error).startswith('unknown command "biuld" for "app"')
    assert "Did you mean this?\n\tbuild\n" in str(error)


def test_unknown_nested_command(root):
    with pytest.raises(UnknownCommandError) as excinfo:
        Dispatcher(root).find(["remote", "rm"])
    assert excinfo.value.command_path == "app remote"


def test_hidden_commands_are_never_suggested(root):
    with pytest.raises(UnknownCommandError) as excinfo:
        Dispatcher(root).find(["secrets"])
    assert excinfo.value.suggestions == []


def test_suggestions_can_be_disabled(root):
    root.disable_suggestions = True
    with pytest.raises(UnknownCommandError) as excinfo:
        Dispatcher(root).find(["biuld"])
    assert excinfo.value.suggestions == []
    assert "Did you mean" not in str(excinfo.value)


def test_args_validator_skips_unknown_command_check(root):
    root.args = arbitrary_args
    command, args = Dispatcher(root).find(["anything"])
    assert command is root
    assert args == ["anything"]


def test_traverse_parses_parent_flags():
    root = Command(use="app", traverse_children=True)
    root.local_flags().add_flag("--region", "-r")
    root.local_flags().add_flag("--dry-run", action="store_true")
    deploy = Command(use="deploy", run=noop)
    deploy.local_flags().add_flag("--region", "-r")
    root.add_command(deploy)

    command, args = Dispatcher(root).traverse(
        ["--region", "eu", "--dry-run", "deploy", "-r", "us", "api"]
    )
    assert command is deploy
    assert args == ["-r", "us", "api"]
    assert root.flags().get("region") == "eu"
    assert root.flags().get("dry-run") is True
    assert deploy.flags().get("region") is None


def test_traverse_stops_at_unknown_token():
    root = Command(use="app", run=noop)
    root.add_command(Command(use="deploy", run=noop))
    command, args = Dispatcher(root).traverse(["nothing", "deploy"])
    assert command is root
    assert args == ["nothing", "deploy"]
