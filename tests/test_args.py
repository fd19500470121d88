import pytest

from cmdtree.args import (
    arbitrary_args,
    exact_args,
    match_all,
    maximum_n_args,
    minimum_n_args,
    no_args,
    only_valid_args,
    range_args,
)
from cmdtree.command import Command
from cmdtree.exceptions import PositionalArgsError


@pytest.fixture
def command():
    root = Command(use="app")
    child = Command(
        use="paint COLOR",
        valid_args=["red\tA warm color", "blue"],
        arg_aliases=["crimson"],
    )
    root.add_command(child)
    return child


def test_no_args(command):
    no_args(command, [])
    with pytest.raises(PositionalArgsError, match='unknown command "x" for "app paint"'):
        no_args(command, ["x"])


def test_arbitrary_args(command):
    arbitrary_args(command, [])
    arbitrary_args(command, ["a", "b", "c"])


def test_only_valid_args(command):
    only_valid_args(command, ["red", "blue", "crimson"])
    with pytest.raises(PositionalArgsError, match='invalid argument "green" for "app paint"'):
        only_valid_args(command, ["red", "green"])


def test_only_valid_args_without_valid_args_accepts_anything():
    only_valid_args(Command(use="free"), ["whatever"])


@pytest.mark.parametrize(
    "validator, accepted, rejected, message",
    [
        (minimum_n_args(2), ["a", "b", "c"], ["a"], "requires at least 2 arg(s), only received 1"),
        (maximum_n_args(1), ["a"], ["a", "b"], "accepts at most 1 arg(s), received 2"),
        (exact_args(2), ["a", "b"], ["a"], "accepts 2 arg(s), received 1"),
        (range_args(1, 2), ["a", "b"], [], "accepts between 1 and 2 arg(s), received 0"),
    ],
)
def test_counting_validators(command, validator, accepted, rejected, message):
    validator(command, accepted)
    with pytest.raises(PositionalArgsError) as excinfo:
        validator(command, rejected)
    assert str(excinfo.value) == message


def test_match_all_stops_at_first_failure(command):
    validator = match_all(exact_args(1), only_valid_args)
    validator(command, ["blue"])
    with pytest.raises(PositionalArgsError, match="accepts 1 arg"):
        validator(command, ["green", "red"])
    with pytest.raises(PositionalArgsError, match="invalid argument"):
        validator(command, ["green"])


def test_validator_runs_during_execute():
    calls = []
    command = Command(
        use="paint",
        args=exact_args(1),
        run=lambda command, args: calls.append(args),
        silence_errors=True,
        silence_usage=True,
    )
    with pytest.raises(PositionalArgsError):
        command.execute([])
    command.execute(["red"])
    assert calls == [["red"]]
