import io

import pytest

from cmdtree.annotations import BASH_COMP_ONE_REQUIRED_FLAG
from cmdtree.exceptions import FlagDefinitionError, FlagParseError
from cmdtree.flags import FlagAction, FlagSet, ParseErrorsAllowlist


@pytest.fixture
def flags():
    flag_set = FlagSet("test")
    flag_set.add_flag("--verbose", "-v", action="store_true", usage="verbose output")
    flag_set.add_flag("--quiet", "-q", action="store_true")
    flag_set.add_flag("--output", "-o", default="dist", usage="output directory")
    flag_set.add_flag("--port", "-p", type=int, default=8080)
    return flag_set


def test_defaults_before_parse(flags):
    assert flags.get("verbose") is False
    assert flags.get("output") == "dist"
    assert flags.get("port") == 8080
    assert not flags.parsed
    assert not flags.changed("output")


def test_interspersed_positionals(flags):
    flags.parse(["a", "--verbose", "b", "-o", "build", "c"])
    assert flags.args() == ["a", "b", "c"]
    assert flags.get("verbose") is True
    assert flags.get("output") == "build"
    assert flags.changed("output")
    assert flags.arg(1) == "b"
    assert flags.arg(5) == ""


def test_terminator_makes_the_rest_positional(flags):
    flags.parse(["x", "--", "--verbose", "-o"])
    assert flags.args() == ["x", "--verbose", "-o"]
    assert flags.get("verbose") is False


@pytest.mark.parametrize(
    "arguments",
    [
        ["--output=site"],
        ["--output", "site"],
        ["-o", "site"],
        ["-o=site"],
        ["-osite"],
    ],
)
def test_value_forms(flags, arguments):
    flags.parse(arguments)
    assert flags.get("output") == "site"


def test_bundled_shorthands(flags):
    flags.parse(["-vq"])
    assert flags.get("verbose") is True
    assert flags.get("quiet") is True


def test_bundled_shorthand_ending_in_value(flags):
    flags.parse(["-vp", "9000"])
    assert flags.get("verbose") is True
    assert flags.get("port") == 9000


def test_explicit_boolean_value(flags):
    flags.parse(["--verbose=false"])
    assert flags.get("verbose") is False
    assert flags.changed("verbose")


def test_store_false():
    flag_set = FlagSet()
    flag_set.add_flag("--color", action="store_false")
    assert flag_set.get("color") is True
    flag_set.parse(["--color"])
    assert flag_set.get("color") is False


def test_count_append_extend():
    flag_set = FlagSet()
    flag_set.add_flag("--verbose", "-v", action=FlagAction.COUNT)
    flag_set.add_flag("--tag", "-t", action="append", default=["base"])
    flag_set.add_flag("--label", action="extend")
    flag_set.parse(["-vvv", "--tag", "a", "-t", "b", "--label", "x,y", "--label", "z"])
    assert flag_set.get("verbose") == 3
    assert flag_set.get("tag") == ["a", "b"]
    assert flag_set.get("label") == ["x", "y", "z"]


def test_unknown_flags(flags):
    with pytest.raises(FlagParseError, match="unknown flag: --nope"):
        flags.parse(["--nope"])
    with pytest.raises(FlagParseError, match="unknown shorthand flag: 'x' in -x"):
        flags.parse(["-x"])


def test_unknown_flags_allowlisted(flags):
    flags.allowlist = ParseErrorsAllowlist(unknown_flags=True)
    flags.parse(["--nope", "value", "arg", "--other=1", "-x", "-v"])
    assert flags.args() == ["arg"]
    assert flags.get("verbose") is True


def test_missing_value(flags):
    with pytest.raises(FlagParseError, match="flag needs an argument: --output"):
        flags.parse(["--output"])


def test_bad_syntax(flags):
    with pytest.raises(FlagParseError, match="bad flag syntax"):
        flags.parse(["---verbose"])


def test_invalid_value_message(flags):
    with pytest.raises(FlagParseError) as excinfo:
        flags.parse(["--port", "abc"])
    assert 'invalid argument "abc" for "-p, --port" flag' in str(excinfo.value)


def test_choices():
    flag_set = FlagSet()
    flag_set.add_flag("--env", choices=["dev", "prod"])
    flag_set.parse(["--env", "prod"])
    assert flag_set.get("env") == "prod"
    with pytest.raises(FlagParseError):
        flag_set.parse(["--env", "staging"])


def test_invalid_definitions(flags):
    with pytest.raises(FlagDefinitionError):
        flags.add_flag("--verbose")
    with pytest.raises(FlagDefinitionError):
        flags.add_flag("--volume", "-v")
    with pytest.raises(FlagDefinitionError):
        flags.add_flag("verbose")
    with pytest.raises(FlagDefinitionError):
        flags.add_flag("--count", type=int, default="many")
    with pytest.raises(FlagDefinitionError):
        flags.add_flag("--mode", action="bogus")


def test_add_flag_set_keeps_first_definition(flags):
    other = FlagSet("other")
    other.add_flag("--output", usage="other output")
    other.add_flag("--dry-run", action="store_true")
    flags.add_flag_set(other)
    assert flags.lookup("output").usage == "output directory"
    assert flags.lookup("dry-run") is other.lookup("dry-run")


def test_sorted_and_insertion_order():
    flag_set = FlagSet(sort_flags=False)
    flag_set.add_flag("--zeta")
    flag_set.add_flag("--alpha")
    assert [flag.name for flag in flag_set.flags] == ["zeta", "alpha"]
    flag_set.sort_flags = True
    assert [flag.name for flag in flag_set.flags] == ["alpha", "zeta"]


def test_visit_only_set_flags(flags):
    flags.parse(["-v", "--port", "1"])
    seen = []
    flags.visit(lambda flag: seen.append(flag.name))
    assert seen == ["port", "verbose"]
    everything = []
    flags.visit_all(lambda flag: everything.append(flag.name))
    assert everything == ["output", "port", "quiet", "verbose"]


def test_mark_required_annotation(flags):
    flags.mark_required("output")
    flag = flags.lookup("output")
    assert flag.annotations[BASH_COMP_ONE_REQUIRED_FLAG] == ["true"]
    assert flag.required
    with pytest.raises(FlagDefinitionError):
        flags.mark_required("missing")


def test_deprecation_notices():
    output = io.StringIO()
    flag_set = FlagSet(output=output)
    flag_set.add_flag("--legacy", "-l", action="store_true", deprecated="use --modern")
    flag_set.add_flag("--mode", "-m")
    flag_set.mark_shorthand_deprecated("mode", "use --mode")
    flag_set.parse(["--legacy", "-m", "fast"])
    assert "Flag --legacy has been deprecated, use --modern" in output.getvalue()
    assert "Flag shorthand -m has been deprecated, use --mode" in output.getvalue()


def test_normalize_fn_rekeys_existing_flags():
    flag_set = FlagSet()
    flag_set.add_flag("--dry_run", action="store_true")
    flag_set.normalize_fn = lambda _, name: name.replace("_", "-")
    assert flag_set.lookup("dry-run") is not None
    flag_set.parse(["--dry-run"])
    assert flag_set.get("dry_run") is True


def test_set_and_values(flags):
    flags.set("output", "out")
    assert flags.values()["output"] == "out"
    assert flags.changed("output")
    with pytest.raises(FlagParseError):
        flags.set("missing", "x")
    with pytest.raises(FlagDefinitionError):
        flags.get("missing")


def test_boolean_flags_can_be_required(flags):
    force = flags.add_flag("--force", action="store_true", required=True)
    assert force.required
    assert force.value is False


def test_reset_restores_defaults(flags):
    flags.parse(["pos", "-v", "--output", "out", "--port", "1"])
    flags.reset()
    assert flags.get("verbose") is False
    assert flags.get("output") == "dist"
    assert flags.get("port") == 8080
    assert not flags.changed("output")
    assert not flags.parsed
    assert flags.args() == []
    seen = []
    flags.visit(lambda flag: seen.append(flag.name))
    assert seen == []
