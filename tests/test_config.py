import io
import textwrap

import pytest
from pydantic import ValidationError

from cmdtree.args import PositionalArgs
from cmdtree.config import loader, resolve_args_validator
from cmdtree.defaults import DefaultFlagRegistry
from cmdtree.exceptions import PositionalArgsError
from cmdtree.streams import Streams

HOOKS = textwrap.dedent(
    """
    calls = []


    def build(command, args):
        calls.append(("build", command.flags().get("output"), args))


    def setup(command, args):
        calls.append(("setup", command.name, args))
    """
)


@pytest.fixture
def hooks_module(tmp_path, monkeypatch):
    (tmp_path / "cmdtree_test_hooks.py").write_text(HOOKS)
    monkeypatch.syspath_prepend(str(tmp_path))
    import cmdtree_test_hooks

    cmdtree_test_hooks.calls.clear()
    return cmdtree_test_hooks


def write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(textwrap.dedent(content))
    return path


def test_yaml_tree(tmp_path, hooks_module):
    path = write(
        tmp_path,
        "cmdtree.yaml",
        """
        use: app
        short: Example application
        global_pre_run: cmdtree_test_hooks:setup
        flags:
          - name: verbose
            shorthand: v
            action: store_true
            persistent: true
        commands:
          - use: build TARGET
            aliases: [b]
            run: cmdtree_test_hooks.build
            args: exact_args:1
            flags:
              - name: output
                shorthand: o
                default: dist
                usage: output directory
        """,
    )
    root = loader(path)
    assert root.name == "app"
    assert root.persistent_flags().lookup("verbose") is not None
    build = root.commands()[0]
    assert build.aliases == ["b"]
    assert build.local_flags().lookup("output").default == "dist"

    root.execute(["b", "api", "-v", "-o", "site"])
    assert hooks_module.calls == [
        ("setup", "build", ["api"]),
        ("build", "site", ["api"]),
    ]


def test_toml_tree_and_required_flags(tmp_path, hooks_module):
    path = write(
        tmp_path,
        "cmdtree.toml",
        """
        use = "app"
        silence_errors = true
        silence_usage = true

        [[commands]]
        use = "build"
        run = "cmdtree_test_hooks:build"

        [[commands.flags]]
        name = "output"
        required = true

        [[commands.flags]]
        name = "jobs"
        type = "int"
        default = 4
        """,
    )
    root = loader(path)
    build = root.commands()[0]
    assert build.flags().get("jobs") == 4
    assert build.flags().lookup("output").required
    root.streams = Streams(out=io.StringIO(), err=io.StringIO())
    root.execute(["build", "--output", "out"])
    assert hooks_module.calls == [("build", "out", [])]


def test_included_config(tmp_path, hooks_module):
    write(
        tmp_path,
        "remote.yaml",
        """
        use: remote
        commands:
          - use: add
            run: cmdtree_test_hooks:setup
        """,
    )
    path = write(
        tmp_path,
        "cmdtree.yaml",
        """
        use: app
        commands:
          - config: remote.yaml
        """,
    )
    root = loader(path, default_flags=DefaultFlagRegistry.with_help())
    assert root.default_flags is not None
    remote = root.commands()[0]
    assert remote.path() == "app remote"
    assert remote.default_flags is None
    root.execute(["remote", "add", "origin"])
    assert hooks_module.calls == [("setup", "add", ["origin"])]


def test_self_including_config_is_stopped(tmp_path):
    path = write(
        tmp_path,
        "loop.yaml",
        """
        use: loop
        commands:
          - config: loop.yaml
        """,
    )
    with pytest.raises(ValueError, match="Maximum config depth"):
        loader(path)


def test_invalid_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        loader(tmp_path / "missing.yaml")
    with pytest.raises(ValueError, match="Unsupported config format"):
        loader(write(tmp_path, "app.json", "{}"))
    with pytest.raises(ValueError, match="command mapping"):
        loader(write(tmp_path, "list.yaml", "- use: app\n"))
    with pytest.raises(ValidationError):
        loader(write(tmp_path, "empty.yaml", "short: no use\n"))
    with pytest.raises(ValidationError):
        loader(
            write(
                tmp_path,
                "badtype.yaml",
                """
                use: app
                flags:
                  - name: size
                    type: complex
                """,
            )
        )


def test_unresolvable_hook(tmp_path):
    path = write(tmp_path, "app.yaml", "use: app\nrun: cmdtree_no_such_module:run\n")
    with pytest.raises(ImportError):
        loader(path)


@pytest.mark.parametrize(
    "form, accepted, rejected",
    [
        ("no_args", [], ["x"]),
        ("exact_args:2", ["a", "b"], ["a"]),
        ("minimum_n_args:1", ["a"], []),
        ("maximum_n_args:1", [], ["a", "b"]),
        ("range_args:1:2", ["a"], ["a", "b", "c"]),
    ],
)
def test_resolve_args_validator(form, accepted, rejected):
    from cmdtree.command import Command

    validator: PositionalArgs = resolve_args_validator(form)
    command = Command(use="x")
    validator(command, accepted)
    with pytest.raises(PositionalArgsError):
        validator(command, rejected)


@pytest.mark.parametrize("form", ["bogus", "exact_args", "exact_args:x", "no_args:1"])
def test_resolve_args_validator_rejects_bad_forms(form):
    with pytest.raises(ValueError):
        resolve_args_validator(form)
