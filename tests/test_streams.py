import io
import sys

from cmdtree.command import Command
from cmdtree.streams import Streams


def test_defaults_follow_sys_streams(monkeypatch):
    streams = Streams()
    fake_out = io.StringIO()
    monkeypatch.setattr(sys, "stdout", fake_out)
    assert streams.out is fake_out
    assert streams.err is sys.stderr
    assert streams.in_ is sys.stdin


def test_print_helpers():
    out, err = io.StringIO(), io.StringIO()
    streams = Streams(out=out, err=err)
    streams.print("a", "b")
    streams.println("c")
    streams.printf("%s=%d\n", "x", 1)
    streams.print_err("e")
    streams.print_errln("f")
    streams.print_errf("%d%%\n", 50)
    assert out.getvalue() == "abc\nx=1\n"
    assert err.getvalue() == "ef\n50%\n"


def test_setters():
    streams = Streams()
    buffer = io.StringIO()
    streams.set_out(buffer)
    streams.set_err(buffer)
    streams.set_in(io.StringIO("input"))
    assert streams.out is buffer
    assert streams.err is buffer
    assert streams.in_.read() == "input"
    streams.set_out(None)
    assert streams.out is sys.stdout


def test_console_writes_to_stream():
    out = io.StringIO()
    Streams(out=out).console().print("[bold]hi[/bold]")
    assert out.getvalue() == "hi\n"


def test_commands_use_nearest_streams():
    root = Command(use="app")
    child = Command(use="child")
    root.add_command(child)
    out = io.StringIO()
    root.set_output_stream(out)
    assert child.get_streams() is root.streams
    child.set_error_stream(io.StringIO())
    assert child.get_streams() is child.streams
    assert child.get_streams().out is sys.stdout
