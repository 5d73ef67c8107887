"""
Tests for running external commands.
"""

import os
import subprocess

from returns.pipeline import is_successful
from returns.unsafe import unsafe_perform_io

from gpb.domain.entities import ErrorKind
from gpb.domain.process import printable, require_tool, run_command, run_tool


def test_require_tool(fake_tools):
    assert unsafe_perform_io(require_tool("gprbuild")).unwrap() == "/usr/bin/gprbuild"

    fake_tools.missing.add("gprbuild")
    result = unsafe_perform_io(require_tool("gprbuild"))
    assert result.failure().kind is ErrorKind.TOOL_NOT_FOUND
    assert "gprbuild" in str(result.failure())


def test_run_command_captures_output(fake_tools, make_context):
    fake_tools.outputs["gprlocate"] = "/tmp/out/bin\n"
    res = unsafe_perform_io(
        run_command(("gprlocate", "foo.gpr"), "locate", capture=True)(make_context())
    ).unwrap()
    assert res.returncode == 0
    assert res.stdout == "/tmp/out/bin\n"


def test_run_command_without_capture(fake_tools, make_context):
    res = unsafe_perform_io(
        run_command(("gprbuild",), "build")(make_context())
    ).unwrap()
    assert res.stdout is None


def test_run_command_failure_keeps_code(fake_tools, make_context):
    fake_tools.returncodes["gprbuild"] = 4
    result = unsafe_perform_io(
        run_command(("gprbuild", "-Pfoo.gpr"), "build failed")(make_context())
    )
    error = result.failure()
    assert error.kind is ErrorKind.EXTERNAL_FAILURE
    assert error.code == 4
    assert error.exit_code == 4
    assert str(error) == "build failed (code=4)"


def test_run_command_signal_exit_code(fake_tools, make_context):
    fake_tools.returncodes["scp"] = -9
    error = unsafe_perform_io(run_command(("scp",), "copy")(make_context())).failure()
    assert error.exit_code == 137


def test_run_command_missing_executable(monkeypatch, make_context):
    def run(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(subprocess, "run", run)
    error = unsafe_perform_io(run_command(("scp",), "copy")(make_context())).failure()
    assert error.kind is ErrorKind.TOOL_NOT_FOUND


def test_run_tool_checks_path_first(fake_tools, make_context):
    fake_tools.missing.add("gprbuild")
    result = unsafe_perform_io(run_tool(("gprbuild",), "build")(make_context()))
    assert not is_successful(result)
    assert result.failure().kind is ErrorKind.TOOL_NOT_FOUND
    assert fake_tools.calls == []


def test_verbose_echoes_commands(fake_tools, make_context, capsys):
    unsafe_perform_io(
        run_command(("gprbuild", "-Pfoo.gpr"), "build")(make_context(verbose=True))
    )
    assert "[gpb] $ gprbuild -Pfoo.gpr" in capsys.readouterr().out


def test_run_command_keeps_undecodable_bytes(monkeypatch, make_context):
    def run(cmd, **kwargs):
        stdout = b"/tmp/out/caf\xe9\n".decode("utf-8", kwargs.get("errors", "strict"))
        return subprocess.CompletedProcess(cmd, 0, stdout)

    monkeypatch.setattr(subprocess, "run", run)
    res = unsafe_perform_io(
        run_command(("gprlocate", "foo.gpr"), "locate", capture=True)(make_context())
    ).unwrap()
    assert os.fsencode(res.stdout) == b"/tmp/out/caf\xe9\n"


def test_printable_replaces_undecodable_bytes():
    assert printable("caf\udce9") == "caf�"
    assert printable("plain") == "plain"
