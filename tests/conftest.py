"""
Shared fixtures.
External tools are never executed: PATH lookups and child processes are faked.
"""

import dataclasses
import shutil
import subprocess

import pytest

from gpb.domain.config import DEFAULT_SETTINGS
from gpb.domain.context import PipelineContext


class FakeTools:
    """Stands in for shutil.which and subprocess.run, records every command."""

    def __init__(self):
        self.calls: list[tuple[str, ...]] = []
        self.returncodes: dict[str, int] = {}
        self.outputs: dict[str, str] = {}
        self.missing: set[str] = set()

    def which(self, name):
        return None if name in self.missing else f"/usr/bin/{name}"

    def run(self, cmd, **kwargs):
        cmd = tuple(cmd)
        self.calls.append(cmd)
        stdout = (
            self.outputs.get(cmd[0], "")
            if kwargs.get("stdout") == subprocess.PIPE
            else None
        )
        return subprocess.CompletedProcess(cmd, self.returncodes.get(cmd[0], 0), stdout)

    @property
    def tools(self) -> list[str]:
        return [cmd[0] for cmd in self.calls]


@pytest.fixture
def fake_tools(monkeypatch, tmp_path):
    tools = FakeTools()
    monkeypatch.setattr(shutil, "which", tools.which)
    monkeypatch.setattr(subprocess, "run", tools.run)
    # keep real config files out of the tests
    monkeypatch.delenv("GPB_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return tools


@pytest.fixture
def make_context():
    base = PipelineContext(
        build_args=(),
        project="",
        destination="",
        beep="off",
        **DEFAULT_SETTINGS,
    )

    def make(**changes) -> PipelineContext:
        return dataclasses.replace(base, **changes)

    return make
