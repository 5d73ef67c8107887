import os
import shutil
import subprocess
from typing import Protocol

from returns.context import RequiresContextIOResult
from returns.io import IOFailure, IOResult, IOSuccess

from gpb.domain.entities import (
    CommandResult,
    PipelineError,
    external_failure,
    tool_not_found,
)
from gpb.types import Cmd


class _ProcessConfig(Protocol):
    verbose: bool


def printable(message: str) -> str:
    # paths from the locator may carry undecodable bytes as surrogates
    return os.fsencode(message).decode(errors="replace")


def echo(message: str) -> None:
    print(f"[gpb] {printable(message)}", flush=True)


def require_tool(tool: str) -> IOResult[str, PipelineError]:
    path = shutil.which(tool)
    if path is None:
        return IOFailure(tool_not_found(tool))
    return IOSuccess(path)


def run_command(
    cmd: Cmd, description: str, capture: bool = False
) -> RequiresContextIOResult[CommandResult, PipelineError, _ProcessConfig]:
    """Runs one external command and waits for it.

    A non-zero exit status becomes an external failure described by
    `description`, with the exit status attached.
    """

    def inner(config: _ProcessConfig) -> IOResult[CommandResult, PipelineError]:
        if config.verbose:
            echo(f"$ {' '.join(cmd)}")
        try:
            res = subprocess.run(
                cmd,
                stdout=subprocess.PIPE if capture else None,
                text=True,
                errors="surrogateescape",
            )
        except FileNotFoundError:
            return IOFailure(tool_not_found(cmd[0]))
        if res.returncode != 0:
            return IOFailure(external_failure(description, res.returncode))
        return IOSuccess(CommandResult(cmd, res.returncode, res.stdout))

    return RequiresContextIOResult(inner)


def run_tool(
    cmd: Cmd, description: str, capture: bool = False
) -> RequiresContextIOResult[CommandResult, PipelineError, _ProcessConfig]:
    """Same as `run_command`, but the executable must be in PATH beforehand."""
    return RequiresContextIOResult.from_ioresult(require_tool(cmd[0])).bind(
        lambda _: run_command(cmd, description, capture)
    )
