from pathlib import Path
import time
from typing import Protocol

from returns.context import RequiresContextIOResult
from returns.io import impure_safe
from returns.maybe import Maybe, Nothing, Some
from returns.unsafe import unsafe_perform_io

from gpb.args import is_compile_only
from gpb.domain.entities import CommandResult, Delivery, PipelineError
from gpb.domain.notify import notify
from gpb.domain.process import echo, run_command, run_tool
from gpb.types import Beep, Cmd


class _StageConfig(Protocol):
    build_args: Cmd
    project: str
    destination: str
    beep: Beep

    builder: str
    locator: str
    scp: str
    player: str
    sound: str
    verbose: bool


def display_path(destination: str, artifact: Path) -> str:
    sep = "" if destination.endswith(("/", ":")) else "/"
    return f"{destination}{sep}{artifact.name}"


def transfer_rate(size: int, elapsed: float) -> int:
    """KB/s, with transfers faster than a second counted as one second."""
    return size // max(1, int(elapsed)) // 1000


def _file_size(path: Path) -> int:
    return unsafe_perform_io(
        impure_safe(lambda: path.stat().st_size)().value_or(0)
    )


def build() -> RequiresContextIOResult[CommandResult, PipelineError, _StageConfig]:
    def inner(config: _StageConfig):
        echo(f"Building: {' '.join((config.builder, *config.build_args))}")
        return run_tool((config.builder, *config.build_args), "build failed").map(
            lambda res: _notified(config, res)
        )

    return (
        RequiresContextIOResult[CommandResult, PipelineError, _StageConfig]
        .ask()
        .bind(inner)
    )


def locate(
    _: CommandResult,
) -> RequiresContextIOResult[Maybe[Path], PipelineError, _StageConfig]:
    """Asks the locator for the artifact path. Nothing if there is no artifact."""

    def inner(config: _StageConfig):
        if is_compile_only(config.build_args):
            return RequiresContextIOResult.from_value(Nothing)
        return run_tool(
            (config.locator, config.project), "cannot locate artifact", capture=True
        ).map(_artifact_path)

    return (
        RequiresContextIOResult[Maybe[Path], PipelineError, _StageConfig]
        .ask()
        .bind(inner)
    )


def _artifact_path(res: CommandResult) -> Maybe[Path]:
    path = (res.stdout or "").strip()
    if not path:
        return Nothing
    return Some(Path(path))


def _copy(
    path: Path,
) -> RequiresContextIOResult[Maybe[Delivery], PipelineError, _StageConfig]:
    def inner(config: _StageConfig):
        display = display_path(config.destination, path)
        echo(f"Copying: {path} -> {display}")
        start = time.monotonic()
        return run_command(
            (config.scp, "-q", str(path), config.destination),
            f"copy to {display} failed",
        ).map(lambda _: _delivered(config, path, display, start))

    return (
        RequiresContextIOResult[Maybe[Delivery], PipelineError, _StageConfig]
        .ask()
        .bind(inner)
    )


def _delivered(
    config: _StageConfig, path: Path, display: str, start: float
) -> Maybe[Delivery]:
    rate = transfer_rate(_file_size(path), time.monotonic() - start)
    notify(config)
    echo(f"Copied {path} to {display} ({rate} KB/s)")
    return Some(Delivery(artifact=path, display=display, rate=rate))


def deliver(
    artifact: Maybe[Path],
) -> RequiresContextIOResult[Maybe[Delivery], PipelineError, _StageConfig]:
    def inner(config: _StageConfig):
        if not config.destination:
            return RequiresContextIOResult.from_value(Nothing)
        return artifact.map(_copy).value_or(RequiresContextIOResult.from_value(Nothing))

    return (
        RequiresContextIOResult[Maybe[Delivery], PipelineError, _StageConfig]
        .ask()
        .bind(inner)
    )


def _notified(config: _StageConfig, res: CommandResult) -> CommandResult:
    notify(config)
    return res
