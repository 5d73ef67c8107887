from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from gpb.types import Beep, Cmd


@dataclass(frozen=True)
class Arguments:
    build_args: Cmd
    project: str
    destination: str
    beep: Beep


@dataclass(frozen=True)
class CommandResult:
    command: Cmd
    returncode: int
    stdout: str | None = None


@dataclass(frozen=True)
class Delivery:
    artifact: Path
    display: str
    rate: int


class ErrorKind(Enum):
    TOOL_NOT_FOUND = "tool not found"
    EXTERNAL_FAILURE = "external failure"
    CONFIG = "configuration"
    USAGE = "usage"
    INTERNAL = "internal"


@dataclass(frozen=True)
class PipelineError:
    """Failure value carried through the pipeline instead of an exception."""

    kind: ErrorKind
    message: str
    code: int | None = None

    @property
    def exit_code(self) -> int:
        if self.kind is ErrorKind.EXTERNAL_FAILURE and self.code:
            # negative codes mean the child was killed by a signal
            return 128 - self.code if self.code < 0 else self.code
        return 1

    def __str__(self) -> str:
        if self.code is not None:
            return f"{self.message} (code={self.code})"
        return self.message


def tool_not_found(tool: str) -> PipelineError:
    return PipelineError(ErrorKind.TOOL_NOT_FOUND, f"'{tool}' not found in PATH")


def external_failure(what: str, code: int) -> PipelineError:
    return PipelineError(ErrorKind.EXTERNAL_FAILURE, what, code)
