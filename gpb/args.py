from typing import Iterable

from returns.result import Failure, Result, Success

from gpb.domain.entities import Arguments, ErrorKind, PipelineError
from gpb.types import BEEP_MODES, Beep, Cmd

PROJECT_FLAG = "-P"
SCP_OPTION = "-XGpb_Scp="
BEEP_OPTION = "-XGpb_Beep="

# compile only / unique compile, nothing gets linked
COMPILE_ONLY_FLAGS: Cmd = ("-c", "-u")

DEFAULT_BEEP: Beep = "bell"


def partition(argv: Iterable[str]) -> Result[Arguments, PipelineError]:
    """Splits the command line into build tool arguments and gpb options.

    Everything is forwarded in its original order except the scp and beep
    options. The project flag is forwarded and its value kept as well.
    """
    build_args: Cmd = ()
    project = ""
    destination = ""
    beep = DEFAULT_BEEP

    for arg in argv:
        if arg.startswith(PROJECT_FLAG):
            project = arg[len(PROJECT_FLAG) :]
            build_args += (arg,)
        elif arg.startswith(SCP_OPTION):
            destination = arg[len(SCP_OPTION) :]
        elif arg.startswith(BEEP_OPTION):
            beep = arg[len(BEEP_OPTION) :]
        else:
            build_args += (arg,)

    if beep not in BEEP_MODES:
        return Failure(
            PipelineError(
                ErrorKind.USAGE,
                f"invalid beep mode '{beep}', expected one of: {', '.join(BEEP_MODES)}",
            )
        )

    return Success(
        Arguments(
            build_args=build_args,
            project=project,
            destination=destination,
            beep=beep,  # type: ignore
        )
    )


def is_compile_only(build_args: Cmd) -> bool:
    return any(flag in build_args for flag in COMPILE_ONLY_FLAGS)
