import os
from dataclasses import dataclass
from typing import Iterable

from returns.io import IOResult

from gpb.args import partition
from gpb.domain.config import load_settings
from gpb.domain.entities import PipelineError
from gpb.types import Beep, Cmd


@dataclass(frozen=True)
class PipelineContext:
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

    @classmethod
    def create(
        cls, argv: Iterable[str], environ=os.environ
    ) -> IOResult["PipelineContext", PipelineError]:
        return IOResult.from_result(partition(argv)).bind(
            lambda args: load_settings(environ).map(
                lambda settings: cls(
                    build_args=args.build_args,
                    project=args.project,
                    destination=args.destination,
                    beep=args.beep,
                    **settings,
                )
            )
        )
