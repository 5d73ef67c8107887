import os
from typing import Iterable

from returns.io import IOResult

from gpb.domain import stages
from gpb.domain.context import PipelineContext
from gpb.domain.entities import PipelineError


def deliver(argv: Iterable[str], environ=os.environ) -> IOResult[int, PipelineError]:
    """Build, locate the artifact, copy it if a destination was given."""
    return (
        PipelineContext.create(argv, environ)
        .bind(
            lambda context: stages.build()
            .bind(stages.locate)
            .bind(stages.deliver)(context)
        )
        .map(lambda _: 0)
    )
