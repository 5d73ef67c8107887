import sys

from returns.pipeline import is_successful
from returns.unsafe import unsafe_perform_io

from gpb.commands import deliver
from gpb.domain.entities import ErrorKind, PipelineError
from gpb.domain.process import printable


def report_error(error: PipelineError) -> None:
    print(f"[gpb] Error: {printable(str(error))}", file=sys.stderr, flush=True)


def gpb(argv: list[str]) -> int:
    result = unsafe_perform_io(deliver(argv))
    if is_successful(result):
        return result.unwrap()
    error = result.failure()
    report_error(error)
    return error.exit_code


def main():
    try:
        code = gpb(sys.argv[1:])
    except KeyboardInterrupt:
        code = 130
    except Exception as e:
        error = PipelineError(ErrorKind.INTERNAL, f"internal error: {e!r}")
        report_error(error)
        code = error.exit_code
    sys.exit(code)


if __name__ == "__main__":
    main()
