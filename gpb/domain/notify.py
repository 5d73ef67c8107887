import shutil
import subprocess
import sys
from typing import Protocol

from gpb.domain.process import echo
from gpb.types import Beep

BEL = "\a"


class _NotifyConfig(Protocol):
    beep: Beep
    player: str
    sound: str
    verbose: bool


def _play_sound(config: _NotifyConfig) -> None:
    def report(message: str) -> None:
        if config.verbose:
            echo(f"notification skipped: {message}")

    if shutil.which(config.player) is None:
        report(f"'{config.player}' not found in PATH")
        return

    try:
        res = subprocess.run(
            (config.player, config.sound),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except (OSError, ValueError) as e:
        report(str(e))
        return
    if res.returncode != 0:
        report(f"'{config.player}' exited with code {res.returncode}")


def notify(config: _NotifyConfig) -> None:
    """Signals a finished milestone. Never fails the pipeline."""
    match config.beep:
        case "off":
            pass
        case "ansi":
            sys.stdout.write(BEL)
            sys.stdout.flush()
        case "bell":
            _play_sound(config)
