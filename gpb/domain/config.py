import os
from pathlib import Path
from typing import Any, TypedDict

import toml
from returns.io import IOFailure, IOResult, IOSuccess, impure_safe

from gpb.domain.entities import ErrorKind, PipelineError

CONFIG_ENV = "GPB_CONFIG"
CONFIG_NAME = "gpb.toml"


class Settings(TypedDict):
    builder: str
    locator: str
    scp: str
    player: str
    sound: str
    verbose: bool


DEFAULT_SETTINGS = Settings(
    builder="gprbuild",
    locator="gprlocate",
    scp="scp",
    player="paplay",
    sound="/usr/share/sounds/freedesktop/stereo/complete.oga",
    verbose=False,
)


def config_paths() -> tuple[Path, ...]:
    return (
        Path.cwd() / CONFIG_NAME,
        Path.home() / ".config" / "gpb" / CONFIG_NAME,
    )


@impure_safe
def load_config_file(config_path: Path) -> dict[str, Any]:
    return toml.loads(config_path.read_text())


def _config_error(config_path: Path, message: str) -> PipelineError:
    return PipelineError(ErrorKind.CONFIG, f"{config_path}: {message}")


def parse_settings(
    config_path: Path, config: dict[str, Any]
) -> IOResult[Settings, PipelineError]:
    table = config.get("gpb", {})
    if not isinstance(table, dict):
        return IOFailure(_config_error(config_path, "'gpb' must be a table"))

    settings = Settings(**DEFAULT_SETTINGS)
    for key, value in table.items():
        if key not in DEFAULT_SETTINGS:
            return IOFailure(_config_error(config_path, f"unknown key '{key}'"))
        expected = type(DEFAULT_SETTINGS[key])
        if not isinstance(value, expected):
            return IOFailure(
                _config_error(
                    config_path, f"'{key}' must be of type {expected.__name__}"
                )
            )
        settings[key] = value  # type: ignore
    return IOSuccess(settings)


def load_settings(environ=os.environ) -> IOResult[Settings, PipelineError]:
    """Loads the first config file found, or the defaults if there is none.

    A file named by GPB_CONFIG has to exist, the others are optional.
    """
    explicit = environ.get(CONFIG_ENV)
    if explicit:
        config_path = Path(explicit)
        if not config_path.is_file():
            return IOFailure(_config_error(config_path, "file not found"))
    else:
        config_path = next((p for p in config_paths() if p.is_file()), None)
        if config_path is None:
            return IOSuccess(Settings(**DEFAULT_SETTINGS))

    return (
        load_config_file(config_path)
        .alt(lambda e: _config_error(config_path, str(e)))
        .bind(lambda config: parse_settings(config_path, config))
    )
