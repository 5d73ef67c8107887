from typing import Literal

Beep = Literal["off", "ansi", "bell"]
BEEP_MODES: tuple[Beep, ...] = ("off", "ansi", "bell")

Cmd = tuple[str, ...]
