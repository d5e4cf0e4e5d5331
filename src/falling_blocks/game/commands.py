from __future__ import annotations

from enum import Enum, IntEnum
from typing import Dict, Union


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    SOFT_DROP = 2
    ROTATE_CW = 3
    TOGGLE_PAUSE = 4
    RESET = 5


class DispatchResult(Enum):
    APPLIED = "applied"
    IGNORED = "ignored"
    INVALID_COMMAND = "invalid command"


_ALIASES: Dict[str, Command] = {
    "moveleft": Command.MOVE_LEFT,
    "left": Command.MOVE_LEFT,
    "moveright": Command.MOVE_RIGHT,
    "right": Command.MOVE_RIGHT,
    "softdrop": Command.SOFT_DROP,
    "down": Command.SOFT_DROP,
    "rotatecw": Command.ROTATE_CW,
    "rotate": Command.ROTATE_CW,
    "togglepause": Command.TOGGLE_PAUSE,
    "pause": Command.TOGGLE_PAUSE,
    "reset": Command.RESET,
}


def parse_command(value: Union[str, Command]) -> Command:
    """Map `moveLeft`, `move_left`, `MOVE_LEFT` etc. to a Command.

    Raises ValueError for anything that is not a known command.
    """
    if isinstance(value, Command):
        return value
    if not isinstance(value, str):
        raise ValueError(f"invalid command: {value!r}")
    key = value.strip().replace("_", "").replace("-", "").lower()
    try:
        return _ALIASES[key]
    except KeyError:
        raise ValueError(f"invalid command: {value!r}") from None
