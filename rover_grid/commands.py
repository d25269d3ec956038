from __future__ import annotations

from dataclasses import dataclass
from typing import Union

LEFT = -1
RIGHT = 1


@dataclass(frozen=True)
class Rotate:
    """Turn 90 degrees. ``value`` is -1 (left) or +1 (right)."""

    value: int

    @property
    def letter(self) -> str:
        return {LEFT: "L", RIGHT: "R"}.get(self.value, f"rotate({self.value})")


@dataclass(frozen=True)
class Move:
    """Advance one cell along the current facing."""

    @property
    def letter(self) -> str:
        return "M"


Command = Union[Rotate, Move]


def command_label(command: object) -> str:
    """Short label for telemetry; falls back to ``repr`` for unknown objects."""
    if isinstance(command, (Rotate, Move)):
        return command.letter
    return repr(command)
