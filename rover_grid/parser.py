"""
Mission text parsing.

A mission document looks like::

    5 5
    1 2 N
    LMLMLMLMM
    3 3 E
    MMRMMRMRRM

The first line is the plateau size; every following pair of lines is a
rover pose and its command string.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .commands import LEFT, RIGHT, Command, Move, Rotate
from .errors import InputParseError
from .rover import Facing, Position

_COMMANDS = {
    "L": Rotate(LEFT),
    "R": Rotate(RIGHT),
    "M": Move(),
}


@dataclass
class RoverDescriptor:
    position: Position
    facing: Facing
    commands: List[Command] = field(default_factory=list)


@dataclass
class MissionInput:
    dimensions: Tuple[int, int]
    rovers: List[RoverDescriptor]


def _parse_int(token: str, what: str, line: Optional[int]) -> int:
    try:
        return int(token)
    except ValueError:
        raise InputParseError(f"{what} must be an integer, got {token!r}", line) from None


def parse_plateau(text: str, line: Optional[int] = None) -> Tuple[int, int]:
    """Parse ``"5 4"`` into ``(5, 4)``."""
    if not isinstance(text, str):
        raise InputParseError("plateau input must be a string", line)
    tokens = text.split()
    if len(tokens) != 2:
        raise InputParseError(f"invalid plateau dimensions {text.strip()!r}", line)
    width = _parse_int(tokens[0], "plateau width", line)
    height = _parse_int(tokens[1], "plateau height", line)
    if width < 0 or height < 0:
        raise InputParseError(f"invalid plateau dimensions {text.strip()!r}", line)
    return width, height


def parse_rover(text: str, line: Optional[int] = None) -> Tuple[Position, Facing]:
    """Parse ``"1 2 N"`` into a position and facing."""
    if not isinstance(text, str):
        raise InputParseError("rover input must be a string", line)
    tokens = text.split()
    if len(tokens) != 3:
        raise InputParseError(f"rover line must be 'x y facing', got {text.strip()!r}", line)
    x = _parse_int(tokens[0], "rover x", line)
    y = _parse_int(tokens[1], "rover y", line)
    try:
        facing = Facing.from_letter(tokens[2])
    except ValueError:
        raise InputParseError(f"invalid direction {tokens[2]!r} in rover string", line) from None
    return Position(x, y), facing


def parse_commands(text: str, line: Optional[int] = None) -> List[Command]:
    """Translate a command string such as ``"LMR"`` into commands."""
    if not isinstance(text, str):
        raise InputParseError("command string must be a string", line)
    commands: List[Command] = []
    for idx, char in enumerate(text.strip()):
        try:
            commands.append(_COMMANDS[char])
        except KeyError:
            raise InputParseError(
                f"invalid command {char!r} at index {idx} in command string", line
            ) from None
    return commands


def parse_file(text: str) -> MissionInput:
    """Parse a whole mission document."""
    lines = [ln.strip() for ln in text.strip().splitlines()]
    if not lines or not lines[0]:
        raise InputParseError("mission input is empty")

    dimensions = parse_plateau(lines[0], line=1)
    rovers: List[RoverDescriptor] = []
    for i in range(1, len(lines), 2):
        position, facing = parse_rover(lines[i], line=i + 1)
        if i + 1 >= len(lines):
            raise InputParseError("rover line has no command line after it", i + 1)
        commands = parse_commands(lines[i + 1], line=i + 2)
        rovers.append(RoverDescriptor(position=position, facing=facing, commands=commands))
    return MissionInput(dimensions=dimensions, rovers=rovers)
