from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, NamedTuple, Tuple

from .errors import (
    InvalidArgumentError,
    InvalidConfigError,
    NegativeCoordinateError,
)


class Facing(IntEnum):
    """Cardinal facing, arithmetic modulo 4 (clockwise from north)."""

    N = 0
    E = 1
    S = 2
    W = 3

    @property
    def letter(self) -> str:
        return self.name

    @classmethod
    def from_letter(cls, letter: str) -> "Facing":
        try:
            return cls[letter]
        except KeyError:
            raise ValueError(f"unknown facing letter {letter!r}") from None


class Position(NamedTuple):
    x: int
    y: int


# Unit step per facing, indexed by Facing value.
_STEPS: Tuple[Tuple[int, int], ...] = (
    (0, 1),   # N
    (1, 0),   # E
    (0, -1),  # S
    (-1, 0),  # W
)


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_integer_pair(value: Any) -> bool:
    """True for a 2-element list/tuple of plain ints."""
    return (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and all(is_integer(v) for v in value)
    )


@dataclass
class RoverState:
    """Externally visible pose of a rover.

    Attributes
    ----------
    position : Position
        Grid cell (x, y), origin bottom-left.
    facing : Facing
        Current cardinal facing.
    """

    position: Position
    facing: Facing

    def describe(self) -> str:
        """``x y F`` as used in mission files and result listings."""
        return f"{self.position.x} {self.position.y} {self.facing.letter}"


class Rover:
    """Single rover with an integer position and a cardinal facing.

    The rover only knows that its coordinates may not go negative; plateau
    bounds are enforced by :class:`~rover_grid.controller.RoverController`.
    """

    def __init__(self, position: Any, facing: Any) -> None:
        if position is None or facing is None:
            raise InvalidConfigError("rover must have position and facing")
        if not isinstance(position, (list, tuple)) or len(position) != 2:
            raise InvalidConfigError("position must be an [x, y] pair")
        if not all(is_integer(v) for v in position):
            raise InvalidConfigError("position [x, y] must both be integers")
        if any(v < 0 for v in position):
            raise InvalidConfigError("position [x, y] must not be negative")
        if not is_integer(facing):
            raise InvalidConfigError("facing must be an integer 0-3 (N, E, S, W)")

        self.position = Position(position[0], position[1])
        # Python's % is floor-style, so -1 normalizes to 3 (W).
        self.facing = Facing(facing % 4)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def rotate(self, delta: int) -> None:
        """Turn 90 degrees: -1 left, +1 right."""
        if not is_integer(delta):
            raise InvalidArgumentError("integer direction to rotate is required")
        if delta not in (-1, 1):
            raise InvalidArgumentError("direction must be -1 or 1 (left or right)")
        self.facing = Facing((self.facing + delta + 4) % 4)

    def move(self, reverse: bool = False) -> None:
        """Advance one cell along the current facing (or back, if ``reverse``).

        The position is left untouched when the step would make a
        coordinate negative.
        """
        dx, dy = _STEPS[self.facing]
        if reverse:
            dx, dy = -dx, -dy
        x = self.position.x + dx
        y = self.position.y + dy
        if x < 0 or y < 0:
            raise NegativeCoordinateError("cannot move into negative coordinates")
        self.position = Position(x, y)

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------
    def get_state(self) -> RoverState:
        """Return a copy of the current pose."""
        return RoverState(position=self.position, facing=self.facing)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize current pose to a dict for logging/telemetry."""
        return {
            "x": self.position.x,
            "y": self.position.y,
            "facing": self.facing.letter,
        }
