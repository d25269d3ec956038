from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of failure kinds raised by the rover core and parser."""

    INVALID_CONFIG = "invalid_config"
    INVALID_BOUNDS = "invalid_bounds"
    INVALID_LOCATION = "invalid_location"
    INVALID_ID = "invalid_id"
    INVALID_ARGUMENT = "invalid_argument"
    NEGATIVE_COORDINATE = "negative_coordinate"
    OFF_PLATEAU = "off_plateau"
    INVALID_COMMAND = "invalid_command"
    INPUT_PARSE = "input_parse"


class RoverError(Exception):
    """Base class for every failure raised by the rover grid.

    Callers can branch either on the exception type or on ``kind``.
    """

    kind: ErrorKind


class InvalidConfigError(RoverError, ValueError):
    kind = ErrorKind.INVALID_CONFIG


class InvalidBoundsError(RoverError, ValueError):
    kind = ErrorKind.INVALID_BOUNDS


class InvalidLocationError(RoverError, ValueError):
    kind = ErrorKind.INVALID_LOCATION


class InvalidIdError(RoverError, IndexError):
    kind = ErrorKind.INVALID_ID


class InvalidArgumentError(RoverError, ValueError):
    kind = ErrorKind.INVALID_ARGUMENT


class NegativeCoordinateError(RoverError):
    kind = ErrorKind.NEGATIVE_COORDINATE


class OffPlateauError(RoverError):
    kind = ErrorKind.OFF_PLATEAU


class InvalidCommandError(RoverError):
    kind = ErrorKind.INVALID_COMMAND


class InputParseError(RoverError, ValueError):
    """Malformed mission text. ``line`` is 1-based when known."""

    kind = ErrorKind.INPUT_PARSE

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line
