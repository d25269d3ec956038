"""
Top-level package for the plateau rover simulator.

Components:
- rover: grid rover with cardinal facing, rotate and move
- controller: plateau bounds, rover collection, command execution with rollback
- commands: Rotate / Move command values
- parser: mission text (plateau line, rover and command line pairs)
- errors: typed failures, one per error kind
- render: pygame-based visualization (imported on demand)
"""

from .commands import LEFT, RIGHT, Command, Move, Rotate
from .controller import RoverController
from .errors import (
    ErrorKind,
    InputParseError,
    InvalidArgumentError,
    InvalidBoundsError,
    InvalidCommandError,
    InvalidConfigError,
    InvalidIdError,
    InvalidLocationError,
    NegativeCoordinateError,
    OffPlateauError,
    RoverError,
)
from .parser import MissionInput, RoverDescriptor, parse_commands, parse_file, parse_plateau, parse_rover
from .rover import Facing, Position, Rover, RoverState

__all__ = [
    "LEFT",
    "RIGHT",
    "Command",
    "Move",
    "Rotate",
    "RoverController",
    "ErrorKind",
    "InputParseError",
    "InvalidArgumentError",
    "InvalidBoundsError",
    "InvalidCommandError",
    "InvalidConfigError",
    "InvalidIdError",
    "InvalidLocationError",
    "NegativeCoordinateError",
    "OffPlateauError",
    "RoverError",
    "MissionInput",
    "RoverDescriptor",
    "parse_commands",
    "parse_file",
    "parse_plateau",
    "parse_rover",
    "Facing",
    "Position",
    "Rover",
    "RoverState",
]
