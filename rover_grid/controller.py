from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Tuple

from .commands import Move, Rotate, command_label
from .errors import (
    InvalidBoundsError,
    InvalidCommandError,
    InvalidConfigError,
    InvalidIdError,
    InvalidLocationError,
    OffPlateauError,
    RoverError,
)
from .rover import Rover, RoverState, is_integer_pair

if TYPE_CHECKING:
    from telemetry.logger import TelemetryLogger


class RoverController:
    """Owns a plateau and the rovers on it.

    The controller is the only place plateau bounds are enforced. Every move
    is applied optimistically, re-checked against the plateau, and undone
    with a reverse move if it left the plateau.

    Parameters
    ----------
    dimensions : tuple[int, int]
        Plateau ``(width, height)``; valid cells are ``0..width`` by ``0..height``
        inclusive.
    telemetry_logger : TelemetryLogger, optional
        Receives one JSON record per rover event.
    """

    def __init__(
        self,
        dimensions: Any,
        telemetry_logger: Optional["TelemetryLogger"] = None,
    ) -> None:
        if dimensions is None:
            raise InvalidConfigError("must provide plateau dimensions to create controller")
        if not is_integer_pair(dimensions):
            raise InvalidConfigError("plateau dimensions must be an integer pair [width, height]")
        if any(d < 0 for d in dimensions):
            raise InvalidBoundsError("width and height must not be negative")
        self.width = dimensions[0]
        self.height = dimensions[1]
        self.telemetry_logger = telemetry_logger
        self._rovers: List[Rover] = []
        self._lock = threading.RLock()

    @classmethod
    def from_config_dict(
        cls,
        data: Optional[Dict[str, Any]],
        telemetry_logger: Optional["TelemetryLogger"] = None,
    ) -> "RoverController":
        """Create a controller from a ``{"width": w, "height": h}`` mapping."""
        if not isinstance(data, dict):
            raise InvalidConfigError("must provide a plateau config mapping")
        try:
            dimensions = (data["width"], data["height"])
        except KeyError as exc:
            raise InvalidConfigError(f"plateau config is missing {exc.args[0]!r}") from None
        return cls(dimensions, telemetry_logger=telemetry_logger)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def dimensions(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def rovers(self) -> Tuple[Rover, ...]:
        return tuple(self._rovers)

    def __len__(self) -> int:
        return len(self._rovers)

    def get_state(self, rover_id: int) -> RoverState:
        return self._get_rover(rover_id).get_state()

    def states(self) -> List[RoverState]:
        return [rover.get_state() for rover in self._rovers]

    def describe(self) -> List[str]:
        """One ``{index}: {x} {y} {facing}`` line per rover."""
        return [f"{idx}: {state.describe()}" for idx, state in enumerate(self.states())]

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------
    def is_valid_location(self, position: Any) -> bool:
        """Return True if ``position`` is an integer pair on the plateau."""
        if not is_integer_pair(position):
            return False
        x, y = position
        return 0 <= x <= self.width and 0 <= y <= self.height

    # ------------------------------------------------------------------
    # Rover management
    # ------------------------------------------------------------------
    def add_rover(self, position: Any, facing: Any) -> int:
        """Place a rover on the plateau and return its id."""
        if not self.is_valid_location(position):
            raise InvalidLocationError(f"invalid initial location for rover: {position!r}")
        rover = Rover(position, facing)
        with self._lock:
            self._rovers.append(rover)
            rover_id = len(self._rovers) - 1
        self._log("rover_added", rover_id=rover_id, **rover.to_dict())
        return rover_id

    def remove_rover(self, rover_id: int) -> None:
        """Drop a rover. Ids of later rovers shift down by one."""
        with self._lock:
            self._get_rover(rover_id)
            del self._rovers[rover_id]
        self._log("rover_removed", rover_id=rover_id)

    def run_commands(self, rover_id: int, commands: Iterable[Any]) -> RoverState:
        """Apply ``commands`` in order to one rover and return its final pose.

        The first failing command aborts the rest; commands applied before it
        stay applied. A move that leaves the plateau is reversed before
        :class:`OffPlateauError` is raised.
        """
        with self._lock:
            rover = self._get_rover(rover_id)
            try:
                command_iter = iter(commands)
            except TypeError:
                raise InvalidCommandError(f"commands must be a sequence, got {commands!r}") from None
            try:
                for step, command in enumerate(command_iter):
                    try:
                        self._apply(rover, command)
                    except RoverError as exc:
                        self._log_command(rover_id, step, command, rover, error=exc)
                        raise
                    self._log_command(rover_id, step, command, rover)
            except RoverError as exc:
                self._log("run_failed", rover_id=rover_id, error=exc.kind.value, **rover.to_dict())
                raise
            self._log("run_complete", rover_id=rover_id, **rover.to_dict())
            return rover.get_state()

    def _apply(self, rover: Rover, command: Any) -> None:
        if isinstance(command, Rotate):
            rover.rotate(command.value)
        elif isinstance(command, Move):
            rover.move()
            if not self.is_valid_location(rover.position):
                rover.move(reverse=True)
                raise OffPlateauError("cannot move off plateau")
        else:
            raise InvalidCommandError(f"invalid rover command: {command!r}")

    def _get_rover(self, rover_id: Any) -> Rover:
        if isinstance(rover_id, bool) or not isinstance(rover_id, int):
            raise InvalidIdError(f"invalid rover id: {rover_id!r}")
        if rover_id < 0 or rover_id >= len(self._rovers):
            raise InvalidIdError(f"invalid rover id: {rover_id}")
        return self._rovers[rover_id]

    # ------------------------------------------------------------------
    # Telemetry
    # ------------------------------------------------------------------
    def _log_command(
        self,
        rover_id: int,
        step: int,
        command: Any,
        rover: Rover,
        error: Optional[RoverError] = None,
    ) -> None:
        fields: Dict[str, Any] = {
            "rover_id": rover_id,
            "step": step,
            "command": command_label(command),
            "ok": error is None,
        }
        fields.update(rover.to_dict())
        if error is not None:
            fields["error"] = error.kind.value
        self._log("command", **fields)

    def _log(self, event: str, **fields: Any) -> None:
        if self.telemetry_logger is None:
            return
        record = {"event": event, "time": time.time()}
        record.update(fields)
        self.telemetry_logger.log_record(record)
