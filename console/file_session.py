from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from console.api import UserSession
from rover_grid.commands import Command
from rover_grid.controller import RoverController
from rover_grid.errors import InputParseError
from rover_grid.parser import MissionInput, parse_file
from telemetry.logger import TelemetryLogger


class FileSession(UserSession):
    """Run a mission document: place every rover, then run their commands in order."""

    def __init__(
        self,
        path: str,
        telemetry_logger: Optional[TelemetryLogger] = None,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        super().__init__(output_fn=output_fn)
        self.path = path
        self.telemetry_logger = telemetry_logger
        self.mission: Optional[MissionInput] = None

    def setup(self) -> None:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                text = f.read()
        except UnicodeDecodeError as exc:
            raise InputParseError(f"{self.path} is not valid UTF-8 text: {exc.reason}") from None
        if not text.strip():
            raise InputParseError(f"file empty: {self.path}")
        mission = parse_file(text)
        controller = RoverController(mission.dimensions, telemetry_logger=self.telemetry_logger)
        for rover in mission.rovers:
            controller.add_rover(rover.position, int(rover.facing))
        self.controller = controller
        self.mission = mission

    def run(self) -> None:
        if self.controller is None or self.mission is None:
            raise RuntimeError("setup() must be called before run()")
        for rover_id, rover in enumerate(self.mission.rovers):
            self.controller.run_commands(rover_id, rover.commands)

    def steps(self) -> List[Tuple[int, Command]]:
        """All (rover_id, command) pairs in execution order, for step-wise playback."""
        if self.mission is None:
            return []
        return [
            (rover_id, command)
            for rover_id, rover in enumerate(self.mission.rovers)
            for command in rover.commands
        ]
