from __future__ import annotations

from typing import Callable, Optional, Tuple

from console.api import UserSession
from rover_grid.controller import RoverController
from rover_grid.errors import InvalidIdError, RoverError
from rover_grid.parser import parse_commands, parse_plateau, parse_rover
from telemetry.logger import TelemetryLogger

MENU_HELP = "Options: add, remove, run, list, quit"


class ManualSession(UserSession):
    """Interactive prompt loop for placing rovers and running commands by hand.

    Input is read through ``input_fn`` so the session can be scripted.
    Rover and parse errors are reported and the loop continues; end of input
    or ``quit`` ends the session.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        default_dimensions: Tuple[int, int] = (5, 5),
        telemetry_logger: Optional[TelemetryLogger] = None,
    ) -> None:
        super().__init__(output_fn=output_fn)
        self.input_fn = input_fn
        self.default_dimensions = default_dimensions
        self.telemetry_logger = telemetry_logger

    def _ask(self, prompt: str, default: str = "") -> str:
        suffix = f" [{default}]" if default else ""
        answer = self.input_fn(f"{prompt}{suffix}: ").strip()
        return answer or default

    def _error(self, exc: Exception) -> None:
        self.output_fn(f"Error: {exc}")

    # ------------------------------------------------------------------
    # Session API
    # ------------------------------------------------------------------
    def setup(self) -> None:
        """Ask for plateau dimensions until a valid plateau is given."""
        width, height = self.default_dimensions
        while self.controller is None:
            answer = self._ask("Enter plateau width and height", f"{width} {height}")
            try:
                dimensions = parse_plateau(answer)
                self.controller = RoverController(dimensions, telemetry_logger=self.telemetry_logger)
            except RoverError as exc:
                self._error(exc)

    def run(self) -> None:
        try:
            if self.controller is None:
                self.setup()
            self.output_fn(MENU_HELP)
            while True:
                choice = self._ask("Choose an option").lower()
                if choice in ("quit", "q", "exit"):
                    return
                try:
                    self._dispatch(choice)
                except RoverError as exc:
                    self._error(exc)
        except EOFError:
            return

    # ------------------------------------------------------------------
    # Menu actions
    # ------------------------------------------------------------------
    def _dispatch(self, choice: str) -> None:
        if choice == "add":
            self.add_rover()
        elif choice == "remove":
            self.remove_rover()
        elif choice == "run":
            self.run_rover()
        elif choice == "list":
            self.list_rovers()
        else:
            self.output_fn(f"Unknown option {choice!r}. {MENU_HELP}")

    def _has_rovers(self) -> bool:
        if self.controller is None or len(self.controller) == 0:
            self.output_fn("No rovers on the plateau. Add one first.")
            return False
        return True

    def _ask_id(self, prompt: str) -> int:
        answer = self._ask(prompt)
        try:
            return int(answer)
        except ValueError:
            raise InvalidIdError(f"invalid rover id: {answer!r}") from None

    def add_rover(self) -> None:
        if self.controller is None:
            raise RuntimeError("setup() must be called before add_rover()")
        position, facing = parse_rover(self._ask("Enter rover position and facing (x y N|E|S|W)"))
        rover_id = self.controller.add_rover(position, int(facing))
        self.output_fn(f"Added rover {rover_id}")

    def remove_rover(self) -> None:
        if not self._has_rovers():
            return
        self.list_rovers()
        rover_id = self._ask_id("Select ID of rover to remove")
        self.controller.remove_rover(rover_id)
        self.output_fn(f"Removed rover {rover_id}")

    def run_rover(self) -> None:
        if not self._has_rovers():
            return
        self.list_rovers()
        rover_id = self._ask_id("Select ID of rover to command")
        commands = parse_commands(self._ask("Type command string", "LMLMLMLMM"))
        self.controller.run_commands(rover_id, commands)
        self.print_results()

    def list_rovers(self) -> None:
        lines = self.results()
        if not lines:
            self.output_fn("No rovers on the plateau.")
        for line in lines:
            self.output_fn(f"\t{line}")
