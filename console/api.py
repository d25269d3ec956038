from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from rover_grid.controller import RoverController


class UserSession(ABC):
    """Abstract interface for the file-driven and manual rover sessions."""

    def __init__(self, output_fn: Callable[[str], None] = print) -> None:
        self.output_fn = output_fn
        self.controller: Optional[RoverController] = None

    @abstractmethod
    def setup(self) -> None:
        """Build the controller and place the initial rovers."""

    @abstractmethod
    def run(self) -> None:
        """Execute the session's commands."""

    def results(self) -> List[str]:
        """Current rover listing, one ``{index}: {x} {y} {facing}`` line per rover."""
        if self.controller is None:
            return []
        return self.controller.describe()

    def print_results(self) -> None:
        lines = self.results()
        if not lines:
            return
        self.output_fn("\nResults after running commands:")
        for line in lines:
            self.output_fn(f"\t{line}")
        self.output_fn("")
