from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

import pygame

from .controller import RoverController
from .rover import Facing, Rover, RoverState


# Dark theme palette
THEME = {
    "bg": (18, 22, 32),
    "cell": (28, 34, 48),
    "grid": (55, 65, 88),
    "rover_fill": (100, 220, 255),
    "rover_outline": (40, 140, 200),
    "rover_arrow": (140, 240, 255),
    "rover_label": (18, 22, 32),
    "trail_start": (60, 160, 200),
    "trail_end": (100, 220, 255),
    "hud_bg": (28, 34, 48),
    "hud_border": (55, 65, 88),
    "hud_text": (200, 220, 255),
    "hud_error": (255, 90, 90),
}

# Screen-space unit vector per facing (screen y grows downward).
_ARROW = {
    Facing.N: (0, -1),
    Facing.E: (1, 0),
    Facing.S: (0, 1),
    Facing.W: (-1, 0),
}


class GridRenderer:
    """Top-down view of the plateau and its rovers.

    Coordinates:
    - Plateau origin (0,0) is the bottom-left cell.
    - Each grid point 0..width x 0..height is drawn as one cell, so a
      5x5 plateau renders a 6x6 board.
    """

    def __init__(
        self,
        controller: RoverController,
        window_width: int,
        window_height: int,
        show_trail: bool = True,
        trail_max_length: int = 200,
    ) -> None:
        pygame.init()
        pygame.display.set_caption("Rover Grid")
        self.screen = pygame.display.set_mode((window_width, window_height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 13)

        self.controller = controller
        self.window_width = window_width
        self.window_height = window_height
        self.show_trail = show_trail
        self.trail_max_length = trail_max_length
        self.trails: Dict[Rover, List[Tuple[int, int]]] = {}

        cols = controller.width + 1
        rows = controller.height + 1
        self.cell = max(4, min(window_width // cols, window_height // rows))
        self.offset_x = (window_width - cols * self.cell) // 2
        self.offset_y = (window_height - rows * self.cell) // 2

    # ------------------------------------------------------------------
    # Coordinate transforms
    # ------------------------------------------------------------------
    def cell_center(self, x: int, y: int) -> Tuple[int, int]:
        """Screen pixel at the center of plateau cell (x, y)."""
        rows = self.controller.height + 1
        sx = self.offset_x + x * self.cell + self.cell // 2
        sy = self.offset_y + (rows - 1 - y) * self.cell + self.cell // 2
        return sx, sy

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _draw_grid(self) -> None:
        cols = self.controller.width + 1
        rows = self.controller.height + 1
        board = pygame.Rect(self.offset_x, self.offset_y, cols * self.cell, rows * self.cell)
        pygame.draw.rect(self.screen, THEME["cell"], board)
        for i in range(cols + 1):
            x = self.offset_x + i * self.cell
            pygame.draw.line(self.screen, THEME["grid"], (x, board.top), (x, board.bottom), 1)
        for j in range(rows + 1):
            y = self.offset_y + j * self.cell
            pygame.draw.line(self.screen, THEME["grid"], (board.left, y), (board.right, y), 1)

    def draw(self, message: str = "", error: bool = False) -> None:
        """Render one frame from the controller's current rovers."""
        states = self.controller.states()
        self._update_trails()

        self.screen.fill(THEME["bg"])
        self._draw_grid()
        if self.show_trail:
            for trail in self.trails.values():
                self._draw_trail(trail)
        for idx, state in enumerate(states):
            self._draw_rover(idx, state)
        self._draw_hud(states, message, error)
        pygame.display.flip()

    def _update_trails(self) -> None:
        # Keyed by rover object: ids shift when a rover is removed.
        rovers = self.controller.rovers
        for rover in list(self.trails):
            if rover not in rovers:
                del self.trails[rover]
        for rover in rovers:
            trail = self.trails.setdefault(rover, [])
            position = tuple(rover.position)
            if not trail or trail[-1] != position:
                trail.append(position)
            if len(trail) > self.trail_max_length:
                self.trails[rover] = trail[-self.trail_max_length :]

    def trail(self, rover_id: int) -> List[Tuple[int, int]]:
        """Cells visited by the rover currently at ``rover_id``, oldest first."""
        return list(self.trails.get(self.controller.rovers[rover_id], []))

    def _draw_trail(self, trail: Sequence[Tuple[int, int]]) -> None:
        if len(trail) < 2:
            return
        pts = [self.cell_center(x, y) for x, y in trail]
        n = len(pts) - 1
        start, end = THEME["trail_start"], THEME["trail_end"]
        for i in range(n):
            t = (i + 1) / n
            color = (
                int(start[0] + t * (end[0] - start[0])),
                int(start[1] + t * (end[1] - start[1])),
                int(start[2] + t * (end[2] - start[2])),
            )
            pygame.draw.line(self.screen, color, pts[i], pts[i + 1], 2 if i == n - 1 else 1)

    def _draw_rover(self, idx: int, state: RoverState) -> None:
        center = self.cell_center(state.position.x, state.position.y)
        radius_px = max(2, int(self.cell * 0.3))
        pygame.draw.circle(self.screen, THEME["rover_fill"], center, radius_px, 0)
        pygame.draw.circle(self.screen, THEME["rover_outline"], center, radius_px, 2)

        ux, uy = _ARROW[state.facing]
        arrow_len = int(self.cell * 0.45)
        head = (center[0] + ux * arrow_len, center[1] + uy * arrow_len)
        pygame.draw.line(self.screen, THEME["rover_arrow"], center, head, 3)
        # Arrowhead: two wings perpendicular to the heading
        wing = max(2, int(self.cell * 0.08))
        back = (head[0] - ux * wing * 2, head[1] - uy * wing * 2)
        tri = [
            head,
            (back[0] - uy * wing, back[1] + ux * wing),
            (back[0] + uy * wing, back[1] - ux * wing),
        ]
        pygame.draw.polygon(self.screen, THEME["rover_arrow"], tri)

        label = self.font.render(str(idx), True, THEME["rover_label"])
        self.screen.blit(label, label.get_rect(center=center))

    def _draw_hud(self, states: Sequence[RoverState], message: str, error: bool) -> None:
        pad = 10
        lines = [f"plateau {self.controller.width}x{self.controller.height}"]
        lines += [f"{idx}: {state.describe()}" for idx, state in enumerate(states)]
        y = pad
        for text in lines:
            surf = self.font.render(text, True, THEME["hud_text"])
            panel = surf.get_rect(topleft=(pad, y)).inflate(6, 4)
            pygame.draw.rect(self.screen, THEME["hud_bg"], panel)
            pygame.draw.rect(self.screen, THEME["hud_border"], panel, 1)
            self.screen.blit(surf, (pad, y))
            y += surf.get_height() + 6
        if message:
            color = THEME["hud_error"] if error else THEME["hud_text"]
            surf = self.font.render(message, True, color)
            self.screen.blit(surf, (pad, self.window_height - surf.get_height() - pad))

    def pump(self) -> bool:
        """Process window events; return False once the window was closed."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
        return True

    def tick(self, target_fps: int) -> float:
        """Cap frame rate and return achieved FPS."""
        fps = self.clock.get_fps()
        self.clock.tick(target_fps)
        return fps

    def close(self) -> None:
        pygame.quit()
