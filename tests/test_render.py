from __future__ import annotations

import pytest

pygame = pytest.importorskip("pygame")

from rover_grid.commands import Move, Rotate
from rover_grid.controller import RoverController
from rover_grid.render import GridRenderer


@pytest.fixture
def renderer(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    controller = RoverController((4, 4))
    controller.add_rover([0, 0], 0)
    controller.add_rover([4, 4], 2)
    r = GridRenderer(controller, window_width=200, window_height=200)
    yield r
    r.close()


def test_cell_center_puts_origin_bottom_left(renderer) -> None:
    x0, y0 = renderer.cell_center(0, 0)
    x1, y1 = renderer.cell_center(4, 4)
    assert x0 < x1
    assert y0 > y1
    assert renderer.cell == 40


def test_draw_tracks_trails_per_rover(renderer) -> None:
    controller = renderer.controller
    renderer.draw("ready")
    controller.run_commands(0, [Move()])
    controller.run_commands(0, [Rotate(1), Move()])
    renderer.draw("step")
    assert renderer.trail(0) == [(0, 0), (1, 1)]
    assert renderer.trail(1) == [(4, 4)]

    controller.remove_rover(1)
    renderer.draw("removed", error=True)
    assert len(renderer.trails) == 1
    assert renderer.pump() is True


def test_trail_follows_rover_when_ids_shift(renderer) -> None:
    controller = renderer.controller
    renderer.draw()
    controller.remove_rover(0)
    controller.run_commands(0, [Move()])
    renderer.draw()
    # The rover now at id 0 started at (4, 4); nothing from the removed rover remains.
    assert renderer.trail(0) == [(4, 4), (4, 3)]
    assert len(renderer.trails) == 1
