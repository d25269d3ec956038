from __future__ import annotations

import pytest

from rover_grid.commands import LEFT, RIGHT, Move, Rotate
from rover_grid.controller import RoverController
from rover_grid.errors import (
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
from rover_grid.parser import parse_commands
from rover_grid.rover import Facing, Position, Rover


def make_controller() -> RoverController:
    return RoverController((5, 5))


def test_controller_stores_dimensions() -> None:
    controller = make_controller()
    assert controller.dimensions == (5, 5)
    assert len(controller) == 0


def test_controller_requires_config() -> None:
    with pytest.raises(InvalidConfigError):
        RoverController(None)
    with pytest.raises(InvalidConfigError):
        RoverController([5])
    with pytest.raises(InvalidConfigError):
        RoverController.from_config_dict(None)
    with pytest.raises(InvalidConfigError):
        RoverController.from_config_dict({"width": 5})


def test_controller_rejects_negative_bounds() -> None:
    with pytest.raises(InvalidBoundsError):
        RoverController([-1, 2])
    with pytest.raises(InvalidBoundsError):
        RoverController([1, -2])


def test_controller_from_config_dict() -> None:
    controller = RoverController.from_config_dict({"width": 3, "height": 7})
    assert controller.dimensions == (3, 7)


def test_zero_size_plateau_has_a_single_cell() -> None:
    controller = RoverController((0, 0))
    rover_id = controller.add_rover((0, 0), 0)
    with pytest.raises(OffPlateauError):
        controller.run_commands(rover_id, [Move()])
    assert controller.get_state(rover_id).position == (0, 0)


def test_is_valid_location() -> None:
    controller = make_controller()
    assert controller.is_valid_location([0, 1]) is True
    assert controller.is_valid_location((5, 5)) is True
    assert controller.is_valid_location([0, -1]) is False
    assert controller.is_valid_location([-1, 0]) is False
    assert controller.is_valid_location([6, 5]) is False
    assert controller.is_valid_location([5, 6]) is False
    assert controller.is_valid_location([0]) is False
    assert controller.is_valid_location([0, 1, 2]) is False
    assert controller.is_valid_location([0.5, 1]) is False
    assert controller.is_valid_location(None) is False


def test_is_valid_location_does_not_mutate() -> None:
    controller = make_controller()
    controller.add_rover([1, 1], 0)
    before = controller.states()
    controller.is_valid_location([9, 9])
    controller.is_valid_location([2, 2])
    assert controller.states() == before


def test_add_rover_returns_index() -> None:
    controller = make_controller()
    first = controller.add_rover([0, 1], 0)
    second = controller.add_rover([2, 2], 3)
    assert (first, second) == (0, 1)
    assert len(controller) == 2
    assert isinstance(controller.rovers[first], Rover)
    assert controller.get_state(second).facing is Facing.W


def test_add_rover_rejects_invalid_location() -> None:
    controller = make_controller()
    with pytest.raises(InvalidLocationError):
        controller.add_rover([-1, 1], 0)
    with pytest.raises(InvalidLocationError):
        controller.add_rover([6, 1], 0)
    assert len(controller) == 0


def test_add_rover_rejects_missing_facing() -> None:
    controller = make_controller()
    with pytest.raises(InvalidConfigError):
        controller.add_rover([1, 1], None)
    assert len(controller) == 0


def test_remove_rover_shifts_ids() -> None:
    controller = make_controller()
    controller.add_rover([0, 0], 0)
    controller.add_rover([1, 2], 0)
    controller.add_rover([3, 3], 1)
    controller.remove_rover(1)
    assert len(controller) == 2
    assert controller.get_state(1).position == (3, 3)


def test_remove_rover_rejects_invalid_id() -> None:
    controller = make_controller()
    with pytest.raises(InvalidIdError):
        controller.remove_rover(1)
    controller.add_rover([0, 0], 0)
    with pytest.raises(InvalidIdError):
        controller.remove_rover(-1)
    with pytest.raises(InvalidIdError):
        controller.remove_rover("0")
    assert len(controller) == 1


def test_run_commands_rejects_invalid_id() -> None:
    controller = make_controller()
    controller.add_rover([0, 0], 0)
    with pytest.raises(InvalidIdError):
        controller.run_commands(3, [])
    with pytest.raises(IndexError):
        controller.run_commands(-1, [])


def test_run_commands_moves_specified_rover() -> None:
    controller = make_controller()
    controller.add_rover([0, 0], 0)
    controller.add_rover([1, 4], 3)
    state = controller.run_commands(0, [Rotate(RIGHT), Move()])
    assert state.position == Position(1, 0)
    assert state.facing is Facing.E
    assert controller.get_state(1).position == (1, 4)


def test_run_commands_with_no_commands_returns_current_pose() -> None:
    controller = make_controller()
    controller.add_rover([2, 2], 2)
    state = controller.run_commands(0, [])
    assert state.position == (2, 2)
    assert state.facing is Facing.S


def test_invalid_command_keeps_earlier_commands() -> None:
    controller = make_controller()
    controller.add_rover([0, 0], 0)
    with pytest.raises(InvalidCommandError):
        controller.run_commands(0, [Move(), {"command": "lift"}, Move()])
    assert controller.get_state(0).position == (0, 1)


def test_lift_command_alone_is_invalid() -> None:
    controller = make_controller()
    controller.add_rover([0, 0], 0)
    with pytest.raises(InvalidCommandError):
        controller.run_commands(0, [{"command": "lift"}])
    assert controller.get_state(0).position == (0, 0)


def test_rotate_failure_aborts_sequence() -> None:
    controller = make_controller()
    controller.add_rover([0, 0], 0)
    with pytest.raises(InvalidArgumentError):
        controller.run_commands(0, [Rotate(RIGHT), Rotate(2), Move()])
    state = controller.get_state(0)
    assert state.facing is Facing.E
    assert state.position == (0, 0)


def test_cannot_move_off_plateau() -> None:
    controller = make_controller()
    controller.add_rover([0, 0], 0)
    controller.add_rover([1, 4], 3)
    state = controller.run_commands(1, [Rotate(RIGHT), Move()])
    assert state.position == (1, 5)
    assert state.facing is Facing.N
    with pytest.raises(OffPlateauError):
        controller.run_commands(1, [Move()])
    assert controller.get_state(1).position == (1, 5)


def test_off_plateau_leaves_no_net_displacement() -> None:
    controller = make_controller()
    controller.add_rover([4, 4], 1)
    with pytest.raises(OffPlateauError):
        controller.run_commands(0, [Move(), Move(), Move()])
    # First move stays applied, the second is rolled back.
    assert controller.get_state(0).position == (5, 4)
    before = controller.get_state(0)
    with pytest.raises(OffPlateauError):
        controller.run_commands(0, [Move()])
    assert controller.get_state(0) == before


def test_off_plateau_rollback_uses_reverse_move(monkeypatch) -> None:
    controller = make_controller()
    controller.add_rover([5, 0], 1)
    rover = controller.rovers[0]
    calls = []
    original_move = Rover.move

    def recording_move(self, reverse=False):
        calls.append(reverse)
        original_move(self, reverse=reverse)

    monkeypatch.setattr(Rover, "move", recording_move)
    with pytest.raises(OffPlateauError):
        controller.run_commands(0, [Move()])
    assert calls == [False, True]
    assert rover.position == (5, 0)


def test_negative_coordinate_raised_by_rover_layer() -> None:
    controller = make_controller()
    controller.add_rover([0, 0], 3)
    with pytest.raises(NegativeCoordinateError):
        controller.run_commands(0, [Move()])
    assert controller.get_state(0).position == (0, 0)


def test_all_failures_share_base_class() -> None:
    controller = make_controller()
    with pytest.raises(RoverError):
        controller.run_commands(0, [])


def test_scenario_first_rover() -> None:
    controller = make_controller()
    rover_id = controller.add_rover([1, 2], int(Facing.N))
    state = controller.run_commands(rover_id, parse_commands("LMLMLMLMM"))
    assert state.position == (1, 3)
    assert state.facing is Facing.N


def test_scenario_second_rover() -> None:
    controller = make_controller()
    rover_id = controller.add_rover([3, 3], int(Facing.E))
    state = controller.run_commands(rover_id, parse_commands("MMRMMRMRRM"))
    assert state.position == (5, 1)
    assert state.facing is Facing.E


def test_describe_lists_rovers() -> None:
    controller = make_controller()
    controller.add_rover([1, 2], 0)
    controller.add_rover([3, 3], 1)
    controller.run_commands(0, [Rotate(LEFT)])
    assert controller.describe() == ["0: 1 2 W", "1: 3 3 E"]


def test_run_commands_rejects_non_iterable_commands() -> None:
    controller = make_controller()
    controller.add_rover([1, 1], 0)
    with pytest.raises(InvalidCommandError):
        controller.run_commands(0, None)
    with pytest.raises(RoverError):
        controller.run_commands(0, 42)
    assert controller.get_state(0).position == (1, 1)
