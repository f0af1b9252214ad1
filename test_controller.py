"""Tests for the pointer interaction state machine."""

from grid import Grid, Coord
from engine import InteractionController, ControllerState


def make(running: bool = False):
    grid = Grid.create(5, 5, (0, 0), (4, 4))
    flag = {"running": running}
    ctrl = InteractionController(grid, is_running=lambda: flag["running"])
    return grid, ctrl, flag


class TestWallDrawing:
    """Press on a plain cell starts drag-to-draw."""

    def test_press_toggles_and_enters_drawing(self) -> None:
        grid, ctrl, _ = make()

        assert ctrl.press(2, 2)
        assert ctrl.state == ControllerState.DRAWING_WALLS
        assert grid.walls() == {Coord(2, 2)}

    def test_enter_toggles_while_drawing(self) -> None:
        grid, ctrl, _ = make()
        ctrl.press(2, 2)
        ctrl.enter(2, 3)
        ctrl.enter(2, 4)

        assert grid.walls() == {Coord(2, 2), Coord(2, 3), Coord(2, 4)}

    def test_drawing_over_existing_wall_removes_it(self) -> None:
        grid, ctrl, _ = make()
        grid.toggle_wall(1, 1)

        ctrl.press(1, 1)

        assert grid.walls() == set()

    def test_drawing_skips_markers(self) -> None:
        grid, ctrl, _ = make()
        ctrl.press(0, 1)

        assert not ctrl.enter(0, 0)
        assert grid.cell(0, 0).is_start
        assert not grid.cell(0, 0).is_wall

    def test_release_returns_to_idle(self) -> None:
        grid, ctrl, _ = make()
        ctrl.press(2, 2)

        assert ctrl.release()
        assert ctrl.state == ControllerState.IDLE
        # entering after release draws nothing
        assert not ctrl.enter(3, 3)
        assert grid.walls() == {Coord(2, 2)}


class TestMarkerDragging:
    """Press on start/end drags the marker."""

    def test_drag_start(self) -> None:
        grid, ctrl, _ = make()

        ctrl.press(0, 0)
        assert ctrl.state == ControllerState.DRAGGING_START
        ctrl.enter(1, 0)
        ctrl.enter(2, 0)
        ctrl.release()

        assert grid.start == (2, 0)
        assert not grid.cell(0, 0).is_start
        assert grid.walls() == set()

    def test_drag_end(self) -> None:
        grid, ctrl, _ = make()

        ctrl.press(4, 4)
        assert ctrl.state == ControllerState.DRAGGING_END
        ctrl.enter(3, 4)

        assert grid.end == (3, 4)

    def test_drag_onto_wall_leaves_marker(self) -> None:
        grid, ctrl, _ = make()
        grid.toggle_wall(1, 0)

        ctrl.press(0, 0)
        assert not ctrl.enter(1, 0)
        assert grid.start == (0, 0)

        # continues from where it is once a legal cell is entered
        assert ctrl.enter(0, 1)
        assert grid.start == (0, 1)

    def test_drag_onto_other_marker_is_rejected(self) -> None:
        grid, ctrl, _ = make()

        ctrl.press(4, 4)
        assert not ctrl.enter(0, 0)
        assert (grid.start, grid.end) == ((0, 0), (4, 4))


class TestGating:
    """Press and enter are ignored while a run is animating; release is not."""

    def test_press_ignored_while_running(self) -> None:
        grid, ctrl, _ = make(running=True)

        assert not ctrl.press(2, 2)
        assert ctrl.state == ControllerState.IDLE
        assert grid.walls() == set()

    def test_enter_ignored_while_running(self) -> None:
        grid, ctrl, flag = make()
        ctrl.press(2, 2)
        flag["running"] = True

        assert not ctrl.enter(2, 3)
        assert ctrl.state == ControllerState.DRAWING_WALLS
        assert grid.walls() == {Coord(2, 2)}

    def test_release_while_running_returns_to_idle(self) -> None:
        """Letting go mid-run ends the stroke; hovering afterwards draws nothing."""
        grid, ctrl, flag = make()
        ctrl.press(2, 2)
        flag["running"] = True

        assert ctrl.release()
        assert ctrl.state == ControllerState.IDLE

        flag["running"] = False
        assert not ctrl.enter(3, 3)
        assert grid.walls() == {Coord(2, 2)}

    def test_release_while_running_drops_marker_drag(self) -> None:
        grid, ctrl, flag = make()
        ctrl.press(0, 0)
        flag["running"] = True
        ctrl.release()
        flag["running"] = False

        assert not ctrl.enter(1, 0)
        assert grid.start == (0, 0)

    def test_press_outside_idle_is_ignored(self) -> None:
        grid, ctrl, _ = make()
        ctrl.press(2, 2)

        assert not ctrl.press(3, 3)
        assert ctrl.state == ControllerState.DRAWING_WALLS
        assert grid.walls() == {Coord(2, 2)}

    def test_out_of_bounds_is_absorbed(self) -> None:
        grid, ctrl, _ = make()

        assert not ctrl.press(9, 9)
        assert ctrl.state == ControllerState.IDLE
        ctrl.press(2, 2)
        assert not ctrl.enter(-1, 2)

    def test_release_when_idle(self) -> None:
        _, ctrl, _ = make()
        assert not ctrl.release()
