"""Tests for the Visualizer facade: the running gate, replay and settings."""

import pytest

from grid import INF
from engine import Visualizer, VisualizerConfig, ControllerState


SMALL = VisualizerConfig(rows=5, cols=7, start=(2, 0), end=(2, 6))


@pytest.fixture
def viz(clock) -> Visualizer:
    return Visualizer(SMALL, clock=clock)


def revealed(viz: Visualizer):
    visited = [c.coord for c in viz.grid.cells if c.visited]
    on_path = [c.coord for c in viz.grid.cells if c.on_path]
    return visited, on_path


class TestRunGate:
    """run_search holds the gate until the last reveal."""

    def test_run_sets_running(self, viz) -> None:
        assert viz.run_search()
        assert viz.is_running
        assert viz.state()["is_running"]

    def test_second_run_is_rejected(self, viz) -> None:
        """Back-to-back runs: the second changes nothing."""
        viz.run_search()
        generation = viz.scheduler.generation
        pending = viz.scheduler.pending
        layout = viz.grid.to_ascii()

        assert not viz.run_search("astar")

        assert viz.is_running
        assert viz.scheduler.generation == generation
        assert viz.scheduler.pending == pending
        assert viz.grid.to_ascii() == layout
        assert viz.recorder.result.algo_key == "dijkstra"

    def test_edits_rejected_while_running(self, viz) -> None:
        viz.run_search()

        assert not viz.press(0, 3)
        assert not viz.reset()
        assert not viz.clear()
        assert not viz.select_algorithm("astar")
        assert not viz.set_speed("slow")
        assert viz.grid.walls() == set()
        assert viz.config.algorithm == "dijkstra"

    def test_unknown_algorithm(self, viz) -> None:
        with pytest.raises(ValueError):
            viz.run_search("bfs")
        assert not viz.is_running

    def test_gate_opens_after_last_path_reveal(self, viz, clock) -> None:
        viz.run_search()
        result = viz.recorder.result
        n_visit, n_path = len(result.visited), len(result.path)
        last_path_due = n_visit * 10 + (n_path - 1) * 50

        viz.tick(last_path_due - 1)
        assert viz.is_running
        viz.tick(last_path_due)
        assert not viz.is_running


class TestReplay:
    """Reveals land on the live grid in trace order."""

    def test_finish_applies_every_reveal(self, viz) -> None:
        viz.run_search()
        result = viz.recorder.result

        viz.finish()

        visited, on_path = revealed(viz)
        assert set(visited) == set(result.visited)
        assert set(on_path) == set(result.path)
        assert len(result.path) == 7
        assert not viz.is_running

    def test_reveals_land_in_trace_order(self, viz, clock) -> None:
        viz.run_search()
        result = viz.recorder.result
        landed = []

        for t in range(len(result.visited)):
            viz.tick(t * 10)
            newly = [c.coord for c in viz.grid.cells if c.visited and c.coord not in landed]
            landed.extend(newly)
            assert newly == [result.visited[t]]

        path_t0 = len(result.visited) * 10
        on_path = []
        for j in range(len(result.path)):
            viz.tick(path_t0 + j * 50)
            newly = [c.coord for c in viz.grid.cells if c.on_path and c.coord not in on_path]
            on_path.extend(newly)
            assert newly == [result.path[j]]

        assert landed == result.visited
        assert on_path == result.path
        assert not viz.is_running

    def test_partial_reveal_follows_trace(self, viz, clock) -> None:
        viz.run_search()
        result = viz.recorder.result

        clock.advance(35)
        viz.tick()

        visited, on_path = revealed(viz)
        assert set(visited) == set(result.visited[:4])
        assert on_path == []

    def test_live_grid_keeps_no_search_scratch(self, viz) -> None:
        viz.run_search()
        viz.finish()
        assert all(c.distance == INF and c.predecessor is None for c in viz.grid.cells)

    def test_new_run_clears_previous_reveals(self, viz) -> None:
        viz.run_search("dijkstra")
        viz.finish()

        viz.run_search("astar")
        viz.finish()

        visited, _ = revealed(viz)
        assert set(visited) == set(viz.recorder.result.visited)
        assert len(visited) == 7

    def test_unreachable_end_releases_gate_after_visited(self, viz) -> None:
        for row in range(5):
            viz.grid.toggle_wall(row, 3)
        viz.run_search()
        result = viz.recorder.result

        assert result.path == []
        viz.tick((len(result.visited) - 1) * 10)
        assert not viz.is_running
        assert viz.last_metrics.path_found is False


class TestResetAndClear:
    """Board commands between runs."""

    def test_reset_after_run(self, viz) -> None:
        viz.grid.toggle_wall(0, 3)
        viz.run_search()
        viz.finish()

        assert viz.reset()
        once = viz.grid.display()
        assert viz.reset()

        assert viz.grid.display() == once
        assert revealed(viz) == ([], [])
        assert viz.grid.walls() == {(0, 3)}

    def test_clear_after_run(self, viz) -> None:
        viz.grid.toggle_wall(0, 3)
        viz.grid.move_start(1, 1)
        viz.run_search()
        viz.finish()

        assert viz.clear()

        assert viz.grid.walls() == set()
        assert viz.grid.start == (2, 0)
        assert revealed(viz) == ([], [])

    def test_stale_reveals_dropped_after_clear(self, viz) -> None:
        """A reveal queued before a clear never lands."""
        viz.run_search()
        viz.is_running = False   # simulate a host that force-stops the run
        viz.clear()

        viz.finish()

        assert revealed(viz) == ([], [])


class TestInteraction:
    """Pointer events are forwarded to the controller."""

    def test_draw_then_run_routes_around(self, viz) -> None:
        viz.press(1, 3)
        for row in (2, 3, 4):
            viz.enter(row, 3)
        viz.release()

        assert viz.controller.state == ControllerState.IDLE
        viz.run_search()
        assert (0, 3) in viz.recorder.result.path

    def test_release_during_run_ends_the_stroke(self, viz) -> None:
        """Pointer up while animating: later hovers paint nothing."""
        viz.press(0, 3)
        viz.run_search()
        assert viz.release()
        viz.finish()

        assert not viz.enter(4, 4)
        assert viz.controller.state == ControllerState.IDLE
        assert viz.grid.walls() == {(0, 3)}


class TestSettings:
    """Algorithm and speed selection."""

    def test_select_algorithm(self, viz) -> None:
        assert viz.select_algorithm("astar")
        viz.run_search()
        assert viz.recorder.result.algo_key == "astar"

    def test_select_unknown_algorithm(self, viz) -> None:
        with pytest.raises(ValueError):
            viz.select_algorithm("bfs")

    @pytest.mark.parametrize("value,expected", [
        ("turbo", 1), ("slow", 50), (25, 25), (500, 50), (0, 1),
    ])
    def test_set_speed(self, viz, value, expected) -> None:
        assert viz.set_speed(value)
        assert viz.config.visit_delay_ms == expected

    def test_unknown_preset(self, viz) -> None:
        with pytest.raises(ValueError):
            viz.set_speed("warp")


class TestCompare:
    """Side-by-side analytics."""

    def test_astar_explores_less(self) -> None:
        viz = Visualizer(VisualizerConfig())
        result = viz.compare()

        assert result.winner_nodes == "A* Search"
        assert result.winner_path == "tie"
        assert result.left.path_length == result.right.path_length == 41
        assert not viz.is_running
        assert viz.last_metrics is None


class TestConfig:
    """VisualizerConfig validation and loading."""

    def test_defaults(self) -> None:
        cfg = VisualizerConfig()
        assert (cfg.rows, cfg.cols, cfg.start, cfg.end) == (20, 50, (10, 5), (10, 45))
        assert (cfg.visit_delay_ms, cfg.path_delay_ms, cfg.algorithm) == (10, 50, "dijkstra")

    def test_from_mapping(self) -> None:
        cfg = VisualizerConfig.from_mapping({
            "GRID_ROWS": 8, "GRID_COLS": 9, "START": [0, 0], "END": [7, 8],
            "ALGORITHM": "astar", "VISIT_DELAY_MS": 3,
        })
        assert (cfg.rows, cfg.cols, cfg.start, cfg.end) == (8, 9, (0, 0), (7, 8))
        assert cfg.algorithm == "astar"
        assert cfg.visit_delay_ms == 3
        assert cfg.path_delay_ms == 50

    @pytest.mark.parametrize("kwargs", [
        {"rows": 0},
        {"start": (10, 45)},
        {"end": (20, 0)},
        {"visit_delay_ms": -1},
        {"algorithm": "bfs"},
    ])
    def test_invalid(self, kwargs) -> None:
        with pytest.raises(ValueError):
            VisualizerConfig(**kwargs)
