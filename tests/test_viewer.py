import pygame
import pytest

from conftest import rows_to_grid
from mazepath.app.viewer import Playback, Viewer
from mazepath.core.heuristics import euclidean, manhattan


def _grid(move=4):
    return rows_to_grid([
        "S..#",
        ".#..",
        "...G",
    ], move=move)


def test_playback_replays_finalize_order():
    pb = Playback(_grid(), manhattan)
    assert pb.status == "idle"
    assert pb.closed == []
    statuses = []
    while pb.status not in ("done", "no_path"):
        statuses.append(pb.step())
    assert statuses[-1] == "done"
    assert pb.closed == pb.order
    assert pb.path[0] == (0, 0) and pb.path[-1] == (3, 2)
    assert pb.metrics()["path_len"] == 6
    # stepping past the end is a no-op
    assert pb.step() == "done"


def test_playback_unreachable():
    pb = Playback(rows_to_grid(["S#G"]))
    assert pb.step() == "no_path"
    assert pb.path == []


def test_playback_configure_switches_algorithm():
    pb = Playback(_grid())
    assert pb.name == "Dijkstra"
    pb.step()
    pb.configure(heuristic=euclidean)
    assert pb.name == "A* (euclidian)"
    assert pb.closed == []
    pb.configure(grid=_grid(move=8), heuristic=None)
    assert pb.grid.move == 8


@pytest.fixture
def viewer():
    v = Viewer(_grid(), None)
    yield v
    pygame.quit()


def test_viewer_steps_and_draws(viewer):
    viewer._do_step()
    assert viewer.state == "Paused"
    assert len(viewer.playback.closed) == 1
    viewer._draw()
    while viewer.state != "Done":
        viewer._do_step()
    assert viewer.playback.path
    viewer._draw()


def test_viewer_toggles(viewer):
    viewer._switch_heuristic(manhattan)
    assert viewer.playback.heuristic is manhattan
    assert viewer.btn_algo_a.active
    viewer._cycle_heuristic()
    assert viewer.playback.heuristic is euclidean
    viewer._toggle_diagonals()
    assert viewer.grid.move == 8
    assert viewer.btn_diag.active
    viewer._switch_heuristic(None)
    assert viewer.btn_algo_d.active
    viewer._bump_speed(1000)
    assert viewer.steps_per_sec == 240
